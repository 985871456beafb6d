# pdv/schemas/cash.py
from pydantic import BaseModel, Field
from typing import Dict, List, Optional
from decimal import Decimal
from datetime import date, datetime

from pdv.models.cash import CashRegisterStatus
from pdv.schemas.sales import SaleRead

class CashRegisterOpen(BaseModel):
    opening_amount: Decimal = Field(default=Decimal("0.00"), ge=0)

class CashRegisterClose(BaseModel):
    # Sem valor informado, fecha com abertura + vendas
    closing_amount: Optional[Decimal] = Field(default=None, ge=0)

class CashRegisterRead(BaseModel):
    id: int
    date: date
    employee_id: int
    employee_name: str
    status: CashRegisterStatus
    opened_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None

    opening_amount: Decimal
    closing_amount: Optional[Decimal] = None
    difference: Optional[Decimal] = None
    total_sales: Decimal
    total_payments: Dict[str, Decimal]
    sales: List[SaleRead] = []

    class Config:
        from_attributes = True

class CashAmount(BaseModel):
    date: date
    amount: Decimal

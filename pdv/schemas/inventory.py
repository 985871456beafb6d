from pydantic import BaseModel, Field
from typing import Optional
from decimal import Decimal
from datetime import datetime

from pdv.models.inventory import MovementType

# Entrada para registrar uma movimentação
class StockMovementCreate(BaseModel):
    product_id: int
    type: MovementType
    quantity: int = Field(ge=0)  # Para "adjustment" é o novo estoque
    unit_price: Optional[Decimal] = None
    reason: str                  # "Compra", "Perda", "Venda realizada no PDV"
    reference: Optional[str] = None
    notes: Optional[str] = None
    date: Optional[datetime] = None

# Saída do kardex
class StockMovementRead(BaseModel):
    id: int
    product_id: int
    type: MovementType
    quantity: int
    previous_stock: int
    new_stock: int
    unit_price: Optional[Decimal] = None
    total_value: Decimal
    reason: str
    reference: Optional[str] = None
    notes: Optional[str] = None
    responsible_user_id: Optional[int] = None
    date: datetime

    class Config:
        from_attributes = True

from pydantic import BaseModel, EmailStr
from typing import Optional
from decimal import Decimal
from datetime import datetime

# --- Base ---

class CustomerBase(BaseModel):
    name: str
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None

class CustomerCreate(CustomerBase):
    pass

class CustomerRead(CustomerBase):
    id: int
    is_active: bool = True
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

# --- Histórico do cliente ---

class CustomerPurchase(BaseModel):
    id: int
    date: datetime
    service: str
    amount: Decimal
    status: str = "Concluído"

class CustomerServiceRecord(BaseModel):
    id: str
    date: datetime
    type: str
    description: str
    status: str = "Concluído"

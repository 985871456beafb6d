from typing import Optional
from pydantic import BaseModel, Field
from decimal import Decimal

class ServiceBase(BaseModel):
    name: str
    price: Decimal = Field(gt=0)
    category: Optional[str] = None
    duration: Optional[int] = None  # minutos
    description: Optional[str] = None

class ServiceCreate(ServiceBase):
    pass

class ServiceUpdate(BaseModel):
    name: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, gt=0)
    category: Optional[str] = None
    duration: Optional[int] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None

class ServiceRead(ServiceBase):
    id: int
    is_active: bool = True

    class Config:
        from_attributes = True

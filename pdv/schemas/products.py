from typing import Optional
from pydantic import BaseModel, Field
from decimal import Decimal
from datetime import datetime

from pdv.models.products import ProductStatus

# --- Produto (entrada) ---
class ProductCreate(BaseModel):
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    sku: str
    barcode: Optional[str] = None
    unit: str = "unit"

    # Estoque inicial; entra no kardex como movimentação "in"
    initial_stock: int = Field(default=0, ge=0)
    min_stock: int = 0
    max_stock: int = 0

    unit_price: Decimal
    cost_price: Decimal = Decimal("0.00")
    supplier: Optional[str] = None
    status: ProductStatus = ProductStatus.ACTIVE

# --- Produto (saída) ---
class ProductRead(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    sku: str
    barcode: Optional[str] = None
    unit: str
    current_stock: int
    min_stock: int
    max_stock: int
    unit_price: Decimal
    cost_price: Decimal
    supplier: Optional[str] = None
    status: ProductStatus
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

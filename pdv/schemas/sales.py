from pydantic import BaseModel, Field
from typing import List, Optional
from decimal import Decimal
from datetime import datetime

from pdv.models.sales import ItemType, PaymentMethod, SaleStatus

# --- Carrinho ---

class CatalogEntry(BaseModel):
    """Produto ou serviço como o carrinho enxerga: preço e estoque atual."""
    id: int
    name: str
    price: Decimal
    stock: Optional[int] = None  # None para serviços

    @classmethod
    def from_product(cls, product):
        return cls(id=product.id, name=product.name, price=product.unit_price,
                   stock=product.current_stock)

    @classmethod
    def from_service(cls, service):
        return cls(id=service.id, name=service.name, price=service.price)

class CartItem(BaseModel):
    id: int
    type: ItemType
    name: str
    price: Decimal
    quantity: int
    subtotal: Decimal

class CartTotals(BaseModel):
    subtotal: Decimal
    discount: Decimal
    total: Decimal

class CartRead(CartTotals):
    items: List[CartItem] = []
    customer_id: Optional[int] = None
    customer_name: Optional[str] = None
    payment_method: PaymentMethod
    installments: Optional[int] = None

class CartItemAdd(BaseModel):
    id: int
    type: ItemType

class QuantityUpdate(BaseModel):
    delta: int

class DiscountUpdate(BaseModel):
    discount: Decimal = Decimal("0.00")

class CustomerSelect(BaseModel):
    customer_id: Optional[int] = None

class PaymentSelect(BaseModel):
    method: PaymentMethod
    installments: Optional[int] = Field(default=None, ge=1)

# --- Venda direta (sem sessão de carrinho) ---

class SaleItemCreate(BaseModel):
    id: int
    type: ItemType
    quantity: int = Field(default=1, ge=1)

class SaleCreate(BaseModel):
    items: List[SaleItemCreate]
    payment_method: PaymentMethod
    installments: Optional[int] = Field(default=None, ge=1)
    discount: Decimal = Decimal("0.00")
    customer_id: Optional[int] = None

# --- Leitura ---

class SaleItemRead(BaseModel):
    item_id: int
    item_type: ItemType
    name: str
    price: Decimal
    quantity: int
    subtotal: Decimal

    class Config:
        from_attributes = True

class PaymentRead(BaseModel):
    method: PaymentMethod
    amount: Decimal
    installments: Optional[int] = None

class SaleRead(BaseModel):
    id: int
    date: datetime
    items: List[SaleItemRead] = []
    subtotal: Decimal
    discount: Optional[Decimal] = None
    total: Decimal
    payment: PaymentRead
    customer_id: Optional[int] = None
    customer_name: Optional[str] = None
    employee_id: int
    employee_name: str
    status: SaleStatus

    class Config:
        from_attributes = True

class CheckoutResponse(BaseModel):
    status: str = "success"
    message: str = "Venda realizada com sucesso!"
    sale: SaleRead
    register_id: int
    register_total_sales: Decimal

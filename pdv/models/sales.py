import enum
from datetime import datetime
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Enum, Numeric
from sqlalchemy.orm import relationship
from pdv.database import Base

# --- Enums ---
class PaymentMethod(str, enum.Enum):
    PIX = "pix"
    DEBITO = "debito"
    CREDITO = "credito"
    DINHEIRO = "dinheiro"

class SaleStatus(str, enum.Enum):
    COMPLETED = "completed"
    CANCELLED = "cancelled"

class ItemType(str, enum.Enum):
    PRODUCT = "product"
    SERVICE = "service"

# --- Cabeçalho da venda ---
class Sale(Base):
    """
    Venda registrada no PDV. Imutável depois de criada;
    só o status pode passar para CANCELLED.
    """
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, index=True)
    date = Column(DateTime, default=datetime.now, nullable=False, index=True)

    subtotal = Column(Numeric(10, 2), nullable=False)
    discount = Column(Numeric(10, 2), nullable=True)  # Só gravado quando > 0
    total = Column(Numeric(10, 2), nullable=False)

    # Pagamento (um método por venda)
    payment_method = Column(Enum(PaymentMethod), nullable=False)
    payment_amount = Column(Numeric(10, 2), nullable=False)
    installments = Column(Integer, nullable=True)  # Parcelas no crédito

    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=True)
    customer_name = Column(String, nullable=True)
    employee_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    employee_name = Column(String, nullable=False)

    status = Column(Enum(SaleStatus), default=SaleStatus.COMPLETED, nullable=False)

    # Relações
    customer = relationship("Customer", back_populates="sales")
    employee = relationship("User")
    items = relationship("SaleItem", back_populates="sale", cascade="all, delete-orphan",
                         order_by="SaleItem.id")

    @property
    def payment(self):
        return {
            "method": self.payment_method,
            "amount": self.payment_amount,
            "installments": self.installments,
        }

# --- Itens da venda (cópia do carrinho, não referência viva) ---
class SaleItem(Base):
    __tablename__ = "sale_items"

    id = Column(Integer, primary_key=True, index=True)
    sale_id = Column(Integer, ForeignKey("sales.id"), nullable=False)

    item_id = Column(Integer, nullable=False)  # id do produto ou serviço
    item_type = Column(Enum(ItemType), nullable=False)
    name = Column(String, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False)
    subtotal = Column(Numeric(10, 2), nullable=False)

    sale = relationship("Sale", back_populates="items")

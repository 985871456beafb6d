import enum
from datetime import datetime
from sqlalchemy import Column, Integer, String, ForeignKey, Enum, Numeric, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from pdv.database import Base

class MovementType(str, enum.Enum):
    IN = "in"                  # Entrada (compra)
    OUT = "out"                # Saída (venda)
    ADJUSTMENT = "adjustment"  # Ajuste: quantity passa a ser o estoque
    LOSS = "loss"              # Perda
    TRANSFER = "transfer"

class StockMovement(Base):
    """
    Kardex do produto.
    previous_stock/new_stock registram o saldo antes e depois do movimento.
    """
    __tablename__ = "stock_movements"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    responsible_user_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    type = Column(Enum(MovementType), nullable=False)
    quantity = Column(Integer, nullable=False)
    previous_stock = Column(Integer, nullable=False)
    new_stock = Column(Integer, nullable=False)

    unit_price = Column(Numeric(10, 2), nullable=True)
    total_value = Column(Numeric(10, 2), default=0.00)

    reason = Column(String, nullable=False)
    reference = Column(String, nullable=True)  # Ex: "Venda #12"
    notes = Column(String, nullable=True)

    date = Column(DateTime, default=datetime.now, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    product = relationship("Product", back_populates="movements")
    responsible_user = relationship("User")

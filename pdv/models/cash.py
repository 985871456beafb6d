# pdv/models/cash.py
import enum
from datetime import datetime
from decimal import Decimal
from sqlalchemy import (
    Column, Integer, String, Date, DateTime, Numeric, ForeignKey, Enum, UniqueConstraint
)
from sqlalchemy.orm import relationship
from pdv.database import Base
from pdv.models.sales import PaymentMethod

class CashRegisterStatus(str, enum.Enum):
    OPEN = "open"
    CLOSED = "closed"

# Coluna de total acumulado por forma de pagamento
PAYMENT_TOTAL_COLUMNS = {
    PaymentMethod.PIX: "total_pix",
    PaymentMethod.DEBITO: "total_debito",
    PaymentMethod.CREDITO: "total_credito",
    PaymentMethod.DINHEIRO: "total_dinheiro",
}

class CashRegister(Base):
    """Caixa do dia: um por funcionário por data."""
    __tablename__ = "cash_registers"
    __table_args__ = (
        UniqueConstraint("employee_id", "business_date", name="uq_cash_register_employee_day"),
    )

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    employee_name = Column(String, nullable=False)
    business_date = Column(Date, nullable=False, index=True)

    # Tempos de operação
    opened_at = Column(DateTime, default=datetime.now)
    closed_at = Column(DateTime, nullable=True)

    # Valores
    opening_amount = Column(Numeric(10, 2), default=Decimal("0.00"), nullable=False)
    closing_amount = Column(Numeric(10, 2), nullable=True)
    difference = Column(Numeric(10, 2), nullable=True)  # Sobra ou falta no fechamento

    total_sales = Column(Numeric(10, 2), default=Decimal("0.00"), nullable=False)
    total_pix = Column(Numeric(10, 2), default=Decimal("0.00"), nullable=False)
    total_debito = Column(Numeric(10, 2), default=Decimal("0.00"), nullable=False)
    total_credito = Column(Numeric(10, 2), default=Decimal("0.00"), nullable=False)
    total_dinheiro = Column(Numeric(10, 2), default=Decimal("0.00"), nullable=False)

    status = Column(Enum(CashRegisterStatus), default=CashRegisterStatus.OPEN, nullable=False)

    # Relações
    employee = relationship("User")
    entries = relationship("CashRegisterEntry", back_populates="register",
                           cascade="all, delete-orphan", order_by="CashRegisterEntry.id")

    @property
    def date(self):
        return self.business_date

    @property
    def total_payments(self):
        return {
            method.value: getattr(self, column) or Decimal("0.00")
            for method, column in PAYMENT_TOTAL_COLUMNS.items()
        }

    @property
    def sales(self):
        return [entry.sale for entry in self.entries]

    @property
    def expected_amount(self):
        return (self.opening_amount or Decimal("0.00")) + (self.total_sales or Decimal("0.00"))

class CashRegisterEntry(Base):
    """
    Venda lançada no caixa. Guarda cópia do total e da forma de pagamento
    no momento do lançamento; a sequência só recebe inserções,
    na ordem do id.
    """
    __tablename__ = "cash_register_entries"

    id = Column(Integer, primary_key=True, index=True)
    register_id = Column(Integer, ForeignKey("cash_registers.id"), nullable=False, index=True)
    sale_id = Column(Integer, ForeignKey("sales.id"), nullable=False)

    total = Column(Numeric(10, 2), nullable=False)
    payment_method = Column(Enum(PaymentMethod), nullable=False)
    sale_date = Column(DateTime, nullable=False)
    created_at = Column(DateTime, default=datetime.now)

    register = relationship("CashRegister", back_populates="entries")
    sale = relationship("Sale")

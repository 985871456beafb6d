# pdv/models/products.py
import enum
from sqlalchemy import Column, Integer, String, Numeric, Enum, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from pdv.database import Base

class ProductStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    DISCONTINUED = "discontinued"

class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, index=True, nullable=False)
    description = Column(String, nullable=True)
    category = Column(String, nullable=True)

    sku = Column(String, unique=True, index=True)
    barcode = Column(String, index=True, nullable=True)
    unit = Column(String, default="unit") # unit, kg, l, m, box, pack

    # Só as movimentações de estoque alteram current_stock
    current_stock = Column(Integer, default=0, nullable=False)
    min_stock = Column(Integer, default=0)
    max_stock = Column(Integer, default=0)

    unit_price = Column(Numeric(10, 2), nullable=False)  # Preço de venda
    cost_price = Column(Numeric(10, 2), default=0.00)    # Custo

    supplier = Column(String, nullable=True)
    status = Column(Enum(ProductStatus), default=ProductStatus.ACTIVE, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    movements = relationship("StockMovement", back_populates="product")

# pdv/models/__init__.py

# 1. Base declarativa
from pdv.database import Base

# 2. Funcionários
from .users import User, Role

# 3. Estoque
from .products import Product, ProductStatus
from .inventory import StockMovement, MovementType

# 4. Catálogo de serviços
from .catalog import Service

# 5. Clientes
from .customers import Customer

# 6. Vendas e caixa
from .sales import Sale, SaleItem, SaleStatus, PaymentMethod, ItemType
from .cash import CashRegister, CashRegisterEntry, CashRegisterStatus, PAYMENT_TOTAL_COLUMNS

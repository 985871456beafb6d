# pdv/routers/__init__.py

# Expõe os módulos para que "from pdv.routers import sales" funcione
from . import auth
from . import products
from . import inventory
from . import catalog
from . import customers
from . import pos
from . import sales
from . import cash
from . import reports

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pdv.config import settings
from pdv.database import engine
from pdv.exceptions import PDVError
from pdv.models import Base
from pdv.routers import (
    auth, products, inventory, catalog, customers,
    pos, sales, cash, reports,
)

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # 1. Criação automática das tabelas
    Base.metadata.create_all(bind=engine)
    logger.info("Banco pronto em %s", engine.url.render_as_string(hide_password=True))
    yield

app = FastAPI(
    title="PDV Caixa",
    description="Ponto de venda: carrinho, vendas, baixa de estoque e caixa do dia",
    version="1.0.0",
    lifespan=lifespan,
)

# 2. CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 3. Routers
app.include_router(auth.router, prefix="/api/auth", tags=["Autenticação"])
app.include_router(products.router, prefix="/api/products", tags=["Produtos"])
app.include_router(inventory.router, prefix="/api/inventory", tags=["Estoque"])
app.include_router(catalog.router, prefix="/api/services", tags=["Serviços"])
app.include_router(customers.router, prefix="/api/customers", tags=["Clientes"])
app.include_router(pos.router, prefix="/api/pos", tags=["PDV"])
app.include_router(sales.router, prefix="/api/sales", tags=["Vendas"])
app.include_router(cash.router, prefix="/api/cash", tags=["Caixa"])
app.include_router(reports.router, prefix="/api/reports", tags=["Relatórios"])

# 4. Erros de negócio
@app.exception_handler(PDVError)
async def pdv_error_handler(request: Request, exc: PDVError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

@app.exception_handler(404)
async def not_found_exception_handler(request: Request, exc):
    detail = getattr(exc, "detail", None) or "Recurso não encontrado"
    return JSONResponse(status_code=404, content={"detail": detail})

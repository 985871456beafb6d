# pdv/routers/inventory.py
from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pdv.crud import inventory as inventory_crud
from pdv.database import get_db
from pdv.models import User
from pdv.schemas.inventory import StockMovementCreate, StockMovementRead
from pdv.security import get_current_user

router = APIRouter()

@router.post("/movements", response_model=StockMovementRead)
def create_movement(
    movement_in: StockMovementCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Entradas (compras), perdas e ajustes manuais de estoque."""
    return inventory_crud.create_stock_movement(db, movement_in, user=current_user)

@router.get("/movements", response_model=List[StockMovementRead])
def list_movements(
    product_id: Optional[int] = None,
    limit: int = 100,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Kardex: movimentações mais recentes primeiro."""
    return inventory_crud.get_stock_movements(db, product_id=product_id, limit=limit)

# pdv/routers/products.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from pdv.crud import inventory as inventory_crud
from pdv.database import get_db
from pdv.models import User
from pdv.schemas.products import ProductCreate, ProductRead
from pdv.security import get_current_user

router = APIRouter()

@router.get("/", response_model=List[ProductRead])
def list_products(
    active_only: bool = False,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if active_only:
        return inventory_crud.get_active_products(db)
    return inventory_crud.get_all_products(db)

@router.get("/{product_id}", response_model=ProductRead)
def read_product(
    product_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    product = inventory_crud.get_product(db, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Produto não encontrado")
    return product

@router.post("/", response_model=ProductRead)
def create_product(
    product_in: ProductCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if inventory_crud.get_product_by_sku(db, product_in.sku):
        raise HTTPException(status_code=400, detail=f"O SKU {product_in.sku} já está cadastrado")
    return inventory_crud.create_product(db, product_in, user=current_user)

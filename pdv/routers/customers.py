# pdv/routers/customers.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional

from pdv.crud import customers as customers_crud
from pdv.crud import reports as reports_crud
from pdv.database import get_db
from pdv.models import User
from pdv.schemas.customers import (
    CustomerCreate, CustomerPurchase, CustomerRead, CustomerServiceRecord,
)
from pdv.security import get_current_user

router = APIRouter()

@router.get("/", response_model=List[CustomerRead])
def list_customers(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return customers_crud.get_active_customers(db)

# --------------------------------------------------------------------------
# 1. BUSCA (seleção de cliente no PDV)
# --------------------------------------------------------------------------
@router.get("/search", response_model=List[CustomerRead])
def search_customers(
    term: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return customers_crud.search_customers(db, term)

# --------------------------------------------------------------------------
# 2. CRIAR CLIENTE
# --------------------------------------------------------------------------
@router.post("/", response_model=CustomerRead)
def create_customer(
    customer_in: CustomerCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return customers_crud.create_customer(db, customer_in)

# --------------------------------------------------------------------------
# 3. DETALHE E HISTÓRICO
# --------------------------------------------------------------------------
def _get_customer_or_404(db: Session, customer_id: int):
    customer = customers_crud.get_customer(db, customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Cliente não encontrado")
    return customer

@router.get("/{customer_id}", response_model=CustomerRead)
def read_customer(
    customer_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return _get_customer_or_404(db, customer_id)

@router.get("/{customer_id}/purchases", response_model=List[CustomerPurchase])
def read_customer_purchases(
    customer_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    _get_customer_or_404(db, customer_id)
    return reports_crud.get_customer_purchases(db, customer_id)

@router.get("/{customer_id}/services", response_model=List[CustomerServiceRecord])
def read_customer_services(
    customer_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    _get_customer_or_404(db, customer_id)
    return reports_crud.get_customer_services(db, customer_id)

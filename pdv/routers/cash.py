# pdv/routers/cash.py
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from pdv.crud import cash as cash_crud
from pdv.database import get_db
from pdv.models import User
from pdv.schemas.cash import CashAmount, CashRegisterClose, CashRegisterOpen, CashRegisterRead
from pdv.security import get_current_user

router = APIRouter()

@router.get("/today", response_model=CashRegisterRead)
def get_today_register(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Caixa de hoje do operador; abre com valor zero no primeiro acesso do dia."""
    return cash_crud.get_or_create_today_register(db, current_user)

@router.post("/open", response_model=CashRegisterRead)
def open_register(
    register_in: CashRegisterOpen,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return cash_crud.open_register(db, current_user, register_in.opening_amount)

@router.post("/{register_id}/close", response_model=CashRegisterRead)
def close_register(
    register_id: int,
    close_data: CashRegisterClose,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    register = cash_crud.get_register(db, register_id)
    if not register:
        raise HTTPException(404, "Caixa não encontrado")
    if register.employee_id != current_user.id:
        raise HTTPException(403, "Este caixa pertence a outro funcionário")
    return cash_crud.close_register(db, register_id, close_data.closing_amount)

@router.get("/by-date", response_model=Optional[CashRegisterRead])
def get_register_by_date(
    day: date,
    employee_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return cash_crud.get_register_by_date(db, day, employee_id)

@router.get("/amount", response_model=CashAmount)
def get_cash_amount(
    day: Optional[date] = None,
    employee_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Valor do caixa na data: fechamento se fechado, abertura + vendas se aberto."""
    day = day or date.today()
    return CashAmount(date=day, amount=cash_crud.get_cash_amount_by_date(db, day, employee_id))

# pdv/routers/sales.py
from datetime import date, datetime, time, timedelta
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from pdv.crud import cash as cash_crud
from pdv.crud.customers import get_customer
from pdv.crud.sales import cart_from_items, commit_sale, get_sale, get_sales
from pdv.database import get_db
from pdv.exceptions import EmptyCartError, NotFoundError
from pdv.models import User
from pdv.schemas.sales import CheckoutResponse, SaleCreate, SaleRead
from pdv.security import get_current_user

router = APIRouter()

@router.post("/", response_model=CheckoutResponse)
def create_sale(
    sale_in: SaleCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Registra uma venda enviada de uma vez (sem carrinho no servidor).
    Preços e estoque são lidos do banco, nunca do corpo da requisição.
    """
    if not sale_in.items:
        raise EmptyCartError()

    customer = None
    if sale_in.customer_id is not None:
        customer = get_customer(db, sale_in.customer_id)
        if not customer:
            raise NotFoundError("Cliente não encontrado")

    cart = cart_from_items(db, sale_in.items)
    sale = commit_sale(
        db,
        cart,
        sale_in.payment_method,
        current_user,
        customer=customer,
        discount=sale_in.discount,
        installments=sale_in.installments,
    )

    register = cash_crud.get_register_for_sale(db, sale.id)
    return CheckoutResponse(
        sale=SaleRead.model_validate(sale),
        register_id=register.id,
        register_total_sales=register.total_sales,
    )

@router.get("/", response_model=List[SaleRead])
def list_sales(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    employee_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Histórico de vendas; as datas são inclusivas."""
    start = datetime.combine(start_date, time.min) if start_date else None
    end = datetime.combine(end_date + timedelta(days=1), time.min) if end_date else None
    return get_sales(db, start=start, end=end, employee_id=employee_id)

@router.get("/{sale_id}", response_model=SaleRead)
def read_sale(
    sale_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    sale = get_sale(db, sale_id)
    if not sale:
        raise HTTPException(status_code=404, detail="Venda não encontrada")
    return sale

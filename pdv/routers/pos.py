# pdv/routers/pos.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pdv.cart import CartStore, PosSession
from pdv.config import settings
from pdv.crud import cash as cash_crud
from pdv.crud.customers import get_customer
from pdv.crud.sales import commit_sale, get_catalog_entry
from pdv.database import get_db
from pdv.exceptions import NotFoundError
from pdv.models import ItemType, User
from pdv.schemas.sales import (
    CartItemAdd, CartRead, CheckoutResponse, CustomerSelect, DiscountUpdate,
    PaymentSelect, QuantityUpdate, SaleRead,
)
from pdv.security import get_current_user

router = APIRouter()

cart_store = CartStore(settings.default_payment_method)

def get_cart_store() -> CartStore:
    return cart_store

def get_pos_session(
    current_user: User = Depends(get_current_user),
    store: CartStore = Depends(get_cart_store),
) -> PosSession:
    return store.get(current_user.id)

def _cart_read(session: PosSession) -> CartRead:
    totals = session.cart.totals()
    return CartRead(
        items=session.cart.snapshot(),
        subtotal=totals.subtotal,
        discount=totals.discount,
        total=totals.total,
        customer_id=session.customer_id,
        customer_name=session.customer_name,
        payment_method=session.payment_method,
        installments=session.installments,
    )


# Todo acesso à sessão do operador passa por session.lock

@router.get("/cart", response_model=CartRead)
def read_cart(session: PosSession = Depends(get_pos_session)):
    with session.lock:
        return _cart_read(session)

@router.post("/cart/items", response_model=CartRead)
def add_cart_item(
    item_in: CartItemAdd,
    db: Session = Depends(get_db),
    session: PosSession = Depends(get_pos_session),
):
    """Adiciona uma unidade do produto/serviço, checando o estoque atual."""
    entry = get_catalog_entry(db, item_in.id, item_in.type)
    with session.lock:
        session.cart.add_item(entry, item_in.type)
        return _cart_read(session)

@router.patch("/cart/items/{item_type}/{item_id}", response_model=CartRead)
def update_cart_item(
    item_type: ItemType,
    item_id: int,
    update: QuantityUpdate,
    db: Session = Depends(get_db),
    session: PosSession = Depends(get_pos_session),
):
    stock = None
    if item_type == ItemType.PRODUCT and update.delta > 0:
        stock = get_catalog_entry(db, item_id, item_type).stock
    with session.lock:
        session.cart.update_quantity(item_id, item_type, update.delta, stock=stock)
        return _cart_read(session)

@router.delete("/cart/items/{item_type}/{item_id}", response_model=CartRead)
def remove_cart_item(item_type: ItemType, item_id: int, session: PosSession = Depends(get_pos_session)):
    with session.lock:
        session.cart.remove_item(item_id, item_type)
        return _cart_read(session)

@router.delete("/cart", response_model=CartRead)
def clear_cart(session: PosSession = Depends(get_pos_session)):
    with session.lock:
        session.reset()
        return _cart_read(session)

@router.put("/cart/discount", response_model=CartRead)
def set_cart_discount(update: DiscountUpdate, session: PosSession = Depends(get_pos_session)):
    with session.lock:
        session.cart.set_discount(update.discount)
        return _cart_read(session)

@router.put("/cart/customer", response_model=CartRead)
def set_cart_customer(
    selection: CustomerSelect,
    db: Session = Depends(get_db),
    session: PosSession = Depends(get_pos_session),
):
    customer = None
    if selection.customer_id is not None:
        customer = get_customer(db, selection.customer_id)
        if not customer:
            raise NotFoundError("Cliente não encontrado")

    with session.lock:
        session.customer_id = customer.id if customer else None
        session.customer_name = customer.name if customer else None
        return _cart_read(session)

@router.put("/cart/payment", response_model=CartRead)
def set_cart_payment(selection: PaymentSelect, session: PosSession = Depends(get_pos_session)):
    with session.lock:
        session.payment_method = selection.method
        session.installments = selection.installments
        return _cart_read(session)

@router.post("/checkout", response_model=CheckoutResponse)
def checkout(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    session: PosSession = Depends(get_pos_session),
):
    """
    Finaliza a venda do carrinho do operador. Em caso de erro o carrinho
    fica como estava; em caso de sucesso é zerado.
    """
    def commit(pos: PosSession):
        customer = get_customer(db, pos.customer_id) if pos.customer_id else None
        return commit_sale(
            db,
            pos.cart,
            pos.payment_method,
            current_user,
            customer=customer,
            installments=pos.installments,
        )

    sale = session.checkout(commit)

    register = cash_crud.get_register_for_sale(db, sale.id)
    return CheckoutResponse(
        sale=SaleRead.model_validate(sale),
        register_id=register.id,
        register_total_sales=register.total_sales,
    )

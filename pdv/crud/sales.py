import logging
from datetime import date, datetime
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from pdv.cart import Cart
from pdv.crud import cash as cash_crud
from pdv.crud import inventory as inventory_crud
from pdv.exceptions import (
    EmptyCartError, InvalidDiscountError, InvalidTotalError, MissingOperatorError,
    NotFoundError, PDVError, RegisterClosedError,
)
from pdv.models import (
    CashRegisterStatus, Customer, ItemType, MovementType, PaymentMethod, Product,
    ProductStatus, Sale, SaleItem, SaleStatus, Service, User,
)
from pdv.schemas.inventory import StockMovementCreate
from pdv.schemas.sales import CatalogEntry, SaleItemCreate
from pdv.utils.money import to_money

logger = logging.getLogger(__name__)

SALE_STOCK_REASON = "Venda realizada no PDV"


def get_catalog_entry(db: Session, item_id: int, item_type: ItemType) -> CatalogEntry:
    """Produto ou serviço com preço e estoque lidos agora do banco."""
    if ItemType(item_type) == ItemType.PRODUCT:
        product = db.query(Product).filter(Product.id == item_id).first()
        if not product or product.status != ProductStatus.ACTIVE:
            raise NotFoundError("Produto não encontrado")
        return CatalogEntry.from_product(product)

    service = db.query(Service).filter(Service.id == item_id).first()
    if not service or not service.is_active:
        raise NotFoundError("Serviço não encontrado")
    return CatalogEntry.from_service(service)


def cart_from_items(db: Session, items: Iterable[SaleItemCreate]) -> Cart:
    """Monta um carrinho a partir de uma lista enviada de uma vez só."""
    cart = Cart()
    for item in items:
        entry = get_catalog_entry(db, item.id, item.type)
        cart.add_item(entry, item.type)
        if item.quantity > 1:
            cart.update_quantity(item.id, item.type, item.quantity - 1, stock=entry.stock)
    return cart


def commit_sale(
    db: Session,
    cart: Cart,
    payment_method: PaymentMethod,
    employee: Optional[User],
    customer: Optional[Customer] = None,
    discount=None,
    installments: Optional[int] = None,
    today: Optional[date] = None,
) -> Sale:
    """
    Finaliza a venda do carrinho.

    Venda, baixa de estoque dos produtos e lançamento no caixa do dia vão
    numa única transação: se qualquer passo falha, nada fica gravado.
    Sem desconto informado usa o desconto do carrinho.
    """
    # --- 1. Validações (antes de qualquer escrita) ---
    if employee is None:
        raise MissingOperatorError()
    if cart is None or cart.is_empty:
        raise EmptyCartError()

    subtotal = to_money(cart.subtotal)
    discount = to_money(cart.discount if discount is None else discount)
    if discount < 0 or discount > subtotal:
        raise InvalidDiscountError()

    total = subtotal - discount
    if total <= 0:
        raise InvalidTotalError()

    payment_method = PaymentMethod(payment_method)
    if payment_method != PaymentMethod.CREDITO:
        installments = None

    items = cart.snapshot()

    try:
        # --- 2. Caixa do dia ---
        register = cash_crud.get_or_create_today_register(db, employee, today=today, commit=False)
        if register.status == CashRegisterStatus.CLOSED:
            raise RegisterClosedError()

        # --- 3. Venda ---
        sale = Sale(
            date=datetime.now(),
            subtotal=subtotal,
            discount=discount if discount > 0 else None,
            total=total,
            payment_method=payment_method,
            payment_amount=total,
            installments=installments,
            customer_id=customer.id if customer else None,
            customer_name=customer.name if customer else None,
            employee_id=employee.id,
            employee_name=employee.display_name,
            status=SaleStatus.COMPLETED,
        )
        sale.items = [
            SaleItem(
                item_id=item.id,
                item_type=item.type,
                name=item.name,
                price=item.price,
                quantity=item.quantity,
                subtotal=item.subtotal,
            )
            for item in items
        ]
        db.add(sale)
        db.flush()  # Para obter o ID da venda

        # --- 4. Baixa de estoque ---
        for item in items:
            if item.type != ItemType.PRODUCT:
                continue
            inventory_crud.create_stock_movement(
                db,
                StockMovementCreate(
                    product_id=item.id,
                    type=MovementType.OUT,
                    quantity=item.quantity,
                    unit_price=item.price,
                    reason=SALE_STOCK_REASON,
                    reference=f"Venda #{sale.id}",
                    notes=f"Venda #{sale.id}",
                ),
                user=employee,
                commit=False,
            )

        # --- 5. Lançamento no caixa ---
        cash_crud.append_sale(db, register, sale)

        db.commit()
    except PDVError as exc:
        db.rollback()
        logger.warning("Venda recusada para %s: %s", employee.username, exc.detail)
        raise
    except Exception:
        db.rollback()
        logger.error("Erro ao finalizar venda de %s", employee.username, exc_info=True)
        raise

    db.refresh(sale)
    logger.info("Venda #%s registrada: %s via %s no caixa %s",
                sale.id, sale.total, payment_method.value, register.id)
    return sale


def get_sale(db: Session, sale_id: int) -> Optional[Sale]:
    return db.query(Sale).filter(Sale.id == sale_id).first()


def get_sales(
    db: Session,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    employee_id: Optional[int] = None,
    status: Optional[SaleStatus] = None,
) -> List[Sale]:
    """Vendas do período, mais recentes primeiro. `end` é exclusivo."""
    query = db.query(Sale)
    if employee_id is not None:
        query = query.filter(Sale.employee_id == employee_id)
    if start is not None:
        query = query.filter(Sale.date >= start)
    if end is not None:
        query = query.filter(Sale.date < end)
    if status is not None:
        query = query.filter(Sale.status == status)
    return query.order_by(Sale.date.desc(), Sale.id.desc()).all()

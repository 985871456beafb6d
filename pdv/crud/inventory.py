import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

from pdv.exceptions import NotFoundError, StockUnavailableError
from pdv.models import MovementType, Product, ProductStatus, StockMovement, User
from pdv.schemas.inventory import StockMovementCreate
from pdv.schemas.products import ProductCreate
from pdv.utils.money import to_money

logger = logging.getLogger(__name__)


def get_product(db: Session, product_id: int) -> Optional[Product]:
    return db.query(Product).filter(Product.id == product_id).first()


def get_product_by_sku(db: Session, sku: str) -> Optional[Product]:
    return db.query(Product).filter(Product.sku == sku).first()


def get_all_products(db: Session) -> List[Product]:
    return db.query(Product).order_by(Product.name).all()


def get_active_products(db: Session) -> List[Product]:
    return db.query(Product).filter(Product.status == ProductStatus.ACTIVE).order_by(Product.name).all()


def _next_stock(previous: int, movement_type: MovementType, quantity: int) -> int:
    if movement_type == MovementType.IN:
        return previous + quantity
    if movement_type == MovementType.ADJUSTMENT:
        return quantity
    # out, loss, transfer
    return previous - quantity


def create_stock_movement(
    db: Session,
    movement_in: StockMovementCreate,
    user: Optional[User] = None,
    commit: bool = True,
) -> StockMovement:
    """
    Registra a movimentação e atualiza o estoque do produto.
    Com commit=False só faz flush, para participar de uma transação maior
    (ex.: a venda do PDV).
    """
    # 1. Produto atual (bloqueado para escrita onde o banco suporta)
    product = db.query(Product).filter(Product.id == movement_in.product_id).with_for_update().first()
    if not product:
        raise NotFoundError("Produto não encontrado")

    # 2. Novo saldo
    previous_stock = product.current_stock or 0
    new_stock = _next_stock(previous_stock, movement_in.type, movement_in.quantity)
    if new_stock < 0:
        raise StockUnavailableError(
            f"Estoque não pode ficar negativo: {product.name}. Disponível: {previous_stock}"
        )

    unit_price = movement_in.unit_price
    base_price = unit_price if unit_price is not None else (product.cost_price or Decimal("0.00"))
    total_value = to_money(base_price) * movement_in.quantity

    # 3. Kardex
    movement = StockMovement(
        product_id=product.id,
        responsible_user_id=user.id if user else None,
        type=movement_in.type,
        quantity=movement_in.quantity,
        previous_stock=previous_stock,
        new_stock=new_stock,
        unit_price=unit_price,
        total_value=total_value,
        reason=movement_in.reason,
        reference=movement_in.reference,
        notes=movement_in.notes,
        date=movement_in.date or datetime.now(),
    )
    db.add(movement)

    # 4. Atualiza o estoque
    product.current_stock = new_stock

    if commit:
        db.commit()
        db.refresh(movement)
    else:
        db.flush()

    logger.info("Estoque %s: %s %s -> %s (%s)", product.sku, movement_in.type.value,
                previous_stock, new_stock, movement_in.reason)
    return movement


def get_stock_movements(db: Session, product_id: Optional[int] = None, limit: int = 100) -> List[StockMovement]:
    query = db.query(StockMovement)
    if product_id is not None:
        query = query.filter(StockMovement.product_id == product_id)
    return query.order_by(StockMovement.date.desc(), StockMovement.id.desc()).limit(limit).all()


def create_product(db: Session, product_in: ProductCreate, user: Optional[User] = None) -> Product:
    """
    Cria o produto com estoque zero; o estoque inicial entra como
    movimentação "in" para ficar no kardex.
    """
    db_product = Product(
        name=product_in.name,
        description=product_in.description,
        category=product_in.category,
        sku=product_in.sku,
        barcode=product_in.barcode,
        unit=product_in.unit,
        current_stock=0,
        min_stock=product_in.min_stock,
        max_stock=product_in.max_stock,
        unit_price=product_in.unit_price,
        cost_price=product_in.cost_price,
        supplier=product_in.supplier,
        status=product_in.status,
    )
    db.add(db_product)
    db.flush()  # Para obter o ID

    if product_in.initial_stock > 0:
        create_stock_movement(
            db,
            StockMovementCreate(
                product_id=db_product.id,
                type=MovementType.IN,
                quantity=product_in.initial_stock,
                unit_price=product_in.cost_price,
                reason="Estoque inicial",
            ),
            user=user,
            commit=False,
        )

    db.commit()
    db.refresh(db_product)
    return db_product

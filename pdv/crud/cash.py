"""
Caixa do dia.

Um caixa por funcionário por data (restrição única em employee_id +
business_date). A criação é um INSERT ... ON CONFLICT DO NOTHING, então
duas abas abrindo o PDV ao mesmo tempo ficam com o mesmo caixa. Lançamento
e fechamento são UPDATE condicionados a status = open: caixa fechado não
recebe mais vendas.
"""
import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pdv.exceptions import (
    NotFoundError, RegisterAlreadyOpenError, RegisterClosedError,
)
from pdv.models import (
    CashRegister, CashRegisterEntry, CashRegisterStatus, PaymentMethod,
    PAYMENT_TOTAL_COLUMNS, Sale, User,
)
from pdv.utils.money import to_money

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")

_DIALECT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def _insert_if_absent(db: Session, employee: User, business_date: date, opening_amount: Decimal) -> bool:
    """Cria o caixa do dia se ainda não existir. Retorna True se criou."""
    values = dict(
        employee_id=employee.id,
        employee_name=employee.display_name,
        business_date=business_date,
        opening_amount=opening_amount,
        opened_at=datetime.now(),
        status=CashRegisterStatus.OPEN,
    )
    insert = _DIALECT_INSERTS.get(db.get_bind().dialect.name)
    if insert is not None:
        stmt = insert(CashRegister).values(**values).on_conflict_do_nothing(
            index_elements=["employee_id", "business_date"]
        )
        return db.execute(stmt).rowcount == 1

    # Outros bancos: savepoint + restrição única
    try:
        with db.begin_nested():
            db.add(CashRegister(**values))
        return True
    except IntegrityError:
        return False


def get_register(db: Session, register_id: int) -> Optional[CashRegister]:
    return db.query(CashRegister).filter(CashRegister.id == register_id).first()


def get_today_register(db: Session, employee_id: int, today: Optional[date] = None) -> Optional[CashRegister]:
    today = today or date.today()
    return db.query(CashRegister).filter(
        CashRegister.employee_id == employee_id,
        CashRegister.business_date == today,
    ).first()


def get_register_by_date(db: Session, day: date, employee_id: Optional[int] = None) -> Optional[CashRegister]:
    """Caixa da data; sem funcionário, o aberto mais recentemente."""
    query = db.query(CashRegister).filter(CashRegister.business_date == day)
    if employee_id is not None:
        query = query.filter(CashRegister.employee_id == employee_id)
    return query.order_by(CashRegister.opened_at.desc(), CashRegister.id.desc()).first()


def get_or_create_today_register(
    db: Session,
    employee: User,
    today: Optional[date] = None,
    commit: bool = True,
) -> CashRegister:
    """Caixa de hoje do funcionário, aberto com valor zero se não existir."""
    today = today or date.today()
    created = _insert_if_absent(db, employee, today, ZERO)
    if commit:
        db.commit()
    else:
        db.flush()

    register = get_today_register(db, employee.id, today)
    if created:
        logger.info("Caixa %s aberto automaticamente para %s em %s", register.id, employee.username, today)
    return register


def open_register(
    db: Session,
    employee: User,
    opening_amount=ZERO,
    today: Optional[date] = None,
) -> CashRegister:
    today = today or date.today()
    opening_amount = to_money(opening_amount)

    if not _insert_if_absent(db, employee, today, opening_amount):
        db.rollback()
        existing = get_today_register(db, employee.id, today)
        if existing and existing.status == CashRegisterStatus.CLOSED:
            raise RegisterClosedError("O caixa de hoje já foi fechado")
        raise RegisterAlreadyOpenError()

    db.commit()
    register = get_today_register(db, employee.id, today)
    logger.info("Caixa %s aberto por %s com %s", register.id, employee.username, opening_amount)
    return register


def append_sale(db: Session, register: CashRegister, sale: Sale, commit: bool = False) -> CashRegister:
    """
    Lança a venda no caixa: soma em total_sales e no total da forma de
    pagamento da venda. As demais formas não mudam.
    """
    if register.status == CashRegisterStatus.CLOSED:
        raise RegisterClosedError()

    total = to_money(sale.total)
    column = PAYMENT_TOTAL_COLUMNS[PaymentMethod(sale.payment_method)]

    updated = db.query(CashRegister).filter(
        CashRegister.id == register.id,
        CashRegister.status == CashRegisterStatus.OPEN,
    ).update({
        CashRegister.total_sales: CashRegister.total_sales + total,
        getattr(CashRegister, column): getattr(CashRegister, column) + total,
    }, synchronize_session=False)
    if not updated:
        raise RegisterClosedError()

    register.entries.append(CashRegisterEntry(
        sale_id=sale.id,
        total=total,
        payment_method=sale.payment_method,
        sale_date=sale.date,
    ))

    if commit:
        db.commit()
    else:
        db.flush()
    db.refresh(register)
    return register


def close_register(db: Session, register_id: int, closing_amount=None) -> CashRegister:
    """
    Fecha o caixa. Sem valor informado, fecha com abertura + vendas.
    A diferença registra a sobra ou falta em relação ao esperado.
    """
    register = get_register(db, register_id)
    if not register:
        raise NotFoundError("Caixa não encontrado")
    if register.status == CashRegisterStatus.CLOSED:
        raise RegisterClosedError()

    # Esperado calculado no próprio UPDATE, com os totais do momento do fechamento
    expected = CashRegister.opening_amount + CashRegister.total_sales
    if closing_amount is None:
        closing_value, difference = expected, ZERO
    else:
        closing_value = to_money(closing_amount)
        difference = closing_value - expected

    updated = db.query(CashRegister).filter(
        CashRegister.id == register.id,
        CashRegister.status == CashRegisterStatus.OPEN,
    ).update({
        CashRegister.status: CashRegisterStatus.CLOSED,
        CashRegister.closing_amount: closing_value,
        CashRegister.difference: difference,
        CashRegister.closed_at: datetime.now(),
    }, synchronize_session=False)
    if not updated:
        db.rollback()
        raise RegisterClosedError()

    db.commit()
    db.refresh(register)
    logger.info("Caixa %s fechado com %s (diferença %s)", register.id, register.closing_amount, register.difference)
    return register


def get_cash_amount_by_date(db: Session, day: date, employee_id: Optional[int] = None) -> Decimal:
    """Fechado: valor de fechamento. Aberto: abertura + vendas. Sem caixa: zero."""
    register = get_register_by_date(db, day, employee_id)
    if not register:
        return ZERO
    if register.status == CashRegisterStatus.CLOSED and register.closing_amount is not None:
        return register.closing_amount
    return register.expected_amount


def get_current_cash_amount(db: Session, employee_id: Optional[int] = None, today: Optional[date] = None) -> Decimal:
    register = get_register_by_date(db, today or date.today(), employee_id)
    if not register or register.status != CashRegisterStatus.OPEN:
        return ZERO
    return register.expected_amount


def get_register_for_sale(db: Session, sale_id: int) -> Optional[CashRegister]:
    return (
        db.query(CashRegister)
        .join(CashRegisterEntry, CashRegisterEntry.register_id == CashRegister.id)
        .filter(CashRegisterEntry.sale_id == sale_id)
        .first()
    )

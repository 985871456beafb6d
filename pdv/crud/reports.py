"""Relatórios e números do dashboard. Só contam vendas concluídas."""
from collections import defaultdict
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from pdv.crud import cash as cash_crud
from pdv.crud.sales import get_sales
from pdv.models import ItemType, PaymentMethod, Sale, SaleStatus
from pdv.schemas.customers import CustomerPurchase, CustomerServiceRecord
from pdv.schemas.reports import DailyReport, DailySalesPoint, DashboardSummary, TopService
from pdv.schemas.sales import SaleRead

ZERO = Decimal("0.00")


def _completed_sales(db: Session, start: date, end: date) -> List[Sale]:
    """Vendas concluídas de start até end, inclusive."""
    return get_sales(
        db,
        start=datetime.combine(start, time.min),
        end=datetime.combine(end + timedelta(days=1), time.min),
        status=SaleStatus.COMPLETED,
    )


def _empty_payment_totals() -> Dict[str, Decimal]:
    return {method.value: ZERO for method in PaymentMethod}


def _services_count(sales: List[Sale]) -> int:
    return sum(
        item.quantity
        for sale in sales
        for item in sale.items
        if item.item_type == ItemType.SERVICE
    )


def get_daily_report(db: Session, day: date) -> DailyReport:
    sales = _completed_sales(db, day, day)

    payment_methods = _empty_payment_totals()
    for sale in sales:
        payment_methods[PaymentMethod(sale.payment_method).value] += sale.total

    return DailyReport(
        date=day,
        total_sales=sum((s.total for s in sales), ZERO),
        total_transactions=len(sales),
        payment_methods=payment_methods,
        sales=[SaleRead.model_validate(s) for s in sales],
    )


def get_sales_amount_by_period(db: Session, start: date, end: date) -> Decimal:
    return sum((s.total for s in _completed_sales(db, start, end)), ZERO)


def get_services_count_by_period(db: Session, start: date, end: date) -> int:
    return _services_count(_completed_sales(db, start, end))


def get_today_sales_amount(db: Session, today: Optional[date] = None) -> Decimal:
    today = today or date.today()
    return get_sales_amount_by_period(db, today, today)


def get_today_services_count(db: Session, today: Optional[date] = None) -> int:
    today = today or date.today()
    return get_services_count_by_period(db, today, today)


def get_dashboard_summary(db: Session, today: Optional[date] = None) -> DashboardSummary:
    today = today or date.today()
    return DashboardSummary(
        today_sales_amount=get_today_sales_amount(db, today),
        today_services_count=get_today_services_count(db, today),
        current_cash_amount=cash_crud.get_current_cash_amount(db, today=today),
    )


def get_daily_sales_data(db: Session, days: int = 7, today: Optional[date] = None) -> List[DailySalesPoint]:
    """Total vendido por dia nos últimos `days` dias, dias sem venda com zero."""
    today = today or date.today()
    start = today - timedelta(days=days - 1)

    by_day = {start + timedelta(days=i): ZERO for i in range(days)}
    for sale in _completed_sales(db, start, today):
        day = sale.date.date()
        if day in by_day:
            by_day[day] += sale.total

    return [DailySalesPoint(date=day, amount=amount) for day, amount in sorted(by_day.items())]


def get_top_selling_services(db: Session, days: int = 30, limit: int = 5,
                             today: Optional[date] = None) -> List[TopService]:
    today = today or date.today()
    stats = defaultdict(lambda: {"quantity": 0, "revenue": ZERO})

    for sale in _completed_sales(db, today - timedelta(days=days), today):
        for item in sale.items:
            if item.item_type == ItemType.SERVICE:
                stats[item.name]["quantity"] += item.quantity
                stats[item.name]["revenue"] += item.subtotal

    ranked = sorted(stats.items(), key=lambda pair: pair[1]["quantity"], reverse=True)
    return [TopService(name=name, **values) for name, values in ranked[:limit]]


def _customer_sales(db: Session, customer_id: int) -> List[Sale]:
    return (
        db.query(Sale)
        .filter(Sale.customer_id == customer_id, Sale.status == SaleStatus.COMPLETED)
        .order_by(Sale.date.desc(), Sale.id.desc())
        .all()
    )


def get_customer_purchases(db: Session, customer_id: int) -> List[CustomerPurchase]:
    purchases = []
    for sale in _customer_sales(db, customer_id):
        # Primeiro serviço da venda, ou o primeiro item
        item = next((i for i in sale.items if i.item_type == ItemType.SERVICE), None)
        if item is None and sale.items:
            item = sale.items[0]
        purchases.append(CustomerPurchase(
            id=sale.id,
            date=sale.date,
            service=item.name if item else "Serviço",
            amount=sale.total,
        ))
    return purchases


def get_customer_services(db: Session, customer_id: int) -> List[CustomerServiceRecord]:
    records = []
    for sale in _customer_sales(db, customer_id):
        services = [i for i in sale.items if i.item_type == ItemType.SERVICE]
        for index, item in enumerate(services):
            records.append(CustomerServiceRecord(
                id=f"{sale.id}_{index}",
                date=sale.date,
                type=item.name,
                description=f"Quantidade: {item.quantity} - Total: R$ {item.subtotal:.2f}",
            ))
    return records

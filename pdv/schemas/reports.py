from pydantic import BaseModel
from typing import Dict, List
from datetime import date
from decimal import Decimal

from pdv.schemas.sales import SaleRead

class DailyReport(BaseModel):
    date: date
    total_sales: Decimal
    total_transactions: int
    payment_methods: Dict[str, Decimal]
    sales: List[SaleRead] = []

class DailySalesPoint(BaseModel):
    date: date
    amount: Decimal

class TopService(BaseModel):
    name: str
    quantity: int
    revenue: Decimal

class DashboardSummary(BaseModel):
    today_sales_amount: Decimal
    today_services_count: int
    current_cash_amount: Decimal

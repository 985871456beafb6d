# pdv/routers/reports.py
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from pdv.crud import reports as reports_crud
from pdv.database import get_db
from pdv.models import User
from pdv.schemas.reports import DailyReport, DailySalesPoint, DashboardSummary, TopService
from pdv.security import get_current_user

router = APIRouter()

@router.get("/daily", response_model=DailyReport)
def get_daily_report(
    target_date: Optional[date] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Vendas do dia, total por forma de pagamento e número de transações."""
    return reports_crud.get_daily_report(db, target_date or date.today())

@router.get("/dashboard", response_model=DashboardSummary)
def get_dashboard(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return reports_crud.get_dashboard_summary(db)

@router.get("/daily-sales", response_model=List[DailySalesPoint])
def get_daily_sales(
    days: int = Query(default=7, ge=1, le=366),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return reports_crud.get_daily_sales_data(db, days=days)

@router.get("/top-services", response_model=List[TopService])
def get_top_services(
    days: int = Query(default=30, ge=1, le=366),
    limit: int = Query(default=5, ge=1, le=50),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return reports_crud.get_top_selling_services(db, days=days, limit=limit)

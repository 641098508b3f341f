from datetime import date
from typing import List, Literal
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.config import get_db
from app.core.security import get_current_identity
from app.schemas import DashboardResponse, Identity, ReportRead, ReportSummary
from app.services import session_state
from app.services.pain_report import pain_report_service
from app.services.session_state import session_registry


router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/history", response_model=List[ReportRead])
def get_history(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """All reports, newest saved first. Also refreshes the session's copy."""
    reports = pain_report_service.fetch_history(db, identity.id)
    session_registry.update(identity, session_state.set_reports, reports)
    return reports


@router.get("/recent", response_model=List[ReportRead])
def get_recent(
    start_date: date = Query(..., description="First date to include (YYYY-MM-DD)"),
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    return pain_report_service.fetch_recent_reports(db, identity.id, start_date)


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(
    period: Literal["weekly", "monthly"] = Query("weekly"),
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Health score and chart series over the last 7 or 30 reports."""
    return pain_report_service.get_dashboard(db, identity.id, period)


@router.get("/{report_date}", response_model=ReportRead)
def get_report(
    report_date: date,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    return pain_report_service.get_report(db, identity.id, report_date)


@router.get("/{report_date}/summary", response_model=ReportSummary)
def get_report_summary(
    report_date: date,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """The day's report with a risk label per region."""
    return pain_report_service.get_summary(db, identity.id, report_date)

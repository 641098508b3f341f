from datetime import date
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.config import get_db
from app.core.security import get_current_identity
from app.schemas import DailyLogDraft, DailyLogUpdate, Identity, SessionRead
from app.services import session_state
from app.services.pain_report import pain_report_service
from app.services.session_state import session_registry


# ====================================================
# ROUTER
# ====================================================


router = APIRouter(tags=["Daily Log"])


@router.get("/session", response_model=SessionRead)
def get_session(identity: Identity = Depends(get_current_identity)):
    """Everything currently being edited: draft, selection, survey."""
    return session_state.to_read(session_registry.get(identity))


# ====================================================
# DAILY LOG ENDPOINTS
# ====================================================


@router.get("/daily-log", response_model=DailyLogDraft)
def get_daily_log(identity: Identity = Depends(get_current_identity)):
    """Get the current daily-log draft with its hour total."""
    return session_registry.get(identity).daily_log


@router.put("/daily-log", response_model=DailyLogDraft)
def update_daily_log(
    update: DailyLogUpdate,
    identity: Identity = Depends(get_current_identity),
):
    """Merge times / exercise / date into the draft.

    Totals above 24 hours are accepted and flagged with `exceeds_day`.
    """
    return session_registry.update(identity, session_state.set_daily_log, update).daily_log


@router.post("/daily-log/load/{log_date}", response_model=SessionRead)
def load_daily_log(
    log_date: date,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Open a date for editing.

    An existing report fills the draft and rebuilds the body-map selection
    from its pain records; otherwise an empty draft for that date is started.
    """
    report = pain_report_service.fetch_report_by_date(db, identity.id, log_date)
    state = session_registry.update(identity, session_state.load_report, log_date, report)
    return session_state.to_read(state)


@router.post("/daily-log/next", response_model=DailyLogDraft)
def next_step(identity: Identity = Depends(get_current_identity)):
    """Move on to the body map. Rejected while hours exceed one day."""
    state = session_state.advance_daily_log(session_registry.get(identity))
    return state.daily_log

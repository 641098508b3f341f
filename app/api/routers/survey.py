from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.config import get_db
from app.core.exceptions import PersistenceError
from app.core.security import get_current_identity
from app.schemas import (
    Identity,
    SessionState,
    SubmissionResult,
    SurveyAnswers,
    SurveyPhase,
    SurveyRead,
)
from app.services import session_state, survey
from app.services.pain_report import pain_report_service
from app.services.session_state import session_registry

SAVE_FAILED_MESSAGE = "Failed to save the report. Check your connection and retry."

router = APIRouter(prefix="/survey", tags=["Survey"])


def _save(db: Session, state: SessionState) -> SubmissionResult:
    """Save a finished survey; on failure keep every answer for a retry."""
    try:
        new_state, report, alerts = pain_report_service.complete(db, state)
    except PersistenceError:
        session_registry.update(state.user, session_state.mark_save_failed, SAVE_FAILED_MESSAGE)
        raise

    session_registry.put(new_state)
    return SubmissionResult(
        survey=survey.to_read(new_state.survey),
        report=report,
        alerts=alerts,
    )


@router.post("/start", response_model=SurveyRead)
def start_survey(identity: Identity = Depends(get_current_identity)):
    """Begin asking about the selected regions in selection order.

    With nothing selected the survey goes straight to `zero_pain`.
    """
    state = session_registry.update(identity, session_state.start_survey)
    return survey.to_read(state.survey)


@router.get("", response_model=SurveyRead)
def get_survey(identity: Identity = Depends(get_current_identity)):
    return survey.to_read(session_registry.get(identity).survey)


@router.post("/submit", response_model=SubmissionResult)
def submit_answers(
    answers: SurveyAnswers,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Answer the current region.

    Answering the last region saves the report and returns it together with
    any high-pain or chronic-pain alerts.
    """
    state = session_registry.update(identity, session_state.submit_answers, answers)

    if state.survey.phase != SurveyPhase.complete:
        return SubmissionResult(survey=survey.to_read(state.survey))
    return _save(db, state)


@router.post("/finish", response_model=SubmissionResult)
def finish_survey(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Save without further questions: the no-pain quick finish, or a retry
    after a failed save."""
    return _save(db, session_registry.get(identity))

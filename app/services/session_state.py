# services/session_state.py
"""
Per-user editing session.

``SessionState`` snapshots are immutable; each function below is a reducer
that returns a new snapshot. ``SessionRegistry`` keeps the latest snapshot
for each signed-in user so the HTTP layer can read and replace it.
"""
import threading
from datetime import date
from typing import Callable, Dict, Optional, Sequence
from uuid import UUID

from app.core.exceptions import ValidationError
from app.data.body_regions import BodyRegion, Side
from app.schemas.pain_report import (
    DailyLogDraft,
    DailyLogUpdate,
    ReportBase,
    ReportRead,
    SelectedRegion,
    SurveyAnswers,
)
from app.schemas.session import SessionRead, SessionState, SurveyState
from app.schemas.user_auth import Identity
from app.services import body_selection, survey


# ====================================================
# REDUCERS
# ====================================================

def set_user(state: SessionState, user: Optional[Identity]) -> SessionState:
    return state.model_copy(update={"user": user})


def set_daily_log(state: SessionState, update: DailyLogUpdate) -> SessionState:
    """Merge the given sections into the draft. Values are never clamped."""
    changes = {
        field: getattr(update, field)
        for field in update.model_fields_set
        if getattr(update, field) is not None
    }
    draft = state.daily_log.model_copy(update=changes)
    return state.model_copy(update={"daily_log": draft})


def advance_daily_log(state: SessionState) -> SessionState:
    """Leave the daily-log step. Blocked while the hours exceed one day."""
    if state.daily_log.exceeds_day:
        raise ValidationError(
            f"A day has 24 hours; the entered times add up to {state.daily_log.total_hours:g}"
        )
    return state


def load_report(state: SessionState, day: date, report: Optional[ReportBase]) -> SessionState:
    """Show ``report`` for editing, or start an empty draft for ``day``."""
    if report is None:
        return state.model_copy(
            update={
                "daily_log": DailyLogDraft(date=day),
                "pain_records": (),
                "selection": (),
                "survey": SurveyState(),
            }
        )
    records = tuple(report.pain_records)
    return state.model_copy(
        update={
            "daily_log": report.daily_log,
            "pain_records": records,
            "selection": tuple(
                SelectedRegion(region_id=r.region_id, side=r.side) for r in records
            ),
            "survey": SurveyState(),
        }
    )


def toggle_region(state: SessionState, region_id: BodyRegion, side: Side) -> SessionState:
    selection = body_selection.toggle(state.selection, region_id, side)
    return state.model_copy(update={"selection": selection})


def remove_region(state: SessionState, region_id: BodyRegion) -> SessionState:
    selection = body_selection.remove(state.selection, region_id)
    return state.model_copy(update={"selection": selection})


def reset_all(state: SessionState) -> SessionState:
    """Clear the selection and every pain record together."""
    return state.model_copy(
        update={
            "selection": body_selection.reset(),
            "pain_records": (),
            "survey": SurveyState(),
        }
    )


def start_survey(state: SessionState) -> SessionState:
    return state.model_copy(update={"survey": survey.start(state.selection)})


def submit_answers(state: SessionState, answers: SurveyAnswers) -> SessionState:
    walk = survey.submit_current(state.survey, answers)
    return state.model_copy(
        update={"survey": walk, "pain_records": walk.records, "error": None}
    )


def set_survey(state: SessionState, walk: SurveyState) -> SessionState:
    return state.model_copy(update={"survey": walk})


def mark_save_failed(state: SessionState, message: str) -> SessionState:
    """Keep every answer for a retry and surface the failure."""
    walk = survey.mark_save_failed(state.survey)
    return state.model_copy(update={"survey": walk, "error": message})


def set_reports(state: SessionState, reports: Sequence[ReportRead]) -> SessionState:
    return state.model_copy(update={"reports": tuple(reports)})


def set_error(state: SessionState, error: Optional[str]) -> SessionState:
    return state.model_copy(update={"error": error})


def to_read(state: SessionState) -> SessionRead:
    return SessionRead(
        user=state.user,
        daily_log=state.daily_log,
        selection=list(state.selection),
        pain_records=list(state.pain_records),
        survey=survey.to_read(state.survey),
        report_count=len(state.reports),
        error=state.error,
    )


# ====================================================
# REGISTRY
# ====================================================

class SessionRegistry:
    """Latest session snapshot per user id."""

    def __init__(self):
        self._sessions: Dict[UUID, SessionState] = {}
        self._lock = threading.Lock()

    def _get_locked(self, user: Identity) -> SessionState:
        state = self._sessions.get(user.id)
        if state is None:
            state = SessionState(user=user)
            self._sessions[user.id] = state
        return state

    def get(self, user: Identity) -> SessionState:
        with self._lock:
            return self._get_locked(user)

    def update(self, user: Identity, reducer: Callable[..., SessionState], *args) -> SessionState:
        """
        Apply ``reducer(state, *args)`` to the user's session and store the result.

        Runs under the registry lock so overlapping requests from one user
        never lose each other's changes. If the reducer raises, nothing is
        stored.
        """
        with self._lock:
            state = reducer(self._get_locked(user), *args)
            self._sessions[user.id] = state
            return state

    def put(self, state: SessionState) -> SessionState:
        if state.user is None:
            raise ValueError("Session state must belong to a user")
        with self._lock:
            self._sessions[state.user.id] = state
        return state

    def drop(self, user_id: UUID) -> None:
        with self._lock:
            self._sessions.pop(user_id, None)

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()


session_registry = SessionRegistry()

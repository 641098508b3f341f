# services/pain_report.py
import logging
from datetime import date
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.orm import Session

from app import models
from app.core.exceptions import (
    AnalyticsError,
    DatabaseError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from app.crud.pain_report import crud_pain_report
from app.schemas.pain_report import (
    Alert,
    DailyLogDraft,
    PainRecord,
    ReportBase,
    ReportRead,
    ReportSummary,
    SaveResult,
)
from app.schemas.session import SessionState
from app.services import report_aggregator, session_state, survey
from app.services.notifications import Notifier, notifier as default_notifier

logger = logging.getLogger(__name__)

COMPUTED_DRAFT_FIELDS = {"total_hours", "exceeds_day"}


class PainReportService:
    """
    Report store access plus the survey completion flow.

    Saving is the critical path: a failure raises PersistenceError and leaves
    the caller's session untouched. Everything after a successful save
    (history refresh, alerts, chronic check) is best-effort.
    """

    def __init__(self, notifier: Optional[Notifier] = None):
        self.crud = crud_pain_report
        self.notifier = notifier or default_notifier

    # ====================================================
    # STORE
    # ====================================================

    @staticmethod
    def to_read(db_obj: models.PainReport) -> ReportRead:
        return ReportRead(
            id=db_obj.id,
            user_id=db_obj.user_id,
            date=db_obj.date,
            daily_log=DailyLogDraft.model_validate(db_obj.daily_log),
            pain_records=[PainRecord.model_validate(r) for r in db_obj.pain_records or []],
            created_at=db_obj.created_at,
            updated_at=db_obj.updated_at,
        )

    def save_report(self, db: Session, report: ReportBase) -> SaveResult:
        """Upsert by (user_id, date). An existing report is overwritten."""
        daily_log = report.daily_log.model_dump(mode="json", exclude=COMPUTED_DRAFT_FIELDS)
        pain_records = [r.model_dump(mode="json") for r in report.pain_records]
        try:
            db_obj, created = self.crud.upsert(
                db,
                user_id=report.user_id,
                day=report.date,
                daily_log=daily_log,
                pain_records=pain_records,
            )
        except DatabaseError as e:
            raise PersistenceError(f"Could not save report for {report.date}") from e

        logger.info(
            f"{'Created' if created else 'Updated'} report {db_obj.id} "
            f"for {report.date} with {len(pain_records)} pain record(s)"
        )
        return SaveResult(success=True, id=db_obj.id)

    def fetch_report_by_date(self, db: Session, user_id: UUID, day: date) -> Optional[ReportRead]:
        try:
            db_obj = self.crud.get_by_user_and_date(db, user_id=user_id, day=day)
        except DatabaseError as e:
            raise PersistenceError(f"Could not load report for {day}") from e
        return self.to_read(db_obj) if db_obj else None

    def fetch_history(self, db: Session, user_id: UUID) -> List[ReportRead]:
        """All of a user's reports, newest saved first."""
        try:
            rows = self.crud.get_all_by_user(db, user_id=user_id)
        except DatabaseError as e:
            raise PersistenceError("Could not load report history") from e
        return [self.to_read(row) for row in rows]

    def fetch_recent_reports(self, db: Session, user_id: UUID, start_date: date) -> List[ReportRead]:
        """Reports dated on or after ``start_date``."""
        try:
            rows = self.crud.get_since(db, user_id=user_id, start_date=start_date)
        except DatabaseError as e:
            raise PersistenceError(f"Could not load reports since {start_date}") from e
        return [self.to_read(row) for row in rows]

    # ====================================================
    # READ SIDE
    # ====================================================

    def get_report(self, db: Session, user_id: UUID, day: date) -> ReportRead:
        report = self.fetch_report_by_date(db, user_id, day)
        if report is None:
            raise NotFoundError(f"No report found for date {day}")
        return report

    def get_summary(self, db: Session, user_id: UUID, day: date) -> ReportSummary:
        return report_aggregator.summarize(self.get_report(db, user_id, day))

    def get_dashboard(self, db: Session, user_id: UUID, period: str) -> dict:
        return report_aggregator.build_dashboard(self.fetch_history(db, user_id), period)

    # ====================================================
    # SURVEY COMPLETION
    # ====================================================

    def complete(self, db: Session, state: SessionState) -> Tuple[SessionState, ReportRead, List[Alert]]:
        """
        Save the finished survey and run the post-save analytics.

        Args:
            db: Database session
            state: Session whose survey is complete (or has nothing to ask)

        Returns:
            (new session state, saved report, alerts raised)

        Raises:
            ValidationError: If the survey still has unanswered regions
            PersistenceError: If the save fails; ``state`` is not modified
        """
        if state.user is None:
            raise ValidationError("Sign in before saving a report")
        if not survey.ready_to_save(state.survey):
            raise ValidationError(
                f"Survey is not finished (currently {state.survey.phase.value})"
            )

        records = list(state.survey.records)
        report = report_aggregator.finalize(state.user.id, state.daily_log, records)
        result = self.save_report(db, report)

        saved = ReportRead(id=result.id, **report.model_dump())
        new_state = session_state.set_survey(state, survey.mark_saved(state.survey))
        new_state = session_state.set_error(new_state, None)

        new_state = self.refresh_history(db, new_state)
        alerts = self.run_alerts(db, saved)
        return new_state, saved, alerts

    def refresh_history(self, db: Session, state: SessionState) -> SessionState:
        try:
            return session_state.set_reports(state, self.fetch_history(db, state.user.id))
        except Exception as e:
            logger.warning(f"History refresh after save failed: {e}")
            return state

    def run_alerts(self, db: Session, report: ReportRead) -> List[Alert]:
        """
        High-pain and chronic-pain checks for a just-saved report.

        Never raises. Each raised alert is also passed to the notifier, whose
        result is ignored.
        """
        alerts: List[Alert] = []

        high = report_aggregator.high_pain_alert(report.pain_records)
        if high:
            alerts.append(high)

        try:
            chronic = self.check_chronic(db, report)
        except AnalyticsError as e:
            logger.warning(f"Chronic pain check skipped for {report.date}: {e}")
            chronic = None
        if chronic:
            alerts.append(chronic)

        for alert in alerts:
            self.notifier.notify(alert.title, alert.body)
        return alerts

    def check_chronic(self, db: Session, report: ReportRead) -> Optional[Alert]:
        if not report.pain_records:
            return None
        start = report_aggregator.chronic_lookback_start(report.date)
        try:
            history = self.fetch_recent_reports(db, report.user_id, start)
            region = report_aggregator.find_chronic_region(
                report.date, report.pain_records, history
            )
        except Exception as e:
            raise AnalyticsError(str(e)) from e
        if region is None:
            return None
        logger.info(f"Chronic pain detected for {region.value} as of {report.date}")
        return report_aggregator.chronic_pain_alert(region)


pain_report_service = PainReportService()

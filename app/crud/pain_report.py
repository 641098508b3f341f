import logging
from datetime import date
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import flag_modified

from app import models
from app.core.exceptions import DatabaseError

logger = logging.getLogger(__name__)


class CRUDPainReport:
    """Report documents keyed by (user_id, date)."""

    # ====================================================
    # WRITE
    # ====================================================

    def upsert(
        self,
        db: Session,
        *,
        user_id: UUID,
        day: date,
        daily_log: Dict[str, Any],
        pain_records: List[Dict[str, Any]],
    ) -> Tuple[models.PainReport, bool]:
        """Create the report for (user, day) or overwrite the existing one.

        Returns the stored row and whether it was newly created.
        """
        try:
            db_obj = self.get_by_user_and_date(db, user_id=user_id, day=day)
            created = db_obj is None

            if created:
                db_obj = models.PainReport(
                    user_id=user_id,
                    date=day,
                    daily_log=daily_log,
                    pain_records=pain_records,
                )
                db.add(db_obj)
            else:
                db_obj.daily_log = daily_log
                db_obj.pain_records = pain_records
                flag_modified(db_obj, "daily_log")
                flag_modified(db_obj, "pain_records")

            db.commit()
            db.refresh(db_obj)
            return db_obj, created
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to save report for {user_id} on {day}: {e}")
            raise DatabaseError(str(e)) from e

    # ====================================================
    # READ
    # ====================================================

    def get_by_user_and_date(
        self, db: Session, *, user_id: UUID, day: date
    ) -> Optional[models.PainReport]:
        """Get the report for a specific user and date"""
        try:
            return (
                db.query(models.PainReport)
                .filter(models.PainReport.user_id == user_id)
                .filter(models.PainReport.date == day)
                .first()
            )
        except SQLAlchemyError as e:
            raise DatabaseError(str(e)) from e

    def get_all_by_user(
        self, db: Session, *, user_id: UUID, skip: int = 0, limit: Optional[int] = None
    ) -> List[models.PainReport]:
        """Get a user's reports, newest saved first. No limit returns them all."""
        try:
            query = (
                db.query(models.PainReport)
                .filter(models.PainReport.user_id == user_id)
                .order_by(models.PainReport.created_at.desc(), models.PainReport.date.desc())
                .offset(skip)
            )
            if limit is not None:
                query = query.limit(limit)
            return query.all()
        except SQLAlchemyError as e:
            raise DatabaseError(str(e)) from e

    def get_since(
        self, db: Session, *, user_id: UUID, start_date: date
    ) -> List[models.PainReport]:
        """Get reports dated on or after start_date"""
        try:
            return (
                db.query(models.PainReport)
                .filter(models.PainReport.user_id == user_id)
                .filter(models.PainReport.date >= start_date)
                .order_by(models.PainReport.date.asc())
                .all()
            )
        except SQLAlchemyError as e:
            raise DatabaseError(str(e)) from e


# Instantiate a reusable object
crud_pain_report = CRUDPainReport()

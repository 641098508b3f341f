# models/pain_report.py

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, Date, DateTime, JSON, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from app.core.config import Base


class PainReport(Base):
    """One user's report for one calendar day: daily log plus pain records."""

    __tablename__ = "pain_report"
    __table_args__ = (UniqueConstraint("user_id", "date", name="uq_pain_report_user_date"),)

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("user_auth.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)

    daily_log = Column(JSON, nullable=False)  # {"date", "times": {...}, "exercise": {...}}
    pain_records = Column(JSON, nullable=False)  # [{region_id, side, pain_level, ...}, ...]

    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    user = relationship("UserAuth", back_populates="pain_reports")

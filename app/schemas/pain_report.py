from typing import Any, Dict, List, Optional, Literal
from uuid import UUID
import datetime as dt

from pydantic import BaseModel, ConfigDict, Field, computed_field

from app.core.config import settings
from app.data.body_regions import BodyRegion, Side


# ----------------------
# Body Map
# ----------------------


class SelectedRegion(BaseModel):
    """One lit region on the body map. At most one entry per region."""

    model_config = ConfigDict(frozen=True)

    region_id: BodyRegion
    side: Side


class ToggleRequest(BaseModel):
    region_id: BodyRegion
    side: Side = Field(
        ..., description="Clicked half: left or right, or center for center regions"
    )


class RegionRead(BaseModel):
    id: BodyRegion
    label: str
    group: str
    sides: List[Side]


# ----------------------
# Pain Records
# ----------------------


class SurveyAnswers(BaseModel):
    """Answer draft for the region currently being asked about."""

    pain_level: int = 1
    history_12_months: bool = False
    work_interference: bool = False
    recent_7_days: bool = False


class PainRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    region_id: BodyRegion
    side: Side
    pain_level: int = Field(..., ge=1, le=10)
    history_12_months: bool = False
    work_interference: bool = False
    recent_7_days: bool = False


class PainRecordSummary(PainRecord):
    label: str
    side_label: str
    risk: Literal["danger", "caution", "moderate", "safe"]


# ----------------------
# Daily Log
# ----------------------


class ActivityTimes(BaseModel):
    """Hours spent per posture."""

    sitting: float = Field(default=0, ge=0)
    standing: float = Field(default=0, ge=0)
    sleeping: float = Field(default=0, ge=0)
    driving: float = Field(default=0, ge=0)


class ExerciseMinutes(BaseModel):
    """Minutes of exercise per intensity."""

    high: float = Field(default=0, ge=0)
    mid: float = Field(default=0, ge=0)
    low: float = Field(default=0, ge=0)


class DailyLogDraft(BaseModel):
    date: dt.date = Field(default_factory=dt.date.today)
    times: ActivityTimes = Field(default_factory=ActivityTimes)
    exercise: ExerciseMinutes = Field(default_factory=ExerciseMinutes)

    @computed_field
    @property
    def total_hours(self) -> float:
        t = self.times
        return t.sitting + t.standing + t.sleeping + t.driving

    @computed_field
    @property
    def exceeds_day(self) -> bool:
        return self.total_hours > settings.MAX_DAILY_HOURS


class DailyLogUpdate(BaseModel):
    """Partial update; each given section replaces the draft's section."""

    date: Optional[dt.date] = None
    times: Optional[ActivityTimes] = None
    exercise: Optional[ExerciseMinutes] = None


# ----------------------
# Reports
# ----------------------


class ReportBase(BaseModel):
    user_id: UUID
    date: dt.date
    daily_log: DailyLogDraft
    pain_records: List[PainRecord] = Field(default_factory=list)


class ReportRead(ReportBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None


class SaveResult(BaseModel):
    success: bool = True
    id: UUID


class ReportSummary(BaseModel):
    date: dt.date
    daily_log: DailyLogDraft
    records: List[PainRecordSummary]
    has_pain: bool


# ----------------------
# Analytics
# ----------------------


class Alert(BaseModel):
    kind: Literal["high_pain", "chronic_pain"]
    title: str
    body: str
    region_id: Optional[BodyRegion] = None


class DashboardResponse(BaseModel):
    period: Literal["weekly", "monthly"]
    health_score: int
    average_pain: float
    report_count: int
    series: List[Dict[str, Any]]

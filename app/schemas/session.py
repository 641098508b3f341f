import enum
from typing import List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field

from app.schemas.pain_report import (
    Alert,
    DailyLogDraft,
    PainRecord,
    ReportRead,
    SelectedRegion,
    SurveyAnswers,
)
from app.schemas.user_auth import Identity


class SurveyPhase(str, enum.Enum):
    idle = "idle"
    ask_region = "ask_region"
    zero_pain = "zero_pain"
    complete = "complete"
    saved = "saved"
    save_failed = "save_failed"


class SurveyState(BaseModel):
    """Snapshot of the survey walk. Transitions live in app.services.survey."""

    model_config = ConfigDict(frozen=True)

    phase: SurveyPhase = SurveyPhase.idle
    regions: Tuple[SelectedRegion, ...] = ()
    current_index: int = 0
    draft: SurveyAnswers = Field(default_factory=SurveyAnswers)
    records: Tuple[PainRecord, ...] = ()

    @property
    def current_region(self) -> Optional[SelectedRegion]:
        if self.phase not in (SurveyPhase.ask_region, SurveyPhase.save_failed):
            return None
        if not self.regions:
            return None
        return self.regions[self.current_index]

    @property
    def is_last_step(self) -> bool:
        return self.current_index == len(self.regions) - 1


class SessionState(BaseModel):
    """Everything one signed-in user is editing, as an immutable snapshot."""

    model_config = ConfigDict(frozen=True)

    user: Optional[Identity] = None
    daily_log: DailyLogDraft = Field(default_factory=DailyLogDraft)
    selection: Tuple[SelectedRegion, ...] = ()
    pain_records: Tuple[PainRecord, ...] = ()
    survey: SurveyState = Field(default_factory=SurveyState)
    reports: Tuple[ReportRead, ...] = ()
    error: Optional[str] = None


class SurveyRead(BaseModel):
    phase: SurveyPhase
    current_index: int
    total: int
    current_region: Optional[SelectedRegion]
    draft: SurveyAnswers
    records: List[PainRecord]


class SessionRead(BaseModel):
    user: Optional[Identity]
    daily_log: DailyLogDraft
    selection: List[SelectedRegion]
    pain_records: List[PainRecord]
    survey: SurveyRead
    report_count: int
    error: Optional[str]


class SubmissionResult(BaseModel):
    survey: SurveyRead
    report: Optional[ReportRead] = None
    alerts: List[Alert] = Field(default_factory=list)

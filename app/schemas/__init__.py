# app/schemas/__init__.py

from .user_auth import (
    Identity,
    LoginRequest,
    SignupRequest,
    TokenResponse,
    SuccessResponse,
)
from .pain_report import (
    SelectedRegion,
    ToggleRequest,
    RegionRead,
    SurveyAnswers,
    PainRecord,
    PainRecordSummary,
    ActivityTimes,
    ExerciseMinutes,
    DailyLogDraft,
    DailyLogUpdate,
    ReportBase,
    ReportRead,
    SaveResult,
    ReportSummary,
    Alert,
    DashboardResponse,
)
from .session import (
    SurveyPhase,
    SurveyState,
    SessionState,
    SurveyRead,
    SessionRead,
    SubmissionResult,
)


__all__ = [
    # Auth
    "Identity", "LoginRequest", "SignupRequest", "TokenResponse", "SuccessResponse",

    # Reports
    "SelectedRegion", "ToggleRequest", "RegionRead",
    "SurveyAnswers", "PainRecord", "PainRecordSummary",
    "ActivityTimes", "ExerciseMinutes", "DailyLogDraft", "DailyLogUpdate",
    "ReportBase", "ReportRead", "SaveResult", "ReportSummary",
    "Alert", "DashboardResponse",

    # Session
    "SurveyPhase", "SurveyState", "SessionState",
    "SurveyRead", "SessionRead", "SubmissionResult",
]

# services/report_aggregator.py
"""
Turns a finished survey into a report and derives the read-side analytics.

Nothing here touches the database; callers hand in the reports they fetched.
"""
import math
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Optional, Sequence
from uuid import UUID

from app.core.config import settings
from app.data.body_regions import REGION_REPOSITORY, BodyRegion, region_label, SIDE_LABELS
from app.schemas.pain_report import (
    Alert,
    DailyLogDraft,
    PainRecord,
    PainRecordSummary,
    ReportBase,
    ReportSummary,
)


# ====================================================
# FINALIZE
# ====================================================

def finalize(
    user_id: UUID, daily_log: DailyLogDraft, pain_records: Sequence[PainRecord]
) -> ReportBase:
    """Stamp user and date onto the draft and its records."""
    return ReportBase(
        user_id=user_id,
        date=daily_log.date,
        daily_log=daily_log,
        pain_records=list(pain_records),
    )


# ====================================================
# HEALTH SCORE
# ====================================================

def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def average_pain(records: Iterable[PainRecord]) -> float:
    levels = [r.pain_level for r in records]
    if not levels:
        return 0.0
    return sum(levels) / len(levels)


def compute_health_score(records: Iterable[PainRecord]) -> int:
    """
    0-100 score, 100 meaning no recorded pain.

    score = max(0, round((10 - average pain) * 10))
    """
    return max(0, _round_half_up((10 - average_pain(records)) * 10))


def records_in(reports: Iterable[ReportBase]) -> List[PainRecord]:
    return [record for report in reports for record in report.pain_records]


# ====================================================
# ALERTS
# ====================================================

def high_pain_records(records: Iterable[PainRecord]) -> List[PainRecord]:
    return [r for r in records if r.pain_level >= settings.HIGH_PAIN_THRESHOLD]


def high_pain_alert(records: Iterable[PainRecord]) -> Optional[Alert]:
    if not high_pain_records(records):
        return None
    return Alert(
        kind="high_pain",
        title="High pain warning",
        body="Your pain level is high. Consider resting or consulting a specialist.",
    )


def chronic_lookback_start(report_date: date) -> date:
    return report_date - timedelta(days=settings.CHRONIC_LOOKBACK_DAYS)


def find_chronic_region(
    report_date: date,
    records: Sequence[PainRecord],
    history: Iterable[ReportBase],
) -> Optional[BodyRegion]:
    """
    First region in ``records`` whose pain has persisted for about a month.

    A region qualifies when at least CHRONIC_MIN_REPORTS earlier reports in the
    lookback window record pain for it, and the earliest of them is at least
    CHRONIC_MIN_SPAN_DAYS before ``report_date``. The report for
    ``report_date`` itself is not counted.
    """
    window_start = chronic_lookback_start(report_date)
    earlier = [
        report for report in history
        if window_start <= report.date < report_date
    ]

    for record in records:
        if record.pain_level <= 0:
            continue

        qualifying = [
            report for report in earlier
            if any(p.region_id == record.region_id and p.pain_level > 0 for p in report.pain_records)
        ]
        if len(qualifying) < settings.CHRONIC_MIN_REPORTS:
            continue

        first_date = min(report.date for report in qualifying)
        if (report_date - first_date).days >= settings.CHRONIC_MIN_SPAN_DAYS:
            return record.region_id
    return None


def chronic_pain_alert(region_id: BodyRegion) -> Alert:
    return Alert(
        kind="chronic_pain",
        title="Chronic pain notice",
        body=(
            f"Pain in your {region_label(region_id).lower()} has lasted for a month. "
            "A visit to a clinic is recommended."
        ),
        region_id=region_id,
    )


# ====================================================
# REPORT SUMMARY
# ====================================================

def risk_label(pain_level: int) -> str:
    if pain_level >= 8:
        return "danger"
    if pain_level >= 6:
        return "caution"
    if pain_level >= 4:
        return "moderate"
    return "safe"


def summarize(report: ReportBase) -> ReportSummary:
    return ReportSummary(
        date=report.date,
        daily_log=report.daily_log,
        has_pain=bool(report.pain_records),
        records=[
            PainRecordSummary(
                **record.model_dump(),
                label=region_label(record.region_id),
                side_label=SIDE_LABELS[record.side],
                risk=risk_label(record.pain_level),
            )
            for record in report.pain_records
        ],
    )


# ====================================================
# DASHBOARD
# ====================================================

def dashboard_window(history: Sequence[ReportBase], period: str) -> List[ReportBase]:
    """Newest ``period`` reports from newest-first history, oldest first."""
    size = settings.WEEKLY_WINDOW if period == "weekly" else settings.MONTHLY_WINDOW
    return list(reversed(list(history)[:size]))


def chart_point(report: ReportBase) -> Dict[str, Any]:
    log = report.daily_log
    point: Dict[str, Any] = {
        "date": report.date.strftime("%m-%d"),
        "sitting": log.times.sitting,
        "standing": log.times.standing,
        "sleeping": log.times.sleeping,
        "driving": log.times.driving,
        "high": log.exercise.high,
        "mid": log.exercise.mid,
        "low": log.exercise.low,
    }
    levels = {r.region_id: r.pain_level for r in report.pain_records}
    for region in REGION_REPOSITORY:
        point[region["id"].value] = levels.get(region["id"], 0)
    return point


def build_dashboard(history: Sequence[ReportBase], period: str) -> Dict[str, Any]:
    window = dashboard_window(history, period)
    records = records_in(window)
    return {
        "period": period,
        "health_score": compute_health_score(records),
        "average_pain": round(average_pain(records), 2),
        "report_count": len(window),
        "series": [chart_point(report) for report in window],
    }

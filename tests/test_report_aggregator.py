"""Tests for report analytics: health score, alerts, chronic detection, dashboard."""
from datetime import date, timedelta
from uuid import uuid4

import pytest

from app.schemas.pain_report import DailyLogDraft, PainRecord, ReportBase
from app.services import report_aggregator as agg

TODAY = date(2026, 10, 19)
USER = uuid4()


def record(region="knee", level=5, side="left"):
    return PainRecord(region_id=region, side=side, pain_level=level)


def report(days_ago, *records, sitting=0):
    day = TODAY - timedelta(days=days_ago)
    return ReportBase(
        user_id=USER,
        date=day,
        daily_log=DailyLogDraft(date=day, times={"sitting": sitting}),
        pain_records=list(records),
    )


class TestHealthScore:
    def test_known_values(self):
        assert agg.compute_health_score([]) == 100
        assert agg.compute_health_score([record(level=10)]) == 0
        assert agg.compute_health_score([record(level=1), record(level=1)]) == 90

    def test_rounds_half_up(self):
        # average 8.75 -> 12.5 -> 13
        levels = [8, 9, 9, 9]
        assert agg.compute_health_score([record(level=lv) for lv in levels]) == 13

    def test_decreases_with_average_pain(self):
        scores = [agg.compute_health_score([record(level=lv)]) for lv in range(1, 11)]
        assert scores == sorted(scores, reverse=True)
        assert all(0 <= s <= 100 for s in scores)


class TestHighPain:
    def test_fires_at_threshold(self):
        assert agg.high_pain_alert([record(level=7)]).kind == "high_pain"
        assert agg.high_pain_alert([record(level=6), record("back", 3, "center")]) is None
        assert agg.high_pain_alert([]) is None


class TestChronicDetection:
    def test_four_reports_over_25_days_flags_region(self):
        history = [report(d, record("knee", 3)) for d in (25, 18, 10, 4)]
        region = agg.find_chronic_region(TODAY, [record("knee", 5)], history)
        assert region == "knee"

    def test_three_reports_are_not_enough(self):
        history = [report(d, record("knee", 3)) for d in (25, 10, 4)]
        assert agg.find_chronic_region(TODAY, [record("knee", 5)], history) is None

    def test_span_shorter_than_25_days_does_not_flag(self):
        history = [report(d, record("knee", 3)) for d in (24, 18, 10, 4)]
        assert agg.find_chronic_region(TODAY, [record("knee", 5)], history) is None

    def test_todays_own_report_is_not_counted(self):
        history = [report(d, record("knee", 3)) for d in (25, 10, 4)]
        history.append(report(0, record("knee", 5)))
        assert agg.find_chronic_region(TODAY, [record("knee", 5)], history) is None

    def test_reports_outside_lookback_are_ignored(self):
        history = [report(d, record("knee", 3)) for d in (40, 25, 10, 4)]
        assert agg.find_chronic_region(TODAY, [record("knee", 5)], history) is None

    def test_first_qualifying_region_wins(self):
        history = [
            report(d, record("knee", 3), record("back", 4, "center"))
            for d in (30, 20, 10, 5)
        ]
        records = [record("back", 2, "center"), record("knee", 6)]
        assert agg.find_chronic_region(TODAY, records, history) == "back"

    def test_other_regions_do_not_count(self):
        history = [report(d, record("elbow", 3)) for d in (30, 20, 10, 5)]
        assert agg.find_chronic_region(TODAY, [record("knee", 5)], history) is None


class TestSummary:
    @pytest.mark.parametrize(
        "level,label",
        [(10, "danger"), (8, "danger"), (7, "caution"), (6, "caution"), (4, "moderate"), (3, "safe"), (1, "safe")],
    )
    def test_risk_label(self, level, label):
        assert agg.risk_label(level) == label

    def test_summarize_labels_records(self):
        summary = agg.summarize(report(0, record("hand_wrist", 8, "both")))
        assert summary.has_pain is True
        item = summary.records[0]
        assert (item.label, item.side_label, item.risk) == ("Hand/Wrist", "Both", "danger")


class TestDashboard:
    def test_empty_history(self):
        data = agg.build_dashboard([], "weekly")
        assert data["health_score"] == 100
        assert data["series"] == []
        assert data["report_count"] == 0

    def test_weekly_window_is_last_seven_oldest_first(self):
        history = [report(d, record("knee", 2), sitting=d) for d in range(10)]  # newest first
        data = agg.build_dashboard(history, "weekly")

        assert data["report_count"] == 7
        assert [p["sitting"] for p in data["series"]] == [6, 5, 4, 3, 2, 1, 0]
        assert data["series"][-1]["date"] == TODAY.strftime("%m-%d")
        assert data["health_score"] == 80

    def test_chart_point_has_every_region(self):
        point = agg.chart_point(report(0, record("knee", 4)))
        assert point["knee"] == 4
        assert point["neck"] == 0
        assert point["ankle_foot"] == 0

    def test_report_without_pain_scores_100(self):
        data = agg.build_dashboard([report(0)], "monthly")
        assert data["health_score"] == 100
        assert data["report_count"] == 1

"""Tests for the survey walk."""
import pytest

from app.core.exceptions import ValidationError
from app.schemas.pain_report import SelectedRegion, SurveyAnswers
from app.schemas.session import SurveyPhase
from app.services import survey


@pytest.fixture
def regions():
    return (
        SelectedRegion(region_id="shoulder", side="right"),
        SelectedRegion(region_id="back", side="center"),
        SelectedRegion(region_id="knee", side="both"),
    )


def test_empty_selection_goes_straight_to_zero_pain():
    state = survey.start(())
    assert state.phase == SurveyPhase.zero_pain
    assert state.records == ()
    assert survey.ready_to_save(state)
    assert state.current_region is None


def test_walks_every_region_once(regions):
    state = survey.start(regions)
    assert state.current_region == regions[0]

    for level, region in zip((3, 5, 7), regions):
        assert state.phase == SurveyPhase.ask_region
        assert state.current_region == region
        state = survey.submit_current(state, SurveyAnswers(pain_level=level))

    assert state.phase == SurveyPhase.complete
    assert {r.region_id for r in state.records} == {r.region_id for r in regions}
    assert len(state.records) == 3
    knee = [r for r in state.records if r.region_id == "knee"][0]
    assert knee.side == "both"
    assert knee.pain_level == 7


def test_draft_resets_to_defaults_after_advancing(regions):
    state = survey.start(regions)
    state = survey.submit_current(
        state,
        SurveyAnswers(pain_level=9, history_12_months=True, work_interference=True, recent_7_days=True),
    )
    assert state.draft == SurveyAnswers()
    assert state.draft.pain_level == 1
    assert state.records[0].work_interference is True


@pytest.mark.parametrize("level", [0, 11, -3])
def test_out_of_range_pain_level_is_rejected_without_change(regions, level):
    state = survey.start(regions)
    with pytest.raises(ValidationError):
        survey.submit_current(state, SurveyAnswers(pain_level=level))
    assert state.current_index == 0
    assert state.records == ()


def test_resubmitting_a_region_replaces_its_record(regions):
    state = survey.start(regions[:1])
    state = survey.submit_current(state, SurveyAnswers(pain_level=4))
    failed = survey.mark_save_failed(state)

    assert failed.current_region == regions[0]
    retried = survey.submit_current(failed, SurveyAnswers(pain_level=6))

    assert len(retried.records) == 1
    assert retried.records[0].pain_level == 6
    assert retried.phase == SurveyPhase.complete


def test_upsert_record_keeps_one_per_region(regions):
    state = survey.start(regions[:1])
    first = survey.submit_current(state, SurveyAnswers(pain_level=2)).records
    records = survey.upsert_record(first, first[0].model_copy(update={"pain_level": 8}))
    assert [r.pain_level for r in records] == [8]


def test_cannot_submit_once_saved(regions):
    state = survey.start(regions[:1])
    state = survey.mark_saved(survey.submit_current(state, SurveyAnswers(pain_level=2)))
    with pytest.raises(ValidationError):
        survey.submit_current(state, SurveyAnswers(pain_level=3))
    with pytest.raises(ValidationError):
        survey.submit_current(survey.start(()), SurveyAnswers())

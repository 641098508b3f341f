"""Tests for the per-user session registry."""
import threading
from uuid import uuid4

import pytest

from app.core.exceptions import ValidationError
from app.data.body_regions import REGION_REPOSITORY, RegionGroup, Side
from app.schemas.pain_report import SurveyAnswers
from app.schemas.user_auth import Identity
from app.services import session_state
from app.services.session_state import SessionRegistry


@pytest.fixture
def identity():
    return Identity(id=uuid4(), email="session@example.com", display_name="Session")


def test_update_applies_reducer_and_stores_result(identity):
    registry = SessionRegistry()
    state = registry.update(identity, session_state.toggle_region, "knee", Side.LEFT)

    assert [e.region_id for e in state.selection] == ["knee"]
    assert registry.get(identity) == state


def test_failing_reducer_stores_nothing(identity):
    registry = SessionRegistry()
    before = registry.update(identity, session_state.toggle_region, "neck", Side.LEFT)

    with pytest.raises(ValidationError):
        registry.update(identity, session_state.toggle_region, "knee", Side.BOTH)
    assert registry.get(identity) == before


def test_overlapping_toggles_are_all_kept(identity):
    registry = SessionRegistry()
    regions = [r["id"] for r in REGION_REPOSITORY if r["group"] == RegionGroup.BILATERAL]
    barrier = threading.Barrier(len(regions))

    def click(region):
        barrier.wait()
        registry.update(identity, session_state.toggle_region, region, Side.LEFT)

    threads = [threading.Thread(target=click, args=(region,)) for region in regions]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    selected = {e.region_id for e in registry.get(identity).selection}
    assert selected == set(regions)


def test_mark_save_failed_keeps_answers(identity):
    registry = SessionRegistry()
    registry.update(identity, session_state.toggle_region, "elbow", Side.RIGHT)
    registry.update(identity, session_state.start_survey)
    answered = registry.update(
        identity, session_state.submit_answers, SurveyAnswers(pain_level=5)
    )

    failed = registry.update(identity, session_state.mark_save_failed, "offline")

    assert failed.survey.phase == "save_failed"
    assert failed.error == "offline"
    assert failed.pain_records == answered.pain_records

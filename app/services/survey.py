# services/survey.py
"""Forward-only walk over the selected regions, one survey per region."""
from typing import Sequence

from app.core.exceptions import ValidationError
from app.schemas.pain_report import PainRecord, SelectedRegion, SurveyAnswers
from app.schemas.session import SurveyPhase, SurveyRead, SurveyState

ANSWERABLE_PHASES = (SurveyPhase.ask_region, SurveyPhase.save_failed)


def start(regions: Sequence[SelectedRegion]) -> SurveyState:
    """Begin a survey over the given selection, in its order."""
    regions = tuple(regions)
    if not regions:
        return SurveyState(phase=SurveyPhase.zero_pain)
    return SurveyState(phase=SurveyPhase.ask_region, regions=regions)


def validate_answers(answers: SurveyAnswers) -> None:
    level = answers.pain_level
    if isinstance(level, bool) or not isinstance(level, int) or not 1 <= level <= 10:
        raise ValidationError(f"Pain level must be an integer between 1 and 10, got {level!r}")


def upsert_record(records: Sequence[PainRecord], record: PainRecord) -> tuple:
    """Replace any record for the same region, appending the new one last."""
    others = tuple(r for r in records if r.region_id != record.region_id)
    return others + (record,)


def submit_current(state: SurveyState, answers: SurveyAnswers) -> SurveyState:
    """
    Record the answers for the current region and move on.

    On the last region the state becomes ``complete`` and ``records`` holds
    the full list to save. A failed save leaves the state at ``save_failed``
    on the last region so the same submit can be repeated.

    Raises:
        ValidationError: If answers are out of range or nothing is being asked
    """
    if state.phase not in ANSWERABLE_PHASES or not state.regions:
        raise ValidationError(f"No region is awaiting answers (survey is {state.phase.value})")
    validate_answers(answers)

    region = state.regions[state.current_index]
    record = PainRecord(
        region_id=region.region_id,
        side=region.side,
        pain_level=answers.pain_level,
        history_12_months=answers.history_12_months,
        work_interference=answers.work_interference,
        recent_7_days=answers.recent_7_days,
    )
    records = upsert_record(state.records, record)

    if state.is_last_step:
        return state.model_copy(
            update={"phase": SurveyPhase.complete, "records": records, "draft": answers}
        )
    return state.model_copy(
        update={
            "current_index": state.current_index + 1,
            "records": records,
            "draft": SurveyAnswers(),
        }
    )


def mark_saved(state: SurveyState) -> SurveyState:
    return state.model_copy(update={"phase": SurveyPhase.saved})


def mark_save_failed(state: SurveyState) -> SurveyState:
    return state.model_copy(update={"phase": SurveyPhase.save_failed})


def ready_to_save(state: SurveyState) -> bool:
    """True once every question is answered, or none were needed."""
    return state.phase in (SurveyPhase.complete, SurveyPhase.zero_pain, SurveyPhase.save_failed)


def to_read(state: SurveyState) -> SurveyRead:
    return SurveyRead(
        phase=state.phase,
        current_index=state.current_index,
        total=len(state.regions),
        current_region=state.current_region,
        draft=state.draft,
        records=list(state.records),
    )

"""Explicit state for a results view, updated by pure functions."""
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict

from survey_results.schemas.results import SurveyResults


class ResultsState(BaseModel):
    """Snapshot of what a results view shows. Never mutated in place."""
    survey_id: str
    results: Optional[SurveyResults] = None
    loading: bool = False
    error: Optional[str] = None
    refreshed_at: Optional[datetime] = None
    refresh_count: int = 0

    model_config = ConfigDict(frozen=True)


def initial_state(survey_id: str) -> ResultsState:
    return ResultsState(survey_id=survey_id)


def begin_load(state: ResultsState) -> ResultsState:
    return state.model_copy(update={"loading": True})


def apply_snapshot(
    state: ResultsState,
    results: SurveyResults,
    now: Optional[datetime] = None,
) -> ResultsState:
    """Replace the shown results wholesale with a freshly computed snapshot."""
    return state.model_copy(update={
        "results": results,
        "loading": False,
        "error": None,
        "refreshed_at": now or datetime.now(timezone.utc),
        "refresh_count": state.refresh_count + 1,
    })


def record_failure(state: ResultsState, message: str, silent: bool = False) -> ResultsState:
    """
    Record a failed fetch.

    Silent failures (background refreshes) keep the last good results and
    leave ``error`` untouched; loud failures expose the message.
    """
    if silent:
        return state.model_copy(update={"loading": False})
    return state.model_copy(update={"loading": False, "error": message})

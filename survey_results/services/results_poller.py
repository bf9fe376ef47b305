"""Periodic refresh of survey results."""
from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Awaitable, Callable, Optional

from fastapi import HTTPException

from survey_results.core.http_client import SurveyAPIError
from survey_results.schemas.results import SurveyResults
from survey_results.services.results_state import (
    ResultsState, apply_snapshot, begin_load, initial_state, record_failure
)

logger = logging.getLogger(__name__)

FetchResults = Callable[[str], Awaitable[SurveyResults]]
StateListener = Callable[[ResultsState], None]


def _failure_message(exc: Exception) -> str:
    if isinstance(exc, HTTPException):
        return str(exc.detail)
    return str(exc)


class ResultsPoller:
    """
    Keeps a results state fresh by refetching on a fixed interval.

    Each refresh recomputes results from a new snapshot and replaces the
    state wholesale. The first load reports failures; later refreshes
    fail silently and keep the last good results.
    """

    def __init__(
        self,
        fetch: FetchResults,
        survey_id: str,
        interval: float = 5.0,
        on_update: Optional[StateListener] = None,
    ) -> None:
        self._fetch = fetch
        self._interval = interval
        self._on_update = on_update
        self._state = initial_state(survey_id)
        self._task: asyncio.Task | None = None

    @property
    def state(self) -> ResultsState:
        return self._state

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def _set_state(self, state: ResultsState) -> None:
        self._state = state
        if self._on_update is not None:
            self._on_update(state)

    async def refresh(self, silent: bool = False) -> ResultsState:
        """Fetch one snapshot and fold it into the state."""
        if not silent:
            self._set_state(begin_load(self._state))
        try:
            results = await self._fetch(self._state.survey_id)
        except (HTTPException, SurveyAPIError) as exc:
            message = _failure_message(exc)
            if silent:
                logger.warning("Background refresh of survey %s failed: %s", self._state.survey_id, message)
            else:
                logger.error("Loading results for survey %s failed: %s", self._state.survey_id, message)
            self._set_state(record_failure(self._state, message, silent=silent))
            return self._state
        except Exception as exc:
            self._set_state(record_failure(self._state, str(exc), silent=silent))
            if not silent:
                raise
            logger.exception("Background refresh of survey %s failed", self._state.survey_id)
            return self._state

        self._set_state(apply_snapshot(self._state, results))
        return self._state

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            await self.refresh(silent=True)

    async def start(self) -> ResultsState:
        """Load once, then keep refreshing in the background."""
        if self.running:
            return self._state
        await self.refresh()
        self._task = asyncio.create_task(self._run())
        return self._state

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None

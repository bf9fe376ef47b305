"""Print live results for a survey, refreshing until interrupted.

Usage: python scripts/watch_results.py <survey_id>
The bearer token is read from SURVEY_API_TOKEN.
"""
import asyncio
import logging
import os
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from survey_results.core.config import settings
from survey_results.core.http_client import get_survey_api_client
from survey_results.repositories.survey_repository import SurveyRepository
from survey_results.schemas.results import ChoiceSummary
from survey_results.services.results_poller import ResultsPoller
from survey_results.services.results_service import ResultsService
from survey_results.services.results_state import ResultsState

logging.basicConfig(level=logging.WARNING)


def print_state(state: ResultsState) -> None:
    if state.loading:
        return
    if state.error:
        print(f"❌  {state.error}")
        return
    results = state.results
    if results is None:
        return

    print(f"\n📊  {results.title}: {results.total_responses} responses (refresh #{state.refresh_count})")
    for index, summary in enumerate(results.questions, start=1):
        print(f"  {index}. {summary.title} [{summary.total}]")
        if isinstance(summary, ChoiceSummary):
            for option in summary.options:
                print(f"      {option.label:<20} {option.count:>4}  {option.percentage:5.1f}%")
        else:
            for text in summary.answers:
                print(f"      - {text}")


async def watch(survey_id: str) -> None:
    api_client = get_survey_api_client()
    client = await api_client.get_client()
    service = ResultsService(SurveyRepository(client, token=os.environ.get("SURVEY_API_TOKEN")))
    poller = ResultsPoller(
        service.get_results,
        survey_id,
        interval=settings.RESULTS_REFRESH_SECONDS,
        on_update=print_state,
    )

    await poller.start()
    try:
        while True:
            await asyncio.sleep(3600)
    finally:
        await poller.stop()
        await api_client.shutdown()


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(1)

    try:
        asyncio.run(watch(sys.argv[1]))
    except KeyboardInterrupt:
        print("\nStopped.")

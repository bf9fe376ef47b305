"""Results service."""
import logging
from typing import Any, Dict, List

from fastapi import HTTPException, status

from survey_results.core.config import settings
from survey_results.core.http_client import SurveyAPIError
from survey_results.repositories.survey_repository import SurveyRepository
from survey_results.schemas.response import ResponseDraft, SurveyResponse
from survey_results.schemas.results import PublishCheck, RespondedSurveys, SurveyResults
from survey_results.schemas.survey import Survey
from survey_results.services.respondent_service import (
    SubmissionError, build_submission, responded_survey_ids
)
from survey_results.services.summary_service import build_results
from survey_results.services.survey_rules import is_expired, publish_issues

logger = logging.getLogger(__name__)


def http_error(exc: SurveyAPIError) -> HTTPException:
    """Translate an upstream failure into the error returned to our callers."""
    if exc.status_code is None:
        code = status.HTTP_503_SERVICE_UNAVAILABLE
    elif exc.status_code >= 500:
        code = status.HTTP_502_BAD_GATEWAY
    else:
        code = exc.status_code
    return HTTPException(status_code=code, detail=exc.message)


class ResultsService:
    """Fetches survey snapshots and derives their results."""

    def __init__(self, repository: SurveyRepository):
        self.repository = repository

    async def get_survey(self, survey_id: str) -> Survey:
        """
        Get survey by ID.

        Raises:
            HTTPException: If the survey API fails or the survey is not found
        """
        try:
            return await self.repository.get_survey(survey_id)
        except SurveyAPIError as exc:
            raise http_error(exc) from exc

    async def get_responses(self, survey_id: str) -> List[SurveyResponse]:
        try:
            return await self.repository.get_survey_responses(survey_id)
        except SurveyAPIError as exc:
            raise http_error(exc) from exc

    async def get_results(self, survey_id: str) -> SurveyResults:
        """
        Compute results from a fresh snapshot of the survey and its responses.

        Raises:
            HTTPException: If either fetch fails
        """
        survey = await self.get_survey(survey_id)
        responses = await self.get_responses(survey_id)
        logger.info("Summarizing %d responses for survey %s", len(responses), survey_id)
        return build_results(survey, responses, placeholder=settings.NO_RESPONSE_LABEL)

    async def get_publish_check(self, survey_id: str) -> PublishCheck:
        survey = await self.get_survey(survey_id)
        issues = publish_issues(survey)
        return PublishCheck(survey_id=survey.id, publishable=not issues, issues=issues)

    async def get_responded_surveys(self, email: str) -> RespondedSurveys:
        """
        Find the published surveys a respondent already answered.

        A survey whose responses cannot be fetched is skipped.

        Raises:
            HTTPException: If the published survey list cannot be fetched
        """
        try:
            surveys = await self.repository.get_published_surveys()
        except SurveyAPIError as exc:
            raise http_error(exc) from exc

        responses_by_survey: Dict[str, List[SurveyResponse]] = {}
        for survey in surveys:
            try:
                responses_by_survey[survey.id] = await self.repository.get_survey_responses(survey.id)
            except SurveyAPIError as exc:
                logger.warning("Skipping survey %s while checking responses: %s", survey.id, exc)

        return RespondedSurveys(email=email, survey_ids=responded_survey_ids(responses_by_survey, email))

    async def submit_response(self, survey_id: str, draft: ResponseDraft) -> Dict[str, Any]:
        """
        Validate and forward a respondent's answers.

        Raises:
            HTTPException: If the survey is closed, the draft is incomplete
                or the survey API rejects the submission
        """
        try:
            survey = await self.repository.get_public_survey(survey_id)
        except SurveyAPIError as exc:
            raise http_error(exc) from exc

        if not survey.is_published:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="This survey is not published"
            )
        if is_expired(survey):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="This survey has expired"
            )

        try:
            submission = build_submission(survey, draft)
        except SubmissionError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail={"message": str(exc), "question_ids": exc.question_ids}
            ) from exc

        try:
            stored = await self.repository.submit_response(survey_id, submission)
        except SurveyAPIError as exc:
            raise http_error(exc) from exc

        logger.info("Forwarded response for survey %s", survey_id)
        return stored

"""Survey API repository."""
import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from survey_results.core.http_client import (
    NETWORK_ERROR_MESSAGE, SurveyAPIError, error_for_response
)
from survey_results.schemas.response import ResponseSubmission, SurveyResponse
from survey_results.schemas.survey import Survey

logger = logging.getLogger(__name__)

INVALID_PAYLOAD_MESSAGE = "Survey API returned an unexpected payload"


class SurveyRepository:
    """Data access for surveys and responses held by the survey API."""

    def __init__(self, client: httpx.AsyncClient, token: Optional[str] = None):
        self.client = client
        self.token = token

    def _headers(self) -> Dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    async def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Any:
        try:
            response = await self.client.request(method, path, json=json, headers=self._headers())
        except httpx.HTTPError as exc:
            logger.error("Survey API %s %s failed: %s", method, path, exc)
            raise SurveyAPIError(NETWORK_ERROR_MESSAGE) from exc

        if response.is_error:
            logger.error("Survey API %s %s returned %s", method, path, response.status_code)
            raise error_for_response(response)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            logger.error("Survey API %s %s returned invalid JSON", method, path)
            raise SurveyAPIError(INVALID_PAYLOAD_MESSAGE, 502) from exc

    def _parse_survey(self, data: Any) -> Survey:
        try:
            return Survey.model_validate(data)
        except ValidationError as exc:
            logger.error("Invalid survey payload: %s", exc)
            raise SurveyAPIError(INVALID_PAYLOAD_MESSAGE, 502) from exc

    def _parse_surveys(self, data: Any) -> List[Survey]:
        if not isinstance(data, list):
            raise SurveyAPIError(INVALID_PAYLOAD_MESSAGE, 502)
        return [self._parse_survey(item) for item in data]

    async def get_survey(self, survey_id: str) -> Survey:
        """Get a survey with its questions (owner view)."""
        return self._parse_survey(await self._request("GET", f"/surveys/{survey_id}"))

    async def get_public_survey(self, survey_id: str) -> Survey:
        """Get a survey as shown to respondents."""
        return self._parse_survey(await self._request("GET", f"/surveys/public/{survey_id}"))

    async def get_published_surveys(self) -> List[Survey]:
        return self._parse_surveys(await self._request("GET", "/surveys/published"))

    async def get_survey_responses(self, survey_id: str) -> List[SurveyResponse]:
        """Get every response submitted for a survey, in upstream order."""
        data = await self._request("GET", f"/surveys/{survey_id}/responses")
        if data is None:
            return []
        if not isinstance(data, list):
            raise SurveyAPIError(INVALID_PAYLOAD_MESSAGE, 502)
        # Malformed answers are dropped by SurveyResponse, malformed responses here
        responses = []
        for item in data:
            try:
                responses.append(SurveyResponse.model_validate(item))
            except ValidationError as exc:
                logger.warning("Skipping malformed response for survey %s: %s", survey_id, exc)
        return responses

    async def submit_response(self, survey_id: str, submission: ResponseSubmission) -> Dict[str, Any]:
        """Submit a respondent's answers; returns the stored response as sent by the API."""
        data = await self._request(
            "POST",
            f"/surveys/{survey_id}/responses",
            json=submission.model_dump(by_alias=True),
        )
        return data or {}

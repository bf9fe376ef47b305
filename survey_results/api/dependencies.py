"""API dependencies."""
from typing import Annotated, Optional

from fastapi import Depends, Header

from survey_results.core.http_client import get_survey_api_client
from survey_results.repositories.survey_repository import SurveyRepository
from survey_results.services.results_service import ResultsService


def get_bearer_token(
    authorization: Annotated[Optional[str], Header()] = None
) -> Optional[str]:
    """
    Extract the caller's bearer token so it can be forwarded upstream.

    The survey API validates the token; this service never inspects it.
    """
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def get_survey_repository(
    token: Annotated[Optional[str], Depends(get_bearer_token)]
) -> SurveyRepository:
    client = await get_survey_api_client().get_client()
    return SurveyRepository(client, token=token)


def get_results_service(
    repository: Annotated[SurveyRepository, Depends(get_survey_repository)]
) -> ResultsService:
    return ResultsService(repository)


ResultsServiceDep = Annotated[ResultsService, Depends(get_results_service)]

"""Survey results router."""
from typing import Any, Dict

from fastapi import APIRouter, Query

from survey_results.api.dependencies import ResultsServiceDep
from survey_results.schemas.response import ResponseDraft
from survey_results.schemas.results import PublishCheck, RespondedSurveys, SurveyResults

router = APIRouter(prefix="/surveys", tags=["Survey Results"])


@router.get("/responded", response_model=RespondedSurveys)
async def get_responded_surveys(
    service: ResultsServiceDep,
    email: str = Query(..., min_length=1)
):
    """
    List the published surveys already answered by a respondent.

    Matching ignores case and surrounding whitespace in the email.
    """
    return await service.get_responded_surveys(email)


@router.get("/{survey_id}/results", response_model=SurveyResults)
async def get_survey_results(survey_id: str, service: ResultsServiceDep):
    """
    Get per-question results for a survey.

    Computed from the current responses on every call; clients refresh by
    calling again.
    """
    return await service.get_results(survey_id)


@router.get("/{survey_id}/publish-check", response_model=PublishCheck)
async def check_survey_publishable(survey_id: str, service: ResultsServiceDep):
    """
    Check whether a survey can be published.
    """
    return await service.get_publish_check(survey_id)


@router.post("/{survey_id}/responses", status_code=201)
async def submit_survey_response(
    survey_id: str,
    draft: ResponseDraft,
    service: ResultsServiceDep
) -> Dict[str, Any]:
    """
    Submit a respondent's answers.

    Rejects closed or expired surveys and drafts missing required answers
    before forwarding to the survey API.
    """
    return await service.submit_response(survey_id, draft)

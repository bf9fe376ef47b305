"""API tests for the results endpoints."""
from datetime import datetime, timedelta, timezone
from typing import Annotated, Optional

import pytest
from fastapi import Depends, status
from httpx import ASGITransport, AsyncClient

from survey_results.api.dependencies import get_bearer_token, get_survey_repository
from survey_results.core.http_client import SurveyAPIError
from survey_results.main import app


class FakeRepository:
    """In-memory stand-in for the survey API."""

    def __init__(self, surveys, responses):
        self.surveys = {survey.id: survey for survey in surveys}
        self.responses = responses
        self.failing = {}
        self.token = None
        self.submissions = []

    def _check(self, survey_id):
        if survey_id in self.failing:
            raise self.failing[survey_id]
        if survey_id not in self.surveys:
            raise SurveyAPIError("The requested resource was not found", 404)

    async def get_survey(self, survey_id):
        self._check(survey_id)
        return self.surveys[survey_id]

    async def get_public_survey(self, survey_id):
        return await self.get_survey(survey_id)

    async def get_published_surveys(self):
        return [survey for survey in self.surveys.values() if survey.is_published]

    async def get_survey_responses(self, survey_id):
        self._check(survey_id)
        return self.responses.get(survey_id, [])

    async def submit_response(self, survey_id, submission):
        self.submissions.append((survey_id, submission))
        return {"id": "r-new", "surveyId": survey_id}


@pytest.fixture
def repository(feedback_survey, make_survey, make_question, make_response):
    published = feedback_survey.model_copy(update={"is_published": True})
    other = make_survey(
        [make_question("q1", options=["A", "B"])],
        survey_id="s2",
        is_published=True,
    )
    responses = {
        "s1": [
            make_response({"recommend": "Yes", "channels": ["Email"], "comments": "Great"},
                          respondent_id="Ana@Example.com"),
            make_response({"recommend": "No", "comments": ""}),
            make_response({"recommend": "Yes", "ghost": "Yes"}),
        ],
        "s2": [make_response({"q1": "A"}, respondent_id="bo@example.com", survey_id="s2")],
    }
    return FakeRepository([published, other], responses)


@pytest.fixture
def api(repository):
    def override(token: Annotated[Optional[str], Depends(get_bearer_token)]):
        repository.token = token
        return repository

    app.dependency_overrides[get_survey_repository] = override
    yield AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
    app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_health(api):
    async with api as client:
        response = await client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_results(api, repository):
    async with api as client:
        response = await client.get("/surveys/s1/results", headers={"Authorization": "Bearer abc"})

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert repository.token == "abc"
    assert body["surveyId"] == "s1"
    assert body["totalResponses"] == 3
    assert [q["questionId"] for q in body["questions"]] == ["recommend", "channels", "rating", "comments"]

    recommend = body["questions"][0]
    assert recommend["kind"] == "choice"
    assert recommend["total"] == 3
    assert recommend["options"] == [
        {"label": "Yes", "count": 2, "percentage": 66.7},
        {"label": "No", "count": 1, "percentage": 33.3},
    ]

    rating = body["questions"][2]
    assert rating["total"] == 0
    assert {o["percentage"] for o in rating["options"]} == {0.0}

    comments = body["questions"][3]
    assert comments["kind"] == "text"
    assert comments["answers"] == ["Great", "no response"]


@pytest.mark.asyncio
async def test_results_not_found(api):
    async with api as client:
        response = await client.get("/surveys/missing/results")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "The requested resource was not found"


@pytest.mark.asyncio
async def test_results_upstream_unreachable(api, repository):
    repository.failing["s1"] = SurveyAPIError("No response received from server")

    async with api as client:
        response = await client.get("/surveys/s1/results")

    assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE


@pytest.mark.asyncio
async def test_publish_check(api):
    async with api as client:
        response = await client.get("/surveys/s1/publish-check")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"surveyId": "s1", "publishable": True, "issues": []}


@pytest.mark.asyncio
async def test_responded_surveys_skip_failing_survey(api, repository):
    repository.failing["s2"] = SurveyAPIError("Something went wrong on the server", 500)

    async with api as client:
        response = await client.get("/surveys/responded", params={"email": " ana@example.com"})

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["surveyIds"] == ["s1"]


@pytest.mark.asyncio
async def test_submit_response(api, repository):
    payload = {"respondentEmail": "ana@example.com", "answers": {"recommend": "Yes", "channels": ["Chat"]}}

    async with api as client:
        response = await client.post("/surveys/s1/responses", json=payload)

    assert response.status_code == status.HTTP_201_CREATED
    [(survey_id, submission)] = repository.submissions
    assert survey_id == "s1"
    assert [a.question_id for a in submission.answers] == ["recommend", "channels", "rating", "comments"]
    assert submission.answers[1].value == ["Chat"]


@pytest.mark.asyncio
async def test_submit_response_rejects_missing_email(api, repository):
    async with api as client:
        response = await client.post("/surveys/s1/responses", json={"answers": {"recommend": "Yes"}})

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["detail"]["message"] == "Respondent email is required"
    assert repository.submissions == []


@pytest.mark.asyncio
async def test_submit_response_rejects_expired_survey(api, repository):
    survey = repository.surveys["s1"]
    repository.surveys["s1"] = survey.model_copy(
        update={"expires_at": datetime.now(timezone.utc) - timedelta(hours=1)}
    )

    async with api as client:
        response = await client.post(
            "/surveys/s1/responses",
            json={"respondentEmail": "ana@example.com", "answers": {}},
        )

    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["detail"] == "This survey has expired"

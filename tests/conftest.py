"""Pytest configuration and fixtures."""
from datetime import datetime, timezone

import pytest

from survey_results.schemas.response import Answer, SurveyResponse
from survey_results.schemas.survey import Question, Survey


COMPLETED_AT = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_question():
    """Build a question; options may be given as a list."""

    def _make(question_id, type="multiple-choice", options=(), order=0, **kwargs):
        return Question(
            id=question_id,
            survey_id=kwargs.pop("survey_id", "s1"),
            title=kwargs.pop("title", f"Question {question_id}"),
            type=type,
            options=list(options),
            order=order,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_survey():
    def _make(questions, survey_id="s1", **kwargs):
        return Survey(
            id=survey_id,
            title=kwargs.pop("title", "Customer feedback"),
            questions=list(questions),
            **kwargs,
        )

    return _make


@pytest.fixture
def make_response():
    """Build a response from ``{question_id: value}``, answers kept in insertion order."""
    counter = {"n": 0}

    def _make(values, respondent_id=None, survey_id="s1"):
        counter["n"] += 1
        response_id = f"r{counter['n']}"
        return SurveyResponse(
            id=response_id,
            survey_id=survey_id,
            respondent_id=respondent_id,
            answers=[
                Answer(
                    id=f"{response_id}-{question_id}",
                    question_id=question_id,
                    survey_id=survey_id,
                    value=value,
                )
                for question_id, value in values.items()
            ],
            completed_at=COMPLETED_AT,
        )

    return _make


@pytest.fixture
def feedback_survey(make_question, make_survey):
    """Survey covering every question type, delivered out of order."""
    return make_survey([
        make_question("comments", type="text", order=3),
        make_question("recommend", options=["Yes", "No"], order=0),
        make_question("channels", type="checkbox", options=["Email", "Phone", "Chat"], order=1),
        make_question("rating", type="scale", order=2),
    ])

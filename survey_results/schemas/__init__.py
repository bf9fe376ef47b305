"""Pydantic schemas for survey data and derived results."""
from survey_results.schemas.survey import (
    QuestionType, Question, Survey, DEFAULT_SCALE_OPTIONS
)
from survey_results.schemas.response import (
    SingleValue, MultiValue, UnreadableValue, AnswerValue,
    Answer, SurveyResponse, ResponseDraft, ResponseSubmission, SubmittedAnswer
)
from survey_results.schemas.results import (
    OptionResult, ChoiceSummary, TextSummary, QuestionSummary,
    ResponseDigest, SurveyResults, PublishIssue, PublishCheck, RespondedSurveys
)

__all__ = [
    "QuestionType",
    "Question",
    "Survey",
    "DEFAULT_SCALE_OPTIONS",
    "SingleValue",
    "MultiValue",
    "UnreadableValue",
    "AnswerValue",
    "Answer",
    "SurveyResponse",
    "ResponseDraft",
    "ResponseSubmission",
    "SubmittedAnswer",
    "OptionResult",
    "ChoiceSummary",
    "TextSummary",
    "QuestionSummary",
    "ResponseDigest",
    "SurveyResults",
    "PublishIssue",
    "PublishCheck",
    "RespondedSurveys",
]

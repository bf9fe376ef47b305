"""Respondent-side helpers: duplicate detection and response submission."""
from typing import Iterable, List, Mapping, Optional, Sequence, Union

from survey_results.schemas.response import (
    ResponseDraft, ResponseSubmission, SubmittedAnswer, SurveyResponse
)
from survey_results.schemas.survey import Survey


class SubmissionError(ValueError):
    """Raised when a response draft cannot be submitted."""

    def __init__(self, message: str, question_ids: Optional[List[str]] = None):
        self.question_ids = question_ids or []
        super().__init__(message)


def _normalize_identity(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def has_responded(responses: Iterable[SurveyResponse], email: str) -> bool:
    """
    Check whether a respondent already answered, by email.

    Comparison ignores case and surrounding whitespace. Several responses
    from the same respondent are allowed and simply all match.
    """
    target = _normalize_identity(email)
    if not target:
        return False
    return any(_normalize_identity(response.respondent_id) == target for response in responses)


def responded_survey_ids(
    responses_by_survey: Mapping[str, Sequence[SurveyResponse]],
    email: str,
) -> List[str]:
    """Ids of the surveys whose responses include the respondent."""
    return [
        survey_id
        for survey_id, responses in responses_by_survey.items()
        if has_responded(responses, email)
    ]


def _as_list(value: Union[str, List[str], None]) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


def _is_blank(value: Union[str, List[str], None]) -> bool:
    return not any(item.strip() for item in _as_list(value))


def build_submission(survey: Survey, draft: ResponseDraft) -> ResponseSubmission:
    """
    Turn a respondent's draft into the payload expected by the survey API.

    Every survey question is included in question order; unanswered
    questions are sent as an empty list and single values as a
    one-element list. Answers to unknown question ids are dropped.

    Raises:
        SubmissionError: If the email is missing or a required question is unanswered
    """
    email = (draft.respondent_email or "").strip()
    if not email:
        raise SubmissionError("Respondent email is required")

    missing = [
        question.id
        for question in survey.questions
        if question.required and _is_blank(draft.answers.get(question.id))
    ]
    if missing:
        raise SubmissionError("Please answer all required questions", question_ids=missing)

    return ResponseSubmission(
        respondent_email=email,
        answers=[
            SubmittedAnswer(question_id=question.id, value=_as_list(draft.answers.get(question.id)))
            for question in survey.questions
        ],
    )

"""Per-question summaries of survey responses."""
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Sequence, Union

from survey_results.schemas.response import Answer, SurveyResponse, is_readable, normalized_values
from survey_results.schemas.results import (
    ChoiceSummary, OptionResult, ResponseDigest, SurveyResults, TextSummary
)
from survey_results.schemas.survey import Question, Survey
from survey_results.services.answer_index import index_answers
from survey_results.services.tally_service import tally_options

NO_RESPONSE = "no response"
TEXT_SEPARATOR = ", "


def percentage(count: int, total: int) -> float:
    """Share of ``total`` as a percentage with one decimal, ties rounded up; 0.0 when total is 0."""
    if total <= 0:
        return 0.0
    return float(Decimal(count / total * 100).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def display_text(answer: Answer, placeholder: str = NO_RESPONSE) -> str:
    """Render an answer as one line of text, joining multiple values."""
    text = TEXT_SEPARATOR.join(normalized_values(answer.value))
    return text if text else placeholder


def summarize_question(
    question: Question,
    answers: Sequence[Answer],
    placeholder: str = NO_RESPONSE,
) -> Union[ChoiceSummary, TextSummary]:
    """
    Summarize the answers to one question.

    Free-text questions, and option questions without any options, list
    the submitted texts. Every other question gets an option breakdown in
    authoring order.
    """
    tally = None if question.is_free_text else tally_options(question.effective_options, answers)

    if tally is None:
        texts = [display_text(answer, placeholder) for answer in answers if is_readable(answer.value)]
        return TextSummary(
            question_id=question.id,
            title=question.title,
            question_type=question.type,
            total=len(texts),
            answers=texts,
        )

    return ChoiceSummary(
        question_id=question.id,
        title=question.title,
        question_type=question.type,
        total=tally.total,
        options=[
            OptionResult(label=label, count=count, percentage=percentage(count, tally.total))
            for label, count in tally.counts.items()
        ],
    )


def summarize_survey(
    survey: Survey,
    responses: Sequence[SurveyResponse],
    placeholder: str = NO_RESPONSE,
) -> List[Union[ChoiceSummary, TextSummary]]:
    """
    Summarize every question of a survey, in question order.

    Questions without answers still get a summary with a zero total.
    Answers to questions that are not part of the survey are ignored.
    """
    index = index_answers(responses)
    return [
        summarize_question(question, index.get(question.id, []), placeholder)
        for question in survey.questions
    ]


def build_results(
    survey: Survey,
    responses: Sequence[SurveyResponse],
    placeholder: str = NO_RESPONSE,
    generated_at: Optional[datetime] = None,
) -> SurveyResults:
    """Wrap the question summaries of a snapshot together with its respondents."""
    return SurveyResults(
        survey_id=survey.id,
        title=survey.title,
        total_responses=len(responses),
        questions=summarize_survey(survey, responses, placeholder),
        respondents=[
            ResponseDigest(
                response_id=response.id,
                respondent_id=response.respondent_id,
                completed_at=response.completed_at,
            )
            for response in responses
        ],
        generated_at=generated_at or datetime.now(timezone.utc),
    )

"""Group submitted answers by question."""
from typing import Dict, Iterable, List

from survey_results.schemas.response import Answer, SurveyResponse


def answers_for_question(responses: Iterable[SurveyResponse], question_id: str) -> List[Answer]:
    """
    Collect every answer to one question across all responses.

    Order follows the responses, then the answers within each response.
    Responses without an answer for the question contribute nothing.
    """
    return [
        answer
        for response in responses
        for answer in response.answers
        if answer.question_id == question_id
    ]


def index_answers(responses: Iterable[SurveyResponse]) -> Dict[str, List[Answer]]:
    """Group all answers by question id in a single pass."""
    index: Dict[str, List[Answer]] = {}
    for response in responses:
        for answer in response.answers:
            index.setdefault(answer.question_id, []).append(answer)
    return index

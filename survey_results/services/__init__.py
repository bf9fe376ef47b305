"""Service layer for business logic."""
from survey_results.services.answer_index import answers_for_question, index_answers
from survey_results.services.tally_service import OptionTally, tally_options
from survey_results.services.summary_service import (
    build_results, summarize_question, summarize_survey
)
from survey_results.services.survey_rules import (
    SurveyNotPublishableError, ensure_publishable, is_open_for_responses, publish_issues
)
from survey_results.services.respondent_service import (
    SubmissionError, build_submission, has_responded
)
from survey_results.services.results_service import ResultsService
from survey_results.services.results_poller import ResultsPoller

__all__ = [
    "answers_for_question",
    "index_answers",
    "OptionTally",
    "tally_options",
    "build_results",
    "summarize_question",
    "summarize_survey",
    "SurveyNotPublishableError",
    "ensure_publishable",
    "is_open_for_responses",
    "publish_issues",
    "SubmissionError",
    "build_submission",
    "has_responded",
    "ResultsService",
    "ResultsPoller",
]

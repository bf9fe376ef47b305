"""Publishing and availability rules for surveys."""
from datetime import datetime, timezone
from typing import List, Optional

from survey_results.schemas.results import PublishIssue
from survey_results.schemas.survey import Survey

MIN_OPTIONS = 2


class SurveyNotPublishableError(ValueError):
    """Raised when a survey fails the publishing checks."""

    def __init__(self, issues: List[PublishIssue]):
        self.issues = issues
        super().__init__("; ".join(issue.message for issue in issues))


def publish_issues(survey: Survey) -> List[PublishIssue]:
    """
    List the reasons a survey cannot be published.

    A survey needs at least one question, and every question other than
    free text needs at least two non-blank options. Scale questions without
    options use the implicit 1-5 scale.
    """
    if not survey.questions:
        return [PublishIssue(message="Add at least one question")]

    issues = []
    for question in survey.questions:
        if question.is_free_text:
            continue
        valid_options = [option for option in question.effective_options if option.strip()]
        if len(valid_options) < MIN_OPTIONS:
            issues.append(PublishIssue(
                question_id=question.id,
                message=f"Question '{question.title}' needs at least {MIN_OPTIONS} options",
            ))
    return issues


def ensure_publishable(survey: Survey) -> None:
    """
    Check that a survey can be published.

    Raises:
        SurveyNotPublishableError: If any publishing check fails
    """
    issues = publish_issues(survey)
    if issues:
        raise SurveyNotPublishableError(issues)


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def is_expired(survey: Survey, now: Optional[datetime] = None) -> bool:
    if survey.expires_at is None:
        return False
    now = _as_utc(now or datetime.now(timezone.utc))
    return _as_utc(survey.expires_at) < now


def is_open_for_responses(survey: Survey, now: Optional[datetime] = None) -> bool:
    """A survey accepts responses while it is published and not expired."""
    return survey.is_published and not is_expired(survey, now)

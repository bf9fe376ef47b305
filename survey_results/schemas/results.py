"""Survey results schemas."""
from datetime import datetime
from typing import Annotated, List, Literal, Optional, Union

from pydantic import Field

from survey_results.schemas.survey import QuestionType, WireModel


class OptionResult(WireModel):
    """Selection count and share for one declared option."""
    label: str
    count: int = 0
    percentage: float = 0.0


class ChoiceSummary(WireModel):
    """Summary of an option-bearing question, options in authoring order."""
    kind: Literal["choice"] = "choice"
    question_id: str
    title: str
    question_type: QuestionType
    total: int = 0
    options: List[OptionResult] = Field(default_factory=list)


class TextSummary(WireModel):
    """Summary of a free-text question: the submitted texts in response order."""
    kind: Literal["text"] = "text"
    question_id: str
    title: str
    question_type: QuestionType
    total: int = 0
    answers: List[str] = Field(default_factory=list)


QuestionSummary = Annotated[
    Union[ChoiceSummary, TextSummary],
    Field(discriminator="kind"),
]


class ResponseDigest(WireModel):
    """Who answered and when."""
    response_id: str
    respondent_id: Optional[str] = None
    completed_at: Optional[datetime] = None


class SurveyResults(WireModel):
    """Per-question results for one survey snapshot."""
    survey_id: str
    title: str
    total_responses: int = 0
    questions: List[QuestionSummary] = Field(default_factory=list)
    respondents: List[ResponseDigest] = Field(default_factory=list)
    generated_at: datetime


class PublishIssue(WireModel):
    """A reason a survey cannot be published yet."""
    question_id: Optional[str] = None
    message: str


class PublishCheck(WireModel):
    """Publish readiness of a survey."""
    survey_id: str
    publishable: bool
    issues: List[PublishIssue] = Field(default_factory=list)


class RespondedSurveys(WireModel):
    """Published surveys a respondent has already answered."""
    email: str
    survey_ids: List[str] = Field(default_factory=list)

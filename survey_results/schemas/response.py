"""Survey response schemas."""
import logging
from datetime import datetime
from typing import Annotated, Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from survey_results.schemas.survey import WireModel

logger = logging.getLogger(__name__)


class SingleValue(BaseModel):
    """Answer holding one string (text, single choice, dropdown, scale)."""
    kind: Literal["single"] = "single"
    text: str

    model_config = ConfigDict(frozen=True)


class MultiValue(BaseModel):
    """Answer holding an ordered list of strings (checkbox questions)."""
    kind: Literal["multi"] = "multi"
    items: Tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True)


class UnreadableValue(BaseModel):
    """Answer whose submitted value has no usable string content."""
    kind: Literal["unreadable"] = "unreadable"
    raw_type: str = ""

    model_config = ConfigDict(frozen=True)


AnswerValue = Annotated[
    Union[SingleValue, MultiValue, UnreadableValue],
    Field(discriminator="kind"),
]

_answer_value_adapter = TypeAdapter(AnswerValue)

_SCALAR_TYPES = (str, int, float)
_VARIANT_KINDS = ("single", "multi", "unreadable")


def _scalar_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def parse_answer_value(raw: Any) -> Union[SingleValue, MultiValue, UnreadableValue]:
    """
    Convert a wire answer value into one of the answer value variants.

    Strings and numbers become ``SingleValue``; lists become ``MultiValue``
    (scalar items stringified, other items dropped); ``None`` is an empty
    ``MultiValue``. Serialized variants that fail validation, and anything
    else, are ``UnreadableValue``.
    """
    if isinstance(raw, (SingleValue, MultiValue, UnreadableValue)):
        return raw
    if raw is None:
        return MultiValue()
    if isinstance(raw, _SCALAR_TYPES):
        return SingleValue(text=_scalar_text(raw))
    if isinstance(raw, (list, tuple)):
        items = tuple(_scalar_text(item) for item in raw if isinstance(item, _SCALAR_TYPES))
        if raw and not items:
            return UnreadableValue(raw_type="list")
        return MultiValue(items=items)
    if isinstance(raw, dict) and raw.get("kind") in _VARIANT_KINDS:
        # Already serialized variant
        try:
            return _answer_value_adapter.validate_python(raw)
        except ValidationError:
            return UnreadableValue(raw_type="dict")
    return UnreadableValue(raw_type=type(raw).__name__)


def normalized_values(value: Union[SingleValue, MultiValue, UnreadableValue]) -> Tuple[str, ...]:
    """Return the answer's strings; a single value is a one-element tuple."""
    if isinstance(value, SingleValue):
        return (value.text,)
    if isinstance(value, MultiValue):
        return value.items
    if isinstance(value, UnreadableValue):
        return ()
    raise TypeError(f"Unknown answer value variant: {type(value).__name__}")


def is_readable(value: Union[SingleValue, MultiValue, UnreadableValue]) -> bool:
    return not isinstance(value, UnreadableValue)


class Answer(WireModel):
    """One respondent's value for one question."""
    id: Optional[str] = None
    question_id: str
    survey_id: Optional[str] = None
    value: AnswerValue = Field(default_factory=MultiValue)
    respondent_id: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator("id", "question_id", "survey_id", mode="before")
    @classmethod
    def coerce_identifier(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("value", mode="before")
    @classmethod
    def parse_value(cls, value: Any) -> Any:
        return parse_answer_value(value)


class SurveyResponse(WireModel):
    """
    All answers submitted by one respondent in one session.

    Created once at submission time and never modified afterwards.
    """
    id: str
    survey_id: Optional[str] = None
    respondent_id: Optional[str] = None
    answers: Tuple[Answer, ...] = ()
    completed_at: Optional[datetime] = None

    @field_validator("id", "survey_id", mode="before")
    @classmethod
    def coerce_identifier(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("answers", mode="before")
    @classmethod
    def readable_answers(cls, value: Any) -> Any:
        """Drop answers that fail validation (e.g. no question id) and keep the rest."""
        if value is None:
            return ()
        if not isinstance(value, (list, tuple)):
            return value
        answers = []
        for item in value:
            if isinstance(item, Answer):
                answers.append(item)
                continue
            try:
                answers.append(Answer.model_validate(item))
            except ValidationError as exc:
                logger.debug("Skipping malformed answer %r: %s", item, exc)
        return tuple(answers)


class SubmittedAnswer(WireModel):
    """Answer payload sent to the survey API."""
    question_id: str
    value: List[str]


class ResponseSubmission(WireModel):
    """Payload for ``POST /surveys/{id}/responses``."""
    respondent_email: str
    answers: List[SubmittedAnswer]


class ResponseDraft(WireModel):
    """Answers collected from a respondent before submission, keyed by question id."""
    respondent_email: Optional[str] = None
    answers: Dict[str, Union[str, List[str], None]] = Field(default_factory=dict)

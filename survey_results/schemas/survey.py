"""Survey and question schemas."""
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class QuestionType(str, Enum):
    """Question types supported by the survey editor."""
    TEXT = "text"
    MULTIPLE_CHOICE = "multiple-choice"
    CHECKBOX = "checkbox"
    DROPDOWN = "dropdown"
    SCALE = "scale"


# Scale questions saved without options render as a 1-5 scale
DEFAULT_SCALE_OPTIONS: Tuple[str, ...] = ("1", "2", "3", "4", "5")


def parse_question_type(raw: Any) -> QuestionType:
    """
    Normalize a wire question type.

    The upstream API sends upper-case names with underscores
    (``MULTIPLE_CHOICE``); the editor uses lower-case names with dashes.
    ``textarea`` and unknown values fall back to free text.
    """
    if isinstance(raw, QuestionType):
        return raw
    normalized = str(raw or "").strip().lower().replace("_", "-")
    if normalized == "textarea":
        return QuestionType.TEXT
    try:
        return QuestionType(normalized)
    except ValueError:
        return QuestionType.TEXT


class WireModel(BaseModel):
    """Immutable model read from and written to the camelCase survey API."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class Question(WireModel):
    """A single prompt within a survey."""
    id: str
    survey_id: Optional[str] = None
    title: str = ""
    type: QuestionType = QuestionType.TEXT
    options: Tuple[str, ...] = ()
    required: bool = False
    order: int = 0
    image_url: Optional[str] = None

    @field_validator("id", "survey_id", mode="before")
    @classmethod
    def coerce_identifier(cls, value: Any) -> Any:
        # Some backends send numeric ids
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("title", mode="before")
    @classmethod
    def blank_title(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, value: Any) -> QuestionType:
        return parse_question_type(value)

    @field_validator("options", mode="before")
    @classmethod
    def default_options(cls, value: Any) -> Any:
        return () if value is None else value

    @property
    def is_free_text(self) -> bool:
        return self.type == QuestionType.TEXT

    @property
    def effective_options(self) -> Tuple[str, ...]:
        """Declared options, or the implicit 1-5 scale for empty scale questions."""
        if not self.options and self.type == QuestionType.SCALE:
            return DEFAULT_SCALE_OPTIONS
        return self.options


class Survey(WireModel):
    """
    Survey definition as served by the survey API.

    Questions are always held sorted by their ``order`` field.
    """
    id: str
    title: str = ""
    description: str = ""
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    is_published: bool = False
    duration_value: Optional[int] = None
    duration_unit: Optional[str] = None
    expires_at: Optional[datetime] = None
    questions: Tuple[Question, ...] = Field(default=())

    @field_validator("id", "created_by", mode="before")
    @classmethod
    def coerce_identifier(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("title", "description", mode="before")
    @classmethod
    def blank_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("questions", mode="before")
    @classmethod
    def default_questions(cls, value: Any) -> Any:
        return () if value is None else value

    @field_validator("questions", mode="after")
    @classmethod
    def sort_questions(cls, questions: Tuple[Question, ...]) -> Tuple[Question, ...]:
        # sorted() is stable: questions sharing an order keep delivery order
        return tuple(sorted(questions, key=lambda q: q.order))

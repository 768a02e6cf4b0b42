"""Survey models — Question, Survey, Answer variants, SurveyResponse.

Responses are owned by the persistence layer; the engine only reads them.
Field aliases accept the camelCase payloads that layer stores.
"""

from datetime import datetime, timezone
from typing import Annotated, Literal, Union

from pydantic import Field, field_validator, model_validator

from src.models.common import LiteracyBase, QuestionType


# ---------------------------------------------------------------------------
# Survey definition (read-only; authored elsewhere)
# ---------------------------------------------------------------------------


class QuestionOption(LiteracyBase, frozen=True):
    """A selectable option: stable ``value`` token plus display ``label``."""

    id: str
    label: str
    value: str


class Question(LiteracyBase, frozen=True):
    """A survey question as authored by a tenant."""

    id: str = Field(..., min_length=1)
    title: str
    type: QuestionType
    required: bool = False
    options: tuple[QuestionOption, ...] = ()
    description: str | None = None
    rank_descriptions: dict[str, tuple[str, ...]] = Field(
        default_factory=dict, alias="rankDescriptions",
    )

    def label_for(self, token: str) -> str:
        """Resolve an option token to its label, or return the token unchanged."""
        for option in self.options:
            if option.value == token:
                return option.label
        return token


class Survey(LiteracyBase, frozen=True):
    """A tenant survey: the question list needed for label resolution."""

    id: str
    title: str
    org_id: str = Field(..., alias="orgId")
    questions: tuple[Question, ...] = ()
    is_active: bool = Field(default=True, alias="isActive")


# ---------------------------------------------------------------------------
# Answer variants (tagged union on ``type``)
# ---------------------------------------------------------------------------


class ChoiceAnswer(LiteracyBase, frozen=True):
    """Single-token answer to a radio or rank question."""

    type: Literal["radio", "rank"]
    question_id: str = Field(..., alias="questionId")
    value: str


class MultiChoiceAnswer(LiteracyBase, frozen=True):
    """Set-of-tokens answer to a checkbox question."""

    type: Literal["checkbox"] = "checkbox"
    question_id: str = Field(..., alias="questionId")
    value: frozenset[str] = frozenset()


class TextAnswer(LiteracyBase, frozen=True):
    """Free-text answer to a text or textarea question."""

    type: Literal["text", "textarea"]
    question_id: str = Field(..., alias="questionId")
    value: str = ""


Answer = Annotated[
    Union[ChoiceAnswer, MultiChoiceAnswer, TextAnswer],
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# Survey response
# ---------------------------------------------------------------------------


class SurveyResponse(LiteracyBase, frozen=True):
    """One immutable submission of a survey by a named respondent.

    ``respondent_name`` is the identity key: two responses with the same
    name belong to the same respondent.
    """

    id: str
    survey_id: str = Field(..., alias="surveyId")
    org_id: str = Field(..., alias="orgId")
    respondent_name: str = Field(..., alias="respondentName")
    submitted_at: datetime = Field(..., alias="submittedAt")
    answers: tuple[Answer, ...] = ()

    @field_validator("submitted_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @model_validator(mode="after")
    def _unique_question_ids(self) -> "SurveyResponse":
        seen: set[str] = set()
        for answer in self.answers:
            if answer.question_id in seen:
                msg = f"duplicate answer for question {answer.question_id!r}"
                raise ValueError(msg)
            seen.add(answer.question_id)
        return self

    def answer_for(self, question_id: str) -> ChoiceAnswer | MultiChoiceAnswer | TextAnswer | None:
        """Return the answer for *question_id*, or None when unanswered."""
        for answer in self.answers:
            if answer.question_id == question_id:
                return answer
        return None

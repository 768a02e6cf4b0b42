"""Shared types, enums, and base models used across the literacy engine models."""

from datetime import datetime, timezone
from enum import StrEnum
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, Field
from uuid_extensions import uuid7


def utc_now() -> datetime:
    """Return the current UTC timestamp (timezone-aware)."""
    return datetime.now(tz=timezone.utc)


def new_uuid7() -> UUID:
    """Generate a new time-sortable UUID v7."""
    return uuid7()


# --- Reusable annotated types ---

UUIDv7 = Annotated[UUID, Field(description="Time-sortable UUID v7.")]
UTCTimestamp = Annotated[
    datetime, Field(description="UTC timezone-aware timestamp.")
]
AxisScore = Annotated[float, Field(ge=0.0, le=100.0)]


# --- Shared enums ---


class QuestionType(StrEnum):
    """Survey question / answer shape tag."""

    RADIO = "radio"
    CHECKBOX = "checkbox"
    TEXT = "text"
    TEXTAREA = "textarea"
    RANK = "rank"


class LiteracyDimension(StrEnum):
    """The five proficiency axes scored for every response."""

    BASICS = "basics"
    PROMPTING = "prompting"
    ETHICS = "ethics"
    TOOLS = "tools"
    AUTOMATION = "automation"


class RankChangeType(StrEnum):
    """Transition between a respondent's two most recent submissions."""

    NEW = "NEW"
    UP = "UP"
    MAINTAIN = "MAINTAIN"
    DOWN = "DOWN"


# --- Base model ---


class LiteracyBase(BaseModel):
    """Base model with common configuration for all literacy engine models."""

    model_config = {
        "populate_by_name": True,
        "protected_namespaces": (),
    }

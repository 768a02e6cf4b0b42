"""Derived score models — LiteracyScores, cohort aggregates, rank changes.

Every model here is a transient, frozen value produced per computation;
nothing is persisted by the engine.
"""

import calendar
import re
from datetime import date, datetime

from pydantic import Field, model_validator

from src.models.common import (
    AxisScore,
    LiteracyBase,
    LiteracyDimension,
    RankChangeType,
)

_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")


# ---------------------------------------------------------------------------
# Per-response scores
# ---------------------------------------------------------------------------


class LiteracyScores(LiteracyBase, frozen=True):
    """Five proficiency axes, each constrained to [0, 100]."""

    basics: AxisScore = 0.0
    prompting: AxisScore = 0.0
    ethics: AxisScore = 0.0
    tools: AxisScore = 0.0
    automation: AxisScore = 0.0

    def get(self, dimension: LiteracyDimension) -> float:
        return getattr(self, dimension.value)

    def values(self) -> tuple[float, ...]:
        """Axis values in ``LiteracyDimension`` order."""
        return tuple(self.get(d) for d in LiteracyDimension)


class ScoredResponse(LiteracyBase, frozen=True):
    """A response reduced to its scores, overall score and rank."""

    response_id: str
    respondent_name: str
    submitted_at: datetime
    scores: LiteracyScores
    overall_score: int = Field(ge=0, le=100)
    rank: int = Field(ge=1, le=5)


# ---------------------------------------------------------------------------
# Cohorts
# ---------------------------------------------------------------------------


class RankBucket(LiteracyBase, frozen=True):
    """Respondent count for one rank, with the tenant's label."""

    rank: int = Field(ge=1, le=5)
    label: str
    count: int = 0


class CohortAggregate(LiteracyBase, frozen=True):
    """Mean scores for one scope (organization, department, month, ...)."""

    scope_key: str
    scores: LiteracyScores
    overall_score: int = Field(ge=0, le=100)
    average_rank: float = Field(ge=1.0, le=5.0)
    member_count: int = Field(ge=1)
    response_count: int = Field(ge=1)
    rank_distribution: dict[int, int] = Field(default_factory=dict)


class RankDistribution(LiteracyBase, frozen=True):
    """Latest-per-respondent rank counts for an organization."""

    buckets: tuple[RankBucket, ...]
    average_rank: float = 0.0
    unique_respondent_count: int = 0
    response_rate: int = 0


class TrendPoint(LiteracyBase, frozen=True):
    """Raw (non-deduplicated) monthly average."""

    month: str
    average_score: int = Field(ge=0, le=100)
    average_rank: float = Field(ge=1.0, le=5.0)
    response_count: int = Field(ge=1)


# ---------------------------------------------------------------------------
# Temporal
# ---------------------------------------------------------------------------


class RankChangeRecord(LiteracyBase, frozen=True):
    """Transition between a respondent's two most recent submissions."""

    respondent_name: str
    current_rank: int = Field(ge=1, le=5)
    previous_rank: int | None = Field(default=None, ge=1, le=5)
    change_type: RankChangeType
    date: datetime


class RankChangeStats(LiteracyBase, frozen=True):
    """Counts of UP / MAINTAIN / DOWN records; NEW is not counted."""

    up: int = 0
    maintain: int = 0
    down: int = 0


class RespondentGrowth(LiteracyBase, frozen=True):
    """First vs latest overall score for one respondent within a window."""

    respondent_name: str
    first_score: int
    last_score: int
    first_rank: int
    last_rank: int
    response_count: int
    growth_rate: float | None = None


class DateWindow(LiteracyBase, frozen=True):
    """Inclusive calendar-date window used to restrict temporal analytics."""

    start: date
    end: date

    @model_validator(mode="after")
    def _end_after_start(self) -> "DateWindow":
        if self.end < self.start:
            msg = "end must be >= start"
            raise ValueError(msg)
        return self

    @classmethod
    def from_months(cls, start_month: str, end_month: str) -> "DateWindow":
        """Build a window from the first day of one ``YYYY-MM`` month to the last day of another."""
        start_year, start_mon = parse_month(start_month)
        end_year, end_mon = parse_month(end_month)
        last_day = calendar.monthrange(end_year, end_mon)[1]
        return cls(
            start=date(start_year, start_mon, 1),
            end=date(end_year, end_mon, last_day),
        )

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment.date() <= self.end


def parse_month(value: str) -> tuple[int, int]:
    """Parse a ``YYYY-MM`` bucket into (year, month)."""
    match = _MONTH_RE.match(value)
    if match is None:
        msg = f"expected YYYY-MM, got {value!r}"
        raise ValueError(msg)
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        msg = f"month out of range in {value!r}"
        raise ValueError(msg)
    return year, month


def month_key(moment: datetime) -> str:
    """Return the ``YYYY-MM`` bucket for a timestamp."""
    return moment.strftime("%Y-%m")

"""Weekly time-saved analysis from the time-reduction question.

Each answer token maps to representative weekly hours
(``ScoringConfig.time_saved_hours``). Responses that skipped the
question count as zero hours but still count toward the response total,
so averages and the saved-hours rate are per response, not per answer.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from pydantic import Field

from src.insight.aggregation import TIME_REDUCTION_LABELS
from src.models.common import LiteracyBase
from src.models.survey import SurveyResponse
from src.scoring.config import DEFAULT_SCORING_CONFIG, ScoringConfig
from src.scoring.normalizer import extract_token
from src.scoring.ranking import round_half_up


class TimeSavedBucket(LiteracyBase, frozen=True):
    """Number of responses choosing one time-reduction option."""

    token: str
    label: str
    count: int = 0


class TimeSavingsSummary(LiteracyBase, frozen=True):
    """Distribution and weekly-hours statistics for a set of responses."""

    response_count: int = 0
    buckets: tuple[TimeSavedBucket, ...]
    total_hours: float = 0.0
    average_hours: float = 0.0
    max_hours: float = 0.0
    saved_hours_rate: float = Field(default=0.0, ge=0.0)

    def nonzero_buckets(self) -> list[TimeSavedBucket]:
        return [b for b in self.buckets if b.count > 0]


def time_savings(
    responses: Iterable[SurveyResponse],
    config: ScoringConfig | None = None,
) -> TimeSavingsSummary:
    """Summarize weekly hours saved.

    ``average_hours`` is total hours over all responses and
    ``saved_hours_rate`` is total hours as a percentage of
    responses x ``weekly_work_hours``; both one decimal, 0 when empty.
    Unrecognized tokens count as zero hours and fall in no bucket.
    """
    cfg = config or DEFAULT_SCORING_CONFIG
    counts = {token: 0 for token in TIME_REDUCTION_LABELS}
    total = Decimal(0)
    max_hours = Decimal(0)
    response_count = 0

    for response in responses:
        response_count += 1
        token = extract_token(response, cfg.time_reduction_question_id)
        if token is None:
            continue
        if token in counts:
            counts[token] += 1
        hours = Decimal(str(cfg.time_saved_hours.get(token, 0.0)))
        total += hours
        max_hours = max(max_hours, hours)

    average = rate = Decimal(0)
    if response_count:
        average = round_half_up(total / response_count, 1)
        capacity = Decimal(response_count) * Decimal(str(cfg.weekly_work_hours))
        rate = round_half_up(total / capacity * 100, 1)

    return TimeSavingsSummary(
        response_count=response_count,
        buckets=tuple(
            TimeSavedBucket(token=token, label=label, count=counts[token])
            for token, label in TIME_REDUCTION_LABELS.items()
        ),
        total_hours=float(total),
        average_hours=float(average),
        max_hours=float(max_hours),
        saved_hours_rate=float(rate),
    )

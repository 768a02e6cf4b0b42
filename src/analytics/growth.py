"""Growth rate calculator, date-window helpers and rank comparisons.

A growth rate is absent (None) rather than 0 whenever it cannot be
computed: fewer than two points, or a zero baseline. Callers render
None as "insufficient data", which is not the same as "0% growth".
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import Decimal

from pydantic import Field

from src.analytics.cohorts import monthly_trend
from src.analytics.temporal import partition_by_respondent
from src.config.settings import get_settings
from src.models.common import LiteracyBase
from src.models.scores import DateWindow, RespondentGrowth, ScoredResponse, TrendPoint, month_key
from src.models.survey import SurveyResponse
from src.models.taxonomy import RankDefinition
from src.scoring.config import ScoringConfig
from src.scoring.ranking import mean_rank, round_half_up
from src.scoring.scorer import LiteracyScorer


def growth_rate(ordered_scores: Sequence[float]) -> float | None:
    """Percentage change from first to last score, one decimal place.

    Returns None for fewer than two scores or a first score of 0.
    """
    if len(ordered_scores) < 2:
        return None
    first = Decimal(str(ordered_scores[0]))
    last = Decimal(str(ordered_scores[-1]))
    if first == 0:
        return None
    return float(round_half_up((last - first) / first * 100, 1))


# ---------------------------------------------------------------------------
# Windows
# ---------------------------------------------------------------------------


def filter_window(
    responses: Iterable[SurveyResponse],
    window: DateWindow | None,
) -> list[SurveyResponse]:
    """Responses submitted inside *window* (all of them when None)."""
    if window is None:
        return list(responses)
    return [r for r in responses if window.contains(r.submitted_at)]


def spanning_window(responses: Iterable[SurveyResponse]) -> DateWindow | None:
    """Whole-month window from the earliest to the latest submission."""
    stamps = [r.submitted_at for r in responses]
    if not stamps:
        return None
    return DateWindow.from_months(month_key(min(stamps)), month_key(max(stamps)))


# ---------------------------------------------------------------------------
# Respondent and cohort growth
# ---------------------------------------------------------------------------


def respondent_history(
    responses: Iterable[SurveyResponse],
    respondent_name: str,
    rank_definition: RankDefinition | None = None,
    *,
    window: DateWindow | None = None,
    config: ScoringConfig | None = None,
) -> list[ScoredResponse]:
    """One respondent's scored submissions inside *window*, oldest first."""
    scorer = LiteracyScorer(config)
    own = [r for r in filter_window(responses, window) if r.respondent_name == respondent_name]
    own.sort(key=lambda r: r.submitted_at)
    return [scorer.score_full(r, rank_definition) for r in own]


def respondent_growth(
    responses: Iterable[SurveyResponse],
    rank_definition: RankDefinition | None = None,
    *,
    window: DateWindow | None = None,
    config: ScoringConfig | None = None,
) -> list[RespondentGrowth]:
    """First vs latest score for every respondent inside *window*, by name."""
    scorer = LiteracyScorer(config)
    rows: list[RespondentGrowth] = []
    partitions = partition_by_respondent(filter_window(responses, window))
    for name in sorted(partitions):
        scored = [scorer.score_full(r, rank_definition) for r in partitions[name]]
        first, last = scored[0], scored[-1]
        rows.append(
            RespondentGrowth(
                respondent_name=name,
                first_score=first.overall_score,
                last_score=last.overall_score,
                first_rank=first.rank,
                last_rank=last.rank,
                response_count=len(scored),
                growth_rate=growth_rate([s.overall_score for s in scored]),
            )
        )
    return rows


def cohort_growth_rate(trend: Sequence[TrendPoint]) -> float | None:
    """Growth between the first and latest points of a monthly trend."""
    return growth_rate([point.average_score for point in trend])


# ---------------------------------------------------------------------------
# Recent-vs-previous rank comparison
# ---------------------------------------------------------------------------

RECENT_WINDOW = 10


class RankGrowthComparison(LiteracyBase, frozen=True):
    """Average rank of the newest responses against the batch before them."""

    scope_key: str
    response_count: int = 0
    respondent_count: int = 0
    latest_average_rank: float = 0.0
    previous_average_rank: float = 0.0
    growth_rate: float | None = None
    trend: list[TrendPoint] = Field(default_factory=list)


def rank_growth_comparison(
    scope_key: str,
    responses: Iterable[SurveyResponse],
    rank_definition: RankDefinition | None = None,
    *,
    window_size: int = RECENT_WINDOW,
    trend_months: int | None = None,
    config: ScoringConfig | None = None,
) -> RankGrowthComparison:
    """Compare the newest *window_size* responses with the ones before them.

    Responses are ordered newest first (input order kept on ties); the
    latest batch is the first *window_size*, the previous batch the next
    *window_size*. Every response counts, without de-duplication. The
    growth rate is absent when there is no previous batch. The trend
    keeps ``TREND_MONTHS`` months unless *trend_months* is given.
    """
    if trend_months is None:
        trend_months = get_settings().TREND_MONTHS
    scorer = LiteracyScorer(config)
    pool = sorted(responses, key=lambda r: r.submitted_at, reverse=True)
    ranks = [scorer.score_full(r, rank_definition).rank for r in pool]

    latest = mean_rank(ranks[:window_size])
    previous = mean_rank(ranks[window_size:2 * window_size])
    return RankGrowthComparison(
        scope_key=scope_key,
        response_count=len(pool),
        respondent_count=len({r.respondent_name for r in pool}),
        latest_average_rank=latest,
        previous_average_rank=previous,
        growth_rate=growth_rate([previous, latest]),
        trend=monthly_trend(pool, rank_definition, limit=trend_months, config=config),
    )

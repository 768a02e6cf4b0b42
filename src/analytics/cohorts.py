"""Cohort aggregator — mean scores per scope key.

One aggregation core serves both modes:

* ``dedupe_by_respondent=True``: keep only each respondent's latest
  submission (rank distributions, department / position cohorts).
* ``dedupe_by_respondent=False``: every response counts (running
  organization averages, monthly trends).

The two give materially different answers on the same input, so
callers must always choose explicitly.

Deterministic -- no I/O.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from decimal import Decimal

import numpy as np

from src.analytics.attributes import ScopeExtractor, by_month
from src.analytics.temporal import partition_by_respondent
from src.models.common import LiteracyDimension
from src.models.scores import (
    CohortAggregate,
    LiteracyScores,
    RankBucket,
    RankDistribution,
    ScoredResponse,
    TrendPoint,
)
from src.models.survey import SurveyResponse
from src.models.taxonomy import RANK_COUNT, RankDefinition
from src.scoring.config import ScoringConfig
from src.scoring.ranking import mean_rank, mean_score, overall_score, rank_label, round_half_up
from src.scoring.scorer import LiteracyScorer

logger = logging.getLogger(__name__)


def latest_per_respondent(responses: Iterable[SurveyResponse]) -> list[SurveyResponse]:
    """Most recent response per respondent name, in first-seen order.

    Uses the same ordering as the rank tracker: on equal timestamps the
    response seen last in input order is the latest.
    """
    return [history[-1] for history in partition_by_respondent(responses).values()]


def _summarize(scope_key: str, members: list[ScoredResponse]) -> CohortAggregate:
    matrix = np.asarray([m.scores.values() for m in members], dtype=float)
    means = matrix.mean(axis=0)
    scores = LiteracyScores(**{
        dimension.value: float(round_half_up(float(value), 1))
        for dimension, value in zip(LiteracyDimension, means)
    })
    ranks = [m.rank for m in members]
    distribution = {rank: ranks.count(rank) for rank in range(1, RANK_COUNT + 1)}
    return CohortAggregate(
        scope_key=scope_key,
        scores=scores,
        overall_score=overall_score(scores),
        average_rank=mean_rank(ranks),
        member_count=len({m.respondent_name for m in members}),
        response_count=len(members),
        rank_distribution=distribution,
    )


def aggregate(
    responses: Iterable[SurveyResponse],
    scope_extractor: ScopeExtractor,
    rank_definition: RankDefinition | None = None,
    *,
    dedupe_by_respondent: bool,
    config: ScoringConfig | None = None,
) -> dict[str, CohortAggregate]:
    """Group responses by scope key and average their scores.

    Steps:
    1. Optionally keep only each respondent's latest response.
    2. Score every retained response.
    3. Group by ``scope_extractor``; a None key excludes the response.
    4. Average each axis (one decimal), derive the overall score,
       average rank and rank distribution, and count distinct members
       and responses separately.

    Groups with no members never appear in the result. Keys are
    returned in sorted order.
    """
    pool = list(responses)
    if dedupe_by_respondent:
        pool = latest_per_respondent(pool)

    scorer = LiteracyScorer(config)
    groups: dict[str, list[ScoredResponse]] = {}
    for response in pool:
        key = scope_extractor(response)
        if key is None:
            continue
        groups.setdefault(key, []).append(scorer.score_full(response, rank_definition))

    result = {key: _summarize(key, groups[key]) for key in sorted(groups) if groups[key]}
    logger.debug(
        "Aggregated %d responses into %d cohorts (dedupe=%s)",
        len(pool), len(result), dedupe_by_respondent,
    )
    return result


def ranked_cohorts(cohorts: Mapping[str, CohortAggregate]) -> list[CohortAggregate]:
    """Cohorts sorted by average rank (highest first), then scope key."""
    return sorted(cohorts.values(), key=lambda c: (-c.average_rank, c.scope_key))


def rank_distribution(
    responses: Iterable[SurveyResponse],
    rank_definition: RankDefinition | None = None,
    *,
    member_count: int | None = None,
    config: ScoringConfig | None = None,
) -> RankDistribution:
    """Latest-per-respondent rank counts, average rank and response rate.

    ``response_rate`` is the whole-number percentage of *member_count*
    (the organization's registered members) that has responded; 0 when
    no positive member count is given.
    """
    scorer = LiteracyScorer(config)
    latest = latest_per_respondent(responses)
    ranks = [scorer.score_full(r, rank_definition).rank for r in latest]

    buckets = tuple(
        RankBucket(rank=rank, label=rank_label(rank, rank_definition), count=ranks.count(rank))
        for rank in range(1, RANK_COUNT + 1)
    )
    count = len(ranks)
    rate = 0
    if member_count is not None and member_count > 0:
        rate = int(round_half_up(Decimal(count) / member_count * 100))
    return RankDistribution(
        buckets=buckets,
        average_rank=mean_rank(ranks),
        unique_respondent_count=count,
        response_rate=rate,
    )


def monthly_trend(
    responses: Iterable[SurveyResponse],
    rank_definition: RankDefinition | None = None,
    *,
    limit: int | None = None,
    config: ScoringConfig | None = None,
) -> list[TrendPoint]:
    """Raw monthly averages, oldest month first.

    Every response counts (no de-duplication). ``average_score`` is the
    mean of per-response overall scores. *limit* keeps only the most
    recent months.
    """
    scorer = LiteracyScorer(config)
    buckets: dict[str, list[ScoredResponse]] = {}
    for response in responses:
        buckets.setdefault(by_month(response), []).append(
            scorer.score_full(response, rank_definition)
        )

    points = [
        TrendPoint(
            month=month,
            average_score=mean_score(m.overall_score for m in members),
            average_rank=mean_rank([m.rank for m in members]),
            response_count=len(members),
        )
        for month, members in sorted(buckets.items())
    ]
    if limit is not None:
        points = points[-limit:] if limit > 0 else []
    return points

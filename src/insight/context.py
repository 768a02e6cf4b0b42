"""Insight context — the structured input to the narrative generator.

The generator call itself is external; this module only assembles and
gates what it receives.
"""

from __future__ import annotations

from pydantic import Field

from src.config.settings import get_settings
from src.insight.aggregation import ResponseAggregation
from src.models.common import LiteracyBase, UTCTimestamp, UUIDv7, new_uuid7, utc_now
from src.models.scores import LiteracyScores
from src.models.taxonomy import RankDefinition
from src.scoring.ranking import overall_score, rank_from_score, rank_label


class InsightContext(LiteracyBase, frozen=True):
    """Scores, rank and answer distribution for one subject."""

    context_id: UUIDv7 = Field(default_factory=new_uuid7)
    subject_name: str
    scores: LiteracyScores
    overall_score: int = Field(ge=0, le=100)
    rank: int = Field(ge=1, le=5)
    rank_label: str
    aggregation: ResponseAggregation | None = None
    created_at: UTCTimestamp = Field(default_factory=utc_now)


def insight_ready(response_count: int, min_required: int | None = None) -> bool:
    """True once enough responses exist to produce insight context."""
    if min_required is None:
        min_required = get_settings().MIN_REQUIRED_RESPONDENTS
    return response_count >= min_required


def build_insight_context(
    subject_name: str,
    scores: LiteracyScores,
    rank_definition: RankDefinition | None = None,
    aggregation: ResponseAggregation | None = None,
) -> InsightContext:
    """Assemble the context for *subject_name* (a person or organization)."""
    overall = overall_score(scores)
    rank = rank_from_score(overall)
    return InsightContext(
        subject_name=subject_name,
        scores=scores,
        overall_score=overall,
        rank=rank,
        rank_label=rank_label(rank, rank_definition),
        aggregation=aggregation,
    )

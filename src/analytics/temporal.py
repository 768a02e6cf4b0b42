"""Temporal rank tracker — NEW / UP / MAINTAIN / DOWN per respondent."""

from __future__ import annotations

from collections.abc import Iterable

from src.models.common import RankChangeType
from src.models.scores import RankChangeRecord, RankChangeStats
from src.models.survey import SurveyResponse
from src.models.taxonomy import RankDefinition
from src.scoring.config import ScoringConfig
from src.scoring.scorer import LiteracyScorer


def partition_by_respondent(
    responses: Iterable[SurveyResponse],
) -> dict[str, list[SurveyResponse]]:
    """Group by respondent name, each group sorted oldest first.

    The sort is stable: responses with equal timestamps keep input order,
    so the one seen last is the latest.
    """
    groups: dict[str, list[SurveyResponse]] = {}
    for response in responses:
        groups.setdefault(response.respondent_name, []).append(response)
    return {
        name: sorted(group, key=lambda r: r.submitted_at)
        for name, group in groups.items()
    }


def classify_change(current: int, previous: int | None) -> RankChangeType:
    if previous is None:
        return RankChangeType.NEW
    if current > previous:
        return RankChangeType.UP
    if current < previous:
        return RankChangeType.DOWN
    return RankChangeType.MAINTAIN


def rank_changes(
    responses: Iterable[SurveyResponse],
    rank_definition: RankDefinition | None = None,
    *,
    config: ScoringConfig | None = None,
) -> list[RankChangeRecord]:
    """One record per respondent comparing their two latest submissions.

    Records are ordered most recent first; ties by respondent name.
    """
    scorer = LiteracyScorer(config)
    records: list[RankChangeRecord] = []
    for name, history in partition_by_respondent(responses).items():
        current = scorer.score_full(history[-1], rank_definition)
        previous_rank = None
        if len(history) >= 2:
            previous_rank = scorer.score_full(history[-2], rank_definition).rank
        records.append(
            RankChangeRecord(
                respondent_name=name,
                current_rank=current.rank,
                previous_rank=previous_rank,
                change_type=classify_change(current.rank, previous_rank),
                date=history[-1].submitted_at,
            )
        )
    records.sort(key=lambda r: r.respondent_name)
    records.sort(key=lambda r: r.date, reverse=True)
    return records


def rank_change_stats(records: Iterable[RankChangeRecord]) -> RankChangeStats:
    """Count UP / MAINTAIN / DOWN records; NEW is informational only."""
    up = maintain = down = 0
    for record in records:
        if record.change_type == RankChangeType.UP:
            up += 1
        elif record.change_type == RankChangeType.MAINTAIN:
            maintain += 1
        elif record.change_type == RankChangeType.DOWN:
            down += 1
    return RankChangeStats(up=up, maintain=maintain, down=down)

"""Overall score reducer and rank classifier.

``RANK_THRESHOLDS`` is the single source of truth for mapping an
overall score to a tier; every label or narrative helper goes through
``rank_from_score`` so numbers and labels cannot diverge.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from src.models.scores import LiteracyScores
from src.models.taxonomy import RankDefinition

# (minimum overall score, rank), highest first.
RANK_THRESHOLDS: tuple[tuple[int, int], ...] = (
    (80, 5),
    (60, 4),
    (40, 3),
    (20, 2),
)
LOWEST_RANK = 1


def round_half_up(value: float | Decimal, places: int = 0) -> Decimal:
    """Round away from zero on .5 (unlike the built-in banker's rounding)."""
    quantum = Decimal(1).scaleb(-places)
    return Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)


def clamp_score(value: float | Decimal) -> float:
    """Clamp to the [0, 100] axis range."""
    return float(max(Decimal(0), min(Decimal(100), Decimal(str(value)))))


def mean_score(values: Iterable[float]) -> int:
    """Arithmetic mean rounded half-up to an integer in [0, 100]."""
    items = [Decimal(str(v)) for v in values]
    if not items:
        return 0
    mean = sum(items, Decimal(0)) / len(items)
    return int(round_half_up(clamp_score(mean)))


def overall_score(scores: LiteracyScores) -> int:
    """Equal-weighted mean of the five axes, rounded half-up."""
    return mean_score(scores.values())


def rank_from_score(score: float) -> int:
    """Map an overall score onto a 1..5 tier via ``RANK_THRESHOLDS``."""
    for minimum, rank in RANK_THRESHOLDS:
        if score >= minimum:
            return rank
    return LOWEST_RANK


def rank_label(rank: int, rank_definition: RankDefinition | None = None) -> str:
    """Tenant display name for *rank*, or ``"Rank {n}"`` when unavailable."""
    if rank_definition is not None and 1 <= rank <= len(rank_definition.ranks):
        name = rank_definition.ranks[rank - 1].name
        if name:
            return name
    return f"Rank {rank}"


def label_for_score(score: float, rank_definition: RankDefinition | None = None) -> str:
    """Narrative label for an overall score."""
    return rank_label(rank_from_score(score), rank_definition)


def mean_rank(ranks: Iterable[int]) -> float:
    """Mean of ranks rounded half-up to one decimal; 0.0 when empty."""
    items = list(ranks)
    if not items:
        return 0.0
    return float(round_half_up(Decimal(sum(items)) / len(items), 1))

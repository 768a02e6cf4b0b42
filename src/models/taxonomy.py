"""Rank taxonomy models — RankTier and RankDefinition."""

from pydantic import Field, model_validator

from src.models.common import LiteracyBase

RANK_COUNT = 5
RANK_TIER_IDS: tuple[str, ...] = tuple(f"rank{n}" for n in range(1, RANK_COUNT + 1))


class RankTier(LiteracyBase, frozen=True):
    """One tier of a rank taxonomy: stable id, display name, bullet list."""

    id: str
    name: str
    descriptions: tuple[str, ...] = ()


class RankDefinition(LiteracyBase, frozen=True):
    """Ordered five-tier rank taxonomy owned by an organization.

    Position 0 is the lowest tier. Tier ids are the lookup keys used by
    self-assessment answers, so they must be ``rank1`` .. ``rank5`` in order.
    """

    org_id: str = Field(..., alias="orgId")
    ranks: tuple[RankTier, ...]

    @model_validator(mode="after")
    def _five_ordered_tiers(self) -> "RankDefinition":
        if len(self.ranks) != RANK_COUNT:
            msg = f"rank definition must have exactly {RANK_COUNT} tiers, got {len(self.ranks)}"
            raise ValueError(msg)
        ids = tuple(tier.id for tier in self.ranks)
        if ids != RANK_TIER_IDS:
            msg = f"rank tier ids must be {list(RANK_TIER_IDS)} in order, got {list(ids)}"
            raise ValueError(msg)
        return self

    def tier_position(self, tier_id: str) -> int | None:
        """Return the 1-based ordinal of *tier_id*, or None if unknown."""
        for index, tier in enumerate(self.ranks):
            if tier.id == tier_id:
                return index + 1
        return None

"""Rank taxonomy provider: tenant override, else system default.

Two-tier lookup. Consumers always receive a validated five-tier
``RankDefinition`` and never need to re-check its shape.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from src.models.taxonomy import RankDefinition
from src.taxonomy.defaults import build_default_rank_definition
from src.taxonomy.store import RankDefinitionStore, RankDefinitionStoreError

logger = logging.getLogger(__name__)


class RankTaxonomyProvider:
    """Reads and writes tenant rank definitions through a store."""

    def __init__(self, store: RankDefinitionStore) -> None:
        self._store = store

    def get_rank_definition(self, org_id: str) -> RankDefinition:
        """Return the tenant's definition, falling back to the default.

        Falls back when nothing is stored, when the stored payload is
        malformed (wrong tier count or ids), or when the store is
        unavailable.
        """
        try:
            payload = self._store.load(org_id)
        except RankDefinitionStoreError as exc:
            logger.warning(
                "Rank definition store unavailable for org %s, using default: %s",
                org_id, exc,
            )
            return build_default_rank_definition(org_id)

        if payload is None:
            return build_default_rank_definition(org_id)

        try:
            definition = RankDefinition.model_validate(payload)
        except ValidationError as exc:
            logger.warning(
                "Stored rank definition for org %s is malformed, using default: %d error(s)",
                org_id, exc.error_count(),
            )
            return build_default_rank_definition(org_id)

        if definition.org_id != org_id:
            definition = definition.model_copy(update={"org_id": org_id})
        return definition

    def save_rank_definition(
        self,
        definition: RankDefinition | Mapping[str, Any],
    ) -> RankDefinition:
        """Validate and persist a tenant definition.

        Raises:
            ValueError: If the definition does not have exactly five
                tiers with ids ``rank1`` .. ``rank5``.
        """
        if isinstance(definition, RankDefinition):
            definition = definition.model_dump(by_alias=True)
        validated = RankDefinition.model_validate(definition)
        self._store.save(
            validated.org_id,
            validated.model_dump(mode="json", by_alias=True),
        )
        logger.debug("Saved rank definition for org %s", validated.org_id)
        return validated

    def reset_rank_definition(self, org_id: str) -> RankDefinition:
        """Drop the tenant override and return the default."""
        self._store.delete(org_id)
        return build_default_rank_definition(org_id)

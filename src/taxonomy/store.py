"""Rank definition persistence — store interface + in-memory implementation.

- RankDefinitionStore: abstract interface the persistence layer implements
- InMemoryRankDefinitionStore: for tests and single-process embedding

Stores hold raw JSON-shaped payloads, exactly as a document store would;
validation happens in the provider so a corrupt payload can fall back
to the default taxonomy.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any


class RankDefinitionStoreError(Exception):
    """Raised by a store when its backend cannot be read or written."""


class RankDefinitionStore(ABC):
    """Abstract interface for tenant rank definition persistence."""

    @abstractmethod
    def load(self, org_id: str) -> Mapping[str, Any] | None:
        """Return the stored payload for *org_id*, or None if absent."""

    @abstractmethod
    def save(self, org_id: str, payload: Mapping[str, Any]) -> None:
        """Persist a payload for *org_id*, replacing any previous one."""

    @abstractmethod
    def delete(self, org_id: str) -> None:
        """Remove the payload for *org_id* (no-op when absent)."""


class InMemoryRankDefinitionStore(RankDefinitionStore):
    """In-memory rank definition store keyed by organization id."""

    def __init__(self) -> None:
        self._store: dict[str, dict[str, Any]] = {}

    def load(self, org_id: str) -> Mapping[str, Any] | None:
        payload = self._store.get(org_id)
        return dict(payload) if payload is not None else None

    def save(self, org_id: str, payload: Mapping[str, Any]) -> None:
        self._store[org_id] = dict(payload)

    def delete(self, org_id: str) -> None:
        self._store.pop(org_id, None)

    def list_org_ids(self) -> list[str]:
        """List organizations with a stored definition."""
        return sorted(self._store)

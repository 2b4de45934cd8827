from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime
    from uuid import UUID

    from smart_todo.core.models.entry import Entry


class EntryRepository(ABC):
    """Abstract repository interface for todo entries.

    Contract used by services and dependency injection. Implementations should
    perform I/O (database, network) and therefore expose async methods.
    Implementations raise EntryStoreError on backend failures.
    """

    @abstractmethod
    async def create(self, entry: Entry) -> Entry:  # pragma: no cover - interface only
        """Persist a new entry and return the stored entity."""

    @abstractmethod
    async def get(self, entry_id: UUID) -> Entry | None:  # pragma: no cover
        """Fetch an entry by id, active or trashed, or return None if not found."""

    @abstractmethod
    async def list_active(self) -> Sequence[Entry]:  # pragma: no cover
        """Return entries without a deletion timestamp, newest creation first."""

    @abstractmethod
    async def list_trashed(self) -> Sequence[Entry]:  # pragma: no cover
        """Return soft-deleted entries, most recently deleted first."""

    @abstractmethod
    async def update_fields(self, entry_id: UUID, changes: dict) -> Entry | None:  # pragma: no cover
        """Partially update an entry and return it, or None if missing."""

    @abstractmethod
    async def set_deleted_at(
        self, entry_id: UUID, deleted_at: datetime | None
    ) -> Entry | None:  # pragma: no cover
        """Toggle the soft-delete marker.

        Setting a timestamp only matches active entries; clearing it only
        matches trashed ones. Returns None when no entry matched.
        """

    @abstractmethod
    async def delete_trashed(self, entry_id: UUID) -> bool:  # pragma: no cover
        """Physically remove a trashed entry. Return True if a row was removed."""

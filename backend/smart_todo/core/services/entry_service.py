from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from smart_todo.core.errors import EntryNotFoundError
from smart_todo.core.models.base import utcnow
from smart_todo.core.models.entry import Entry, TagRecord
from smart_todo.core.services.filter_service import apply_tag_filter
from smart_todo.utils.logging import get_logger
from smart_todo.utils.validation import normalize_entry_text

if TYPE_CHECKING:
    from collections.abc import Sequence

    from smart_todo.core.repositories.entry_repository import EntryRepository
    from smart_todo.core.services.filter_service import TagFilter

logger = get_logger(__name__)


class EntryService:
    """Service for the todo store: CRUD, soft delete and the trash."""

    def __init__(self, repo: EntryRepository) -> None:
        self._repo = repo

    async def create_entry(self, text: str, tags: TagRecord | None = None) -> Entry:
        """Create an active entry with trimmed text and the given (possibly empty) tags."""
        now = utcnow()
        entry = Entry(
            id=uuid4(),
            text=normalize_entry_text(text),
            tags=tags or TagRecord(),
            is_expanded=False,
            created_at=now,
            updated_at=now,
            deleted_at=None,
        )
        created = await self._repo.create(entry)
        logger.info("Created entry %s", created.id)
        return created

    async def get_entry(self, entry_id: str | UUID) -> Entry:
        entry = await self._repo.get(self._parse_id(entry_id))
        if entry is None:
            raise EntryNotFoundError()
        return entry

    async def list_active_entries(self, tag_filter: TagFilter | None = None) -> Sequence[Entry]:
        """List active entries, newest first, optionally narrowed by a tag filter."""
        entries = await self._repo.list_active()
        return apply_tag_filter(entries, tag_filter)

    async def list_trashed_entries(self) -> Sequence[Entry]:
        return await self._repo.list_trashed()

    async def update_entry(
        self,
        entry_id: str | UUID,
        *,
        text: str | None = None,
        tags: TagRecord | None = None,
        is_expanded: bool | None = None,
    ) -> Entry:
        """Apply only the provided fields and refresh the update timestamp."""
        changes: dict = {}
        if text is not None:
            changes["text"] = normalize_entry_text(text)
        if tags is not None:
            changes["tags"] = tags
        if is_expanded is not None:
            changes["is_expanded"] = is_expanded
        changes["updated_at"] = utcnow()

        updated = await self._repo.update_fields(self._parse_id(entry_id), changes)
        if updated is None:
            raise EntryNotFoundError()
        return updated

    async def trash_entry(self, entry_id: str | UUID) -> Entry:
        """Soft delete: stamp the deletion time on an active entry."""
        trashed = await self._repo.set_deleted_at(self._parse_id(entry_id), utcnow())
        if trashed is None:
            raise EntryNotFoundError()
        logger.info("Moved entry %s to trash", trashed.id)
        return trashed

    async def restore_entry(self, entry_id: str | UUID) -> Entry:
        restored = await self._repo.set_deleted_at(self._parse_id(entry_id), None)
        if restored is None:
            raise EntryNotFoundError("Entry not found in trash")
        logger.info("Restored entry %s from trash", restored.id)
        return restored

    async def purge_entry(self, entry_id: str | UUID) -> None:
        """Permanently delete a trashed entry. Irreversible."""
        entry_uuid = self._parse_id(entry_id)
        if not await self._repo.delete_trashed(entry_uuid):
            raise EntryNotFoundError("Entry not found in trash")
        logger.info("Permanently deleted entry %s", entry_uuid)

    @staticmethod
    def _parse_id(entry_id: str | UUID) -> UUID:
        try:
            return UUID(str(entry_id))
        except ValueError as err:
            raise EntryNotFoundError() from err

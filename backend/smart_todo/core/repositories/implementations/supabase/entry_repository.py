from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx
from pydantic import ValidationError
from supabase import PostgrestAPIError

from smart_todo.config import settings
from smart_todo.core.errors import EntryStoreError
from smart_todo.core.models.entry import Entry
from smart_todo.core.repositories.entry_repository import EntryRepository
from smart_todo.utils.logging import get_logger

logger = get_logger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from datetime import datetime
    from uuid import UUID

    from supabase import Client


class SupabaseEntryRepository(EntryRepository):
    """Supabase implementation of the EntryRepository.

    Uses Supabase's PostgREST client for CRUD against a `todos` table whose
    columns match the `Entry` model fields, with tags stored as jsonb.
    """

    def __init__(self, client: Client, table_name: str | None = None) -> None:
        self._client: Client = client
        self._table_name = table_name or settings.todos_table

    def _table(self):
        return self._client.table(self._table_name)

    async def create(self, entry: Entry) -> Entry:
        row = self._entry_to_row(entry)
        resp = await self._run(
            lambda: self._table()
            .insert(row)
            .execute(),
            action="create entry",
        )
        data = self._first(resp.data)
        if not data:
            raise EntryStoreError("Failed to create entry")
        return self._row_to_entry(data)

    async def get(self, entry_id: UUID) -> Entry | None:
        resp = await self._run(
            lambda: self._table()
            .select("*")
            .eq("id", str(entry_id))
            .limit(1)
            .execute(),
            action="get entry",
        )
        items = resp.data or []
        if not items:
            return None
        return self._row_to_entry(items[0])

    async def list_active(self) -> Sequence[Entry]:
        resp = await self._run(
            lambda: self._table()
            .select("*")
            .is_("deleted_at", "null")
            .order("created_at", desc=True)
            .execute(),
            action="list active entries",
        )
        return [self._row_to_entry(i) for i in resp.data or []]

    async def list_trashed(self) -> Sequence[Entry]:
        resp = await self._run(
            lambda: self._table()
            .select("*")
            .not_.is_("deleted_at", "null")
            .order("deleted_at", desc=True)
            .execute(),
            action="list trashed entries",
        )
        return [self._row_to_entry(i) for i in resp.data or []]

    async def update_fields(self, entry_id: UUID, changes: dict) -> Entry | None:
        # Soft-delete state is only toggled through set_deleted_at
        sanitized: dict[str, Any] = {
            k: v for k, v in (changes or {}).items() if k not in {"id", "created_at", "deleted_at"}
        }
        if not sanitized:
            return await self.get(entry_id)
        sanitized = self._serialize(sanitized)

        resp = await self._run(
            lambda: self._table()
            .update(sanitized)
            .eq("id", str(entry_id))
            .execute(),
            action="update entry",
        )
        items = resp.data or []
        if not items:
            return None
        return self._row_to_entry(items[0])

    async def set_deleted_at(self, entry_id: UUID, deleted_at: datetime | None) -> Entry | None:
        def _query():
            q = (
                self._table()
                .update({"deleted_at": deleted_at.isoformat() if deleted_at else None})
                .eq("id", str(entry_id))
            )
            if deleted_at is None:
                q = q.not_.is_("deleted_at", "null")
            else:
                q = q.is_("deleted_at", "null")
            return q.execute()

        resp = await self._run(_query, action="restore entry" if deleted_at is None else "trash entry")
        items = resp.data or []
        if not items:
            return None
        return self._row_to_entry(items[0])

    async def delete_trashed(self, entry_id: UUID) -> bool:
        resp = await self._run(
            lambda: self._table()
            .delete()
            .eq("id", str(entry_id))
            .not_.is_("deleted_at", "null")
            .execute(),
            action="permanently delete entry",
        )
        items = resp.data or []
        return len(items) > 0

    @staticmethod
    async def _run(func: Callable[[], Any], *, action: str) -> Any:
        import asyncio
        try:
            return await asyncio.to_thread(func)
        except (PostgrestAPIError, httpx.HTTPError) as err:
            logger.error("Supabase %s failed: %s", action, err)
            raise EntryStoreError(f"Failed to {action}") from err

    @staticmethod
    def _first(data: Any) -> dict[str, Any]:
        if isinstance(data, list) and data:
            return data[0]
        if isinstance(data, dict):
            return data
        return {}

    @staticmethod
    def _serialize(data: dict[str, Any]) -> dict[str, Any]:
        # PostgREST expects JSON-serializable values
        out = dict(data)
        for key in ("created_at", "updated_at", "deleted_at"):
            if out.get(key) is not None:
                out[key] = out[key].isoformat()
        if "tags" in out:
            tags = out["tags"]
            out["tags"] = tags.to_json() if hasattr(tags, "to_json") else (tags or {})
        return out

    @staticmethod
    def _row_to_entry(row: dict[str, Any]) -> Entry:
        # Drop columns that aren't part of the Entry model
        normalized = {k: v for k, v in row.items() if k in Entry.model_fields}
        if normalized.get("tags") is None:
            normalized["tags"] = {}
        if normalized.get("is_expanded") is None:
            normalized["is_expanded"] = False
        try:
            return Entry.model_validate(normalized)
        except ValidationError as err:
            logger.error("Malformed todo row %s: %s", row.get("id"), err)
            raise EntryStoreError("Failed to read entry") from err

    @staticmethod
    def _entry_to_row(entry: Entry) -> dict[str, Any]:
        data = entry.model_dump(exclude={"tags"})
        data["id"] = str(entry.id)
        data["tags"] = entry.tags.to_json()
        return SupabaseEntryRepository._serialize(data)

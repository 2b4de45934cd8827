"""
Smart Todo - Test Configuration and Fixtures

Shared fixtures: an in-memory entry repository, a recording Supabase client,
a stub tag extractor and a FastAPI TestClient wired to the repository and
extractor through dependency overrides.
"""

import os
from datetime import UTC, datetime
from types import SimpleNamespace
from uuid import UUID

os.environ.setdefault("APP_SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("APP_SUPABASE_ANON_KEY", "test-anon-key")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from smart_todo.core.models.entry import Entry, TagRecord  # noqa: E402
from smart_todo.core.repositories.entry_repository import EntryRepository  # noqa: E402
from smart_todo.core.services.entry_service import EntryService  # noqa: E402


class InMemoryEntryRepository(EntryRepository):
    """Dict-backed repository with the same ordering and soft-delete rules as Supabase."""

    def __init__(self) -> None:
        self.rows: dict[UUID, Entry] = {}

    async def create(self, entry: Entry) -> Entry:
        self.rows[entry.id] = entry.model_copy(deep=True)
        return self.rows[entry.id].model_copy(deep=True)

    async def get(self, entry_id: UUID) -> Entry | None:
        entry = self.rows.get(entry_id)
        return entry.model_copy(deep=True) if entry else None

    async def list_active(self):
        active = [e for e in self.rows.values() if e.deleted_at is None]
        return sorted(active, key=lambda e: e.created_at, reverse=True)

    async def list_trashed(self):
        trashed = [e for e in self.rows.values() if e.deleted_at is not None]
        return sorted(trashed, key=lambda e: e.deleted_at, reverse=True)

    async def update_fields(self, entry_id: UUID, changes: dict) -> Entry | None:
        entry = self.rows.get(entry_id)
        if entry is None:
            return None
        sanitized = {k: v for k, v in changes.items() if k not in {"id", "created_at", "deleted_at"}}
        self.rows[entry_id] = entry.model_copy(update=sanitized)
        return self.rows[entry_id].model_copy(deep=True)

    async def set_deleted_at(self, entry_id: UUID, deleted_at: datetime | None) -> Entry | None:
        entry = self.rows.get(entry_id)
        if entry is None:
            return None
        if (deleted_at is None) == (entry.deleted_at is None):
            return None
        self.rows[entry_id] = entry.model_copy(update={"deleted_at": deleted_at})
        return self.rows[entry_id].model_copy(deep=True)

    async def delete_trashed(self, entry_id: UUID) -> bool:
        entry = self.rows.get(entry_id)
        if entry is None or entry.deleted_at is None:
            return False
        del self.rows[entry_id]
        return True

    def seed(self, text: str, *, tags: dict | None = None, created_at: datetime | None = None,
             deleted_at: datetime | None = None, is_expanded: bool = False) -> Entry:
        """Insert a row directly, bypassing the service."""
        entry = Entry(
            text=text,
            tags=TagRecord.model_validate(tags or {}),
            is_expanded=is_expanded,
            created_at=created_at or datetime.now(UTC),
            deleted_at=deleted_at,
        )
        self.rows[entry.id] = entry
        return entry


class StubTagExtractor:
    """Stands in for TagExtractionService; returns `tags` or raises `error`."""

    def __init__(self) -> None:
        self.tags = TagRecord()
        self.error: Exception | None = None
        self.calls: list[str] = []

    async def extract_tags(self, text: str) -> TagRecord:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.tags


class FakeResponses:
    def __init__(self, result=None, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: list[dict] = []

    async def parse(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(output_parsed=self.result)


class FakeOpenAI:
    """Minimal AsyncOpenAI double exposing `responses.parse`."""

    def __init__(self, result=None, error: Exception | None = None) -> None:
        self.responses = FakeResponses(result=result, error=error)


class RecordingQuery:
    """PostgREST query builder double that records each chained call."""

    def __init__(self, data: list[dict] | None = None, error: Exception | None = None) -> None:
        self.data = data or []
        self.error = error
        self.calls: list[tuple] = []

    def _record(self, name: str, *args, **kwargs) -> "RecordingQuery":
        self.calls.append((name, *args, *sorted(kwargs.items())))
        return self

    def select(self, *args, **kwargs):
        return self._record("select", *args, **kwargs)

    def insert(self, *args, **kwargs):
        return self._record("insert", *args, **kwargs)

    def update(self, *args, **kwargs):
        return self._record("update", *args, **kwargs)

    def delete(self, *args, **kwargs):
        return self._record("delete", *args, **kwargs)

    def eq(self, *args, **kwargs):
        return self._record("eq", *args, **kwargs)

    def is_(self, *args, **kwargs):
        return self._record("is_", *args, **kwargs)

    def order(self, *args, **kwargs):
        return self._record("order", *args, **kwargs)

    def limit(self, *args, **kwargs):
        return self._record("limit", *args, **kwargs)

    @property
    def not_(self):
        return self._record("not_")

    def execute(self):
        if self.error is not None:
            raise self.error
        return SimpleNamespace(data=self.data)


class RecordingSupabase:
    """Supabase client double; every `table()` call returns the same RecordingQuery."""

    def __init__(self, data: list[dict] | None = None, error: Exception | None = None) -> None:
        self.query = RecordingQuery(data=data, error=error)
        self.tables: list[str] = []

    def table(self, name: str) -> RecordingQuery:
        self.tables.append(name)
        return self.query


@pytest.fixture
def repo() -> InMemoryEntryRepository:
    return InMemoryEntryRepository()


@pytest.fixture
def entry_service(repo: InMemoryEntryRepository) -> EntryService:
    return EntryService(repo)


@pytest.fixture
def extractor() -> StubTagExtractor:
    return StubTagExtractor()


@pytest.fixture
def client(repo: InMemoryEntryRepository, extractor: StubTagExtractor):
    """TestClient with storage and tag extraction replaced by test doubles."""
    from smart_todo.dependencies import get_entry_repository, get_tag_extraction_service
    from smart_todo.main import app

    app.dependency_overrides[get_entry_repository] = lambda: repo
    app.dependency_overrides[get_tag_extraction_service] = lambda: extractor
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def fake_openai():
    """Factory for FakeOpenAI clients."""
    return FakeOpenAI


@pytest.fixture
def recording_supabase():
    """Factory for RecordingSupabase clients."""
    return RecordingSupabase

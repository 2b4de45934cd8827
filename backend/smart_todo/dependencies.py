from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Depends

from smart_todo.core.repositories.implementations.supabase.entry_repository import (
    SupabaseEntryRepository,
)
from smart_todo.core.services.capture_service import CaptureService
from smart_todo.core.services.entry_service import EntryService
from smart_todo.core.services.tag_extraction_service import TagExtractionService
from smart_todo.db.base import get_supabase_client

if TYPE_CHECKING:
    from supabase import Client

    from smart_todo.core.repositories.entry_repository import EntryRepository


def get_entry_repository(client: Client = Depends(get_supabase_client)) -> EntryRepository:
    """Get an entry repository bound to the shared Supabase client."""
    return SupabaseEntryRepository(client)


def get_entry_service(repo: EntryRepository = Depends(get_entry_repository)) -> EntryService:
    """Get a request-scoped entry service instance."""
    return EntryService(repo)


def get_tag_extraction_service() -> TagExtractionService:
    """Get a tag extraction service using the shared OpenAI client."""
    return TagExtractionService()


def get_capture_service(
    entries: EntryService = Depends(get_entry_service),
    extractor: TagExtractionService = Depends(get_tag_extraction_service),
) -> CaptureService:
    return CaptureService(entries, extractor)

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends

from smart_todo.api.v1.schemas.entry import (
    EntryEnvelope,
    EntryListEnvelope,
    EntryRead,
    SuccessResponse,
)
from smart_todo.dependencies import get_entry_service

if TYPE_CHECKING:
    from smart_todo.core.services.entry_service import EntryService

router = APIRouter()


@router.get("", response_model=EntryListEnvelope)
async def list_trash(service: EntryService = Depends(get_entry_service)):
    """List trashed entries, most recently deleted first."""
    entries = await service.list_trashed_entries()
    return EntryListEnvelope(entries=[EntryRead.model_validate(e) for e in entries])


@router.put("/{entry_id}", response_model=EntryEnvelope)
async def restore_entry(
    entry_id: str,
    service: EntryService = Depends(get_entry_service),
):
    entry = await service.restore_entry(entry_id)
    return EntryEnvelope(entry=EntryRead.model_validate(entry))


@router.delete("/{entry_id}", response_model=SuccessResponse)
async def purge_entry(
    entry_id: str,
    service: EntryService = Depends(get_entry_service),
):
    """Permanently delete a trashed entry. This cannot be undone."""
    await service.purge_entry(entry_id)
    return SuccessResponse()

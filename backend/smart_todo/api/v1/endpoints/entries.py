from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Query, status

from smart_todo.api.v1.schemas.entry import (
    CaptureResponse,
    EntryCreate,
    EntryEnvelope,
    EntryListEnvelope,
    EntryRead,
    EntryTextRequest,
    EntryUpdate,
    SuccessResponse,
)
from smart_todo.core.services.filter_service import parse_tag_filter
from smart_todo.dependencies import get_capture_service, get_entry_service

if TYPE_CHECKING:
    from smart_todo.core.services.capture_service import CaptureService
    from smart_todo.core.services.entry_service import EntryService

router = APIRouter()


@router.get("", response_model=EntryListEnvelope)
async def list_entries(
    field: str | None = Query(default=None, description="Tag field to filter on"),
    value: str | None = Query(default=None, description="Tag value to match"),
    service: EntryService = Depends(get_entry_service),
):
    """List active entries, newest first, optionally filtered by one tag."""
    tag_filter = parse_tag_filter(field, value)
    entries = await service.list_active_entries(tag_filter)
    return EntryListEnvelope(entries=[EntryRead.model_validate(e) for e in entries])


@router.post("", response_model=EntryEnvelope, status_code=status.HTTP_201_CREATED)
async def create_entry(
    payload: EntryCreate,
    service: EntryService = Depends(get_entry_service),
):
    entry = await service.create_entry(payload.text, payload.tags)
    return EntryEnvelope(entry=EntryRead.model_validate(entry))


@router.post("/capture", response_model=CaptureResponse, status_code=status.HTTP_201_CREATED)
async def capture_entry(
    payload: EntryTextRequest,
    service: CaptureService = Depends(get_capture_service),
):
    """Tag the text with the model and save it.

    When tagging fails the entry is still saved, without tags, and the
    response carries `degraded: true` plus the reason in `warning`.
    """
    result = await service.capture(payload.text)
    return CaptureResponse(
        entry=EntryRead.model_validate(result.entry),
        degraded=result.degraded,
        warning=result.warning,
    )


@router.get("/{entry_id}", response_model=EntryEnvelope)
async def get_entry(
    entry_id: str,
    service: EntryService = Depends(get_entry_service),
):
    entry = await service.get_entry(entry_id)
    return EntryEnvelope(entry=EntryRead.model_validate(entry))


@router.put("/{entry_id}", response_model=EntryEnvelope)
async def update_entry(
    entry_id: str,
    payload: EntryUpdate,
    service: EntryService = Depends(get_entry_service),
):
    entry = await service.update_entry(
        entry_id,
        text=payload.text,
        tags=payload.tags,
        is_expanded=payload.is_expanded,
    )
    return EntryEnvelope(entry=EntryRead.model_validate(entry))


@router.put("/{entry_id}/capture", response_model=CaptureResponse)
async def recapture_entry(
    entry_id: str,
    payload: EntryTextRequest,
    service: CaptureService = Depends(get_capture_service),
):
    """Save edited text and re-tag it; tags are left as they were if tagging fails."""
    result = await service.revise(entry_id, payload.text)
    return CaptureResponse(
        entry=EntryRead.model_validate(result.entry),
        degraded=result.degraded,
        warning=result.warning,
    )


@router.delete("/{entry_id}", response_model=SuccessResponse)
async def trash_entry(
    entry_id: str,
    service: EntryService = Depends(get_entry_service),
):
    """Soft delete: move the entry to the trash."""
    await service.trash_entry(entry_id)
    return SuccessResponse()

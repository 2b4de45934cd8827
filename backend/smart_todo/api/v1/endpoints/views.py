from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Depends, Query

from smart_todo.api.v1.schemas.entry import EntryRead
from smart_todo.api.v1.schemas.view import (
    EntryListView,
    EntryView,
    FilterState,
    TagChip,
    TrashEntryView,
    TrashListView,
)
from smart_todo.core.models.entry import TagField
from smart_todo.core.services import presentation_service as present
from smart_todo.core.services.filter_service import parse_tag_filter, toggle_tag_filter
from smart_todo.dependencies import get_entry_service

if TYPE_CHECKING:
    from smart_todo.core.models.entry import Entry
    from smart_todo.core.services.entry_service import EntryService
    from smart_todo.core.services.filter_service import TagFilter

router = APIRouter()


def _entry_fields(entry: Entry) -> dict[str, Any]:
    return EntryRead.model_validate(entry).model_dump()


def _tag_chips(entry: Entry, tag_filter: TagFilter | None) -> list[TagChip]:
    chips: list[TagChip] = []
    for field in TagField:
        value = entry.tags.value_for(field)
        if value is None:
            continue
        active = tag_filter is not None and tag_filter.field is field and tag_filter.value == value
        chips.append(
            TagChip(field=field, value=value, label=present.tag_label(field, value), active=active)
        )
    return chips


@router.get("/entries", response_model=EntryListView)
async def entries_view(
    field: str | None = Query(default=None, description="Current filter field"),
    value: str | None = Query(default=None, description="Current filter value"),
    click_field: str | None = Query(default=None, description="Tag field the user clicked"),
    click_value: str | None = Query(default=None, description="Tag value the user clicked"),
    service: EntryService = Depends(get_entry_service),
):
    """Active list as the UI renders it.

    A click on a tag toggles it against the current filter: the active tag
    clears the filter, any other tag replaces it.
    """
    tag_filter = parse_tag_filter(field, value)
    clicked = parse_tag_filter(click_field, click_value)
    if clicked is not None:
        tag_filter = toggle_tag_filter(tag_filter, clicked.field, clicked.value)

    entries = await service.list_active_entries(tag_filter)
    views = [
        EntryView(
            **_entry_fields(e),
            display_text=present.display_text(e),
            is_truncatable=present.is_truncatable(e.text),
            tag_chips=_tag_chips(e, tag_filter),
        )
        for e in entries
    ]
    return EntryListView(
        entries=views,
        filter=FilterState(field=tag_filter.field, value=tag_filter.value) if tag_filter else None,
        filter_label=present.filter_label(tag_filter),
        count=len(views),
    )


@router.get("/trash", response_model=TrashListView)
async def trash_view(service: EntryService = Depends(get_entry_service)):
    entries = await service.list_trashed_entries()
    views = [
        TrashEntryView(
            **_entry_fields(e),
            display_text=present.truncate_text(e.text),
            deleted_label=present.deleted_label(e.deleted_at) if e.deleted_at else "",
        )
        for e in entries
    ]
    return TrashListView(entries=views, count=len(views))

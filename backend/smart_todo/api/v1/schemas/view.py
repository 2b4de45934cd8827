from __future__ import annotations

from smart_todo.api.v1.schemas.entry import ApiModel, EntryRead
from smart_todo.core.models.entry import TagField  # noqa: TCH001


class TagChip(ApiModel):
    field: TagField
    value: bool | str
    label: str
    active: bool = False


class FilterState(ApiModel):
    field: TagField
    value: bool | str


class EntryView(EntryRead):
    display_text: str
    is_truncatable: bool
    tag_chips: list[TagChip]


class EntryListView(ApiModel):
    entries: list[EntryView]
    filter: FilterState | None = None
    filter_label: str = ""
    count: int


class TrashEntryView(EntryRead):
    display_text: str
    deleted_label: str


class TrashListView(ApiModel):
    entries: list[TrashEntryView]
    count: int

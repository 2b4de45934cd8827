from __future__ import annotations

from datetime import datetime  # noqa: TCH003
from typing import TYPE_CHECKING

from smart_todo.config import settings
from smart_todo.core.models.base import utcnow
from smart_todo.core.models.entry import TagField

if TYPE_CHECKING:
    from smart_todo.core.models.entry import Entry
    from smart_todo.core.services.filter_service import TagFilter

FIELD_NAMES = {
    TagField.TODO: "类型",
    TagField.PERSON: "人物",
    TagField.TIME: "时间",
    TagField.PRODUCT: "产品",
}


def truncate_text(text: str, max_length: int | None = None) -> str:
    limit = max_length if max_length is not None else settings.truncate_length
    return text[:limit] + "..." if len(text) > limit else text


def is_truncatable(text: str, max_length: int | None = None) -> bool:
    limit = max_length if max_length is not None else settings.truncate_length
    return len(text) > limit


def display_text(entry: Entry, max_length: int | None = None) -> str:
    """Full text when the entry is expanded, truncated text otherwise."""
    if entry.is_expanded:
        return entry.text
    return truncate_text(entry.text, max_length)


def tag_label(field: TagField, value: bool | str) -> str:
    if field is TagField.TODO:
        return "待办" if value else "记录"
    return str(value)


def filter_label(tag_filter: TagFilter | None) -> str:
    if tag_filter is None:
        return ""
    return f"{FIELD_NAMES[tag_filter.field]}: {tag_label(tag_filter.field, tag_filter.value)}"


def deleted_label(deleted_at: datetime, now: datetime | None = None) -> str:
    """Relative "time since deletion" label shown in the trash."""
    now = now or utcnow()
    hours = int((now - deleted_at).total_seconds() // 3600)
    if hours < 1:
        return "刚刚删除"
    if hours < 24:
        return f"{hours}小时前删除"
    return f"{hours // 24}天前删除"

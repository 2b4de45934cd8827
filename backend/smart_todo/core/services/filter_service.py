from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import model_validator

from smart_todo.core.errors import InvalidInputError
from smart_todo.core.models.base import AppBaseModel
from smart_todo.core.models.entry import TagField

if TYPE_CHECKING:
    from collections.abc import Iterable

    from smart_todo.core.models.entry import Entry

_TRUE_VALUES = {"true", "1", "yes"}
_FALSE_VALUES = {"false", "0", "no"}


class TagFilter(AppBaseModel):
    """A single (tag field, value) equality filter."""

    field: TagField
    value: bool | str

    @model_validator(mode="after")
    def check_value_type(self) -> TagFilter:
        if self.field is TagField.TODO and not isinstance(self.value, bool):
            raise ValueError("todo filter value must be a boolean")
        if self.field is not TagField.TODO and not isinstance(self.value, str):
            raise ValueError(f"{self.field.value} filter value must be a string")
        return self

    def matches(self, entry: Entry) -> bool:
        return entry.tags.value_for(self.field) == self.value


def parse_tag_filter(field: str | None, value: str | None) -> TagFilter | None:
    """Build a filter from query-string parts; both absent means no filter."""
    if field is None and value is None:
        return None
    if field is None or value is None:
        raise InvalidInputError("Tag filter needs both field and value")
    try:
        tag_field = TagField(field)
    except ValueError as err:
        raise InvalidInputError(f"Unknown tag field: {field}") from err

    if tag_field is TagField.TODO:
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return TagFilter(field=tag_field, value=True)
        if lowered in _FALSE_VALUES:
            return TagFilter(field=tag_field, value=False)
        raise InvalidInputError("todo filter value must be true or false")
    return TagFilter(field=tag_field, value=value)


def apply_tag_filter(entries: Iterable[Entry], tag_filter: TagFilter | None) -> list[Entry]:
    if tag_filter is None:
        return list(entries)
    return [e for e in entries if tag_filter.matches(e)]


def toggle_tag_filter(
    current: TagFilter | None, field: TagField, value: bool | str
) -> TagFilter | None:
    """Clicking the active tag clears the filter; any other tag replaces it."""
    if current is not None and current.field is field and current.value == value:
        return None
    return TagFilter(field=field, value=value)

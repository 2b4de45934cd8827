from __future__ import annotations

from smart_todo.core.errors import InvalidInputError


def normalize_entry_text(text: object) -> str:
    """Return trimmed entry text or raise InvalidInputError.

    Accepts only non-empty strings; whitespace-only input counts as empty.
    """
    if not isinstance(text, str):
        raise InvalidInputError()
    stripped = text.strip()
    if not stripped:
        raise InvalidInputError()
    return stripped

from __future__ import annotations

from datetime import datetime  # noqa: TCH003
from uuid import UUID  # noqa: TCH003

from pydantic import ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from smart_todo.core.models.base import AppBaseModel
from smart_todo.core.models.entry import TagRecord


class ApiModel(AppBaseModel):
    """Wire models use camelCase keys; snake_case is accepted on input too."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiRequest(ApiModel):
    model_config = ConfigDict(extra="ignore")


def _require_text(v: str) -> str:
    stripped = v.strip()
    if not stripped:
        raise ValueError("Please provide valid, non-empty text")
    return stripped


class EntryCreate(ApiRequest):
    text: str = Field(description="Entry text")
    tags: TagRecord | None = Field(default=None, description="Tags, usually from /tag-extraction")

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        return _require_text(v)


class EntryUpdate(ApiRequest):
    text: str | None = None
    tags: TagRecord | None = None
    is_expanded: bool | None = None

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return _require_text(v)


class EntryTextRequest(ApiRequest):
    """Body for endpoints that only take text (tag extraction, capture)."""

    text: str

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        return _require_text(v)


class EntryRead(ApiModel):
    id: UUID
    text: str
    tags: dict[str, bool | str]
    is_expanded: bool
    created_at: datetime
    updated_at: datetime | None
    deleted_at: datetime | None

    @field_validator("tags", mode="before")
    @classmethod
    def dump_tags(cls, v):
        if isinstance(v, TagRecord):
            return v.to_json()
        return v or {}


class EntryEnvelope(ApiModel):
    entry: EntryRead


class EntryListEnvelope(ApiModel):
    entries: list[EntryRead]


class SuccessResponse(ApiModel):
    success: bool = True


class CaptureResponse(ApiModel):
    entry: EntryRead
    degraded: bool
    warning: str | None = None

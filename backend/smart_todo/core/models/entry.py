from __future__ import annotations

from datetime import datetime  # noqa: TCH003
from enum import Enum
from uuid import UUID, uuid4

from pydantic import ConfigDict, Field, field_validator

from .base import AppBaseModel, TimestampedModel, utcnow


class TagField(str, Enum):
    """Tag record fields an entry can be filtered on."""

    TODO = "todo"
    PERSON = "person"
    TIME = "time"
    PRODUCT = "product"


class EntryStatus(str, Enum):
    ACTIVE = "active"
    TRASHED = "trashed"


class TagRecord(AppBaseModel):
    """AI-derived tags stored denormalized on an entry.

    Every field is independently optional; absent fields are omitted when
    dumped with ``exclude_none``. Unknown keys (e.g. legacy rows) are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    todo: bool | None = Field(default=None, description="Whether the entry is a task")
    person: str | None = Field(default=None, description="Person, role or group mentioned")
    time: str | None = Field(default=None, description="Time expression, e.g. 明天 or 3月15日")
    product: str | None = Field(default=None, description="Product or website name")

    @field_validator("person", "time", "product")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return v
        stripped = v.strip()
        return stripped if stripped else None

    def value_for(self, field: TagField) -> bool | str | None:
        return getattr(self, field.value)

    def to_json(self) -> dict[str, bool | str]:
        return self.model_dump(exclude_none=True)


class Entry(TimestampedModel):
    """Todo/note entry domain model."""

    id: UUID = Field(default_factory=uuid4, description="Unique entry identifier")
    text: str = Field(min_length=1, description="Trimmed entry text")
    tags: TagRecord = Field(default_factory=TagRecord)
    is_expanded: bool = Field(default=False, description="Whether the full text is shown")
    updated_at: datetime | None = Field(default_factory=utcnow)
    deleted_at: datetime | None = Field(default=None, description="Soft-delete marker")

    @field_validator("text")
    @classmethod
    def strip_text(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Entry text must be non-empty")
        return stripped

    @property
    def status(self) -> EntryStatus:
        return EntryStatus.ACTIVE if self.deleted_at is None else EntryStatus.TRASHED

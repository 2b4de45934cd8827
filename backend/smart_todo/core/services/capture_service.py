from __future__ import annotations

from typing import TYPE_CHECKING

from smart_todo.core.errors import TagExtractionError
from smart_todo.core.models.base import AppBaseModel
from smart_todo.core.models.entry import Entry, TagRecord
from smart_todo.utils.logging import get_logger
from smart_todo.utils.validation import normalize_entry_text

if TYPE_CHECKING:
    from uuid import UUID

    from smart_todo.core.services.entry_service import EntryService
    from smart_todo.core.services.tag_extraction_service import TagExtractionService

logger = get_logger(__name__)


class CaptureResult(AppBaseModel):
    entry: Entry
    degraded: bool = False
    warning: str | None = None


class CaptureService:
    """Add and edit flow: tag the text, then save it.

    A failed extraction never loses the user's text. The entry is saved
    without new tags and the result is flagged as degraded.
    """

    def __init__(self, entries: EntryService, extractor: TagExtractionService) -> None:
        self._entries = entries
        self._extractor = extractor

    async def capture(self, text: str) -> CaptureResult:
        text = normalize_entry_text(text)
        try:
            tags = await self._extractor.extract_tags(text)
        except TagExtractionError as err:
            logger.warning("Saving entry without tags after extraction failure: %s", err.message)
            entry = await self._entries.create_entry(text, TagRecord())
            return CaptureResult(entry=entry, degraded=True, warning=err.message)

        entry = await self._entries.create_entry(text, tags)
        return CaptureResult(entry=entry)

    async def revise(self, entry_id: str | UUID, text: str) -> CaptureResult:
        """Re-tag edited text; on extraction failure only the text is updated."""
        text = normalize_entry_text(text)
        # Fail fast on unknown ids before spending a model call
        await self._entries.get_entry(entry_id)
        try:
            tags = await self._extractor.extract_tags(text)
        except TagExtractionError as err:
            logger.warning("Updating entry %s text only after extraction failure: %s", entry_id, err.message)
            entry = await self._entries.update_entry(entry_id, text=text)
            return CaptureResult(entry=entry, degraded=True, warning=err.message)

        entry = await self._entries.update_entry(entry_id, text=text, tags=tags)
        return CaptureResult(entry=entry)

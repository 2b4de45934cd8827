from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends

from smart_todo.api.v1.schemas.entry import EntryTextRequest
from smart_todo.api.v1.schemas.tag_extraction import TagExtractionResponse
from smart_todo.dependencies import get_tag_extraction_service

if TYPE_CHECKING:
    from smart_todo.core.services.tag_extraction_service import TagExtractionService

router = APIRouter(
    responses={
        400: {"description": "Missing or empty text"},
        401: {"description": "OpenAI API key rejected"},
        402: {"description": "OpenAI quota exhausted"},
        429: {"description": "OpenAI rate limit hit"},
        500: {"description": "API key not configured or extraction failed"},
    }
)


@router.post("", response_model=TagExtractionResponse)
async def extract_tags(
    payload: EntryTextRequest,
    service: TagExtractionService = Depends(get_tag_extraction_service),
):
    """Ask the model for todo/person/time/product tags for a piece of text."""
    tags = await service.extract_tags(payload.text)
    return TagExtractionResponse(tags=tags.to_json())

from __future__ import annotations

from smart_todo.api.v1.schemas.entry import ApiModel


class TagExtractionResponse(ApiModel):
    tags: dict[str, bool | str]

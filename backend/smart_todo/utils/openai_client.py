from __future__ import annotations

from functools import lru_cache

from openai import AsyncOpenAI

from smart_todo.config import settings
from smart_todo.core.errors import TagExtractionNotConfiguredError
from smart_todo.utils.logging import get_logger


def is_openai_configured() -> bool:
    return bool(settings.openai_api_key)


@lru_cache(maxsize=1)
def get_openai_client() -> AsyncOpenAI:
    """Return a singleton OpenAI client.

    The key comes from `APP_OPENAI_API_KEY` or, failing that, `OPENAI_API_KEY`.
    Raises TagExtractionNotConfiguredError when neither is set; the failure is
    not cached, so setting the key later takes effect on the next call.
    """
    logger = get_logger(__name__)
    if not is_openai_configured():
        logger.error("OpenAI API key is not configured (APP_OPENAI_API_KEY / OPENAI_API_KEY)")
        raise TagExtractionNotConfiguredError()
    logger.debug("Initializing OpenAI client")
    return AsyncOpenAI(api_key=settings.openai_api_key)

from __future__ import annotations

from fastapi import status


class SmartTodoError(Exception):
    """Base application error carrying an HTTP status and a user-facing message."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        self.message = message or self.message


class InvalidInputError(SmartTodoError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Please provide valid, non-empty text"


# Tag extraction

class TagExtractionError(SmartTodoError):
    """Extraction failed for a reason the user can only retry."""

    message = "Tag extraction failed, please try again later"


class TagExtractionNotConfiguredError(TagExtractionError):
    message = "OpenAI API key is not configured, set OPENAI_API_KEY (or APP_OPENAI_API_KEY)"


class TagExtractionUnauthorizedError(TagExtractionError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "OpenAI API key is invalid, check that OPENAI_API_KEY is correct"


class TagExtractionRateLimitedError(TagExtractionError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    message = "OpenAI API rate limit exceeded, please retry shortly"


class TagExtractionQuotaExceededError(TagExtractionError):
    status_code = status.HTTP_402_PAYMENT_REQUIRED
    message = "OpenAI API quota exhausted, check the OpenAI account balance"


# Store

class EntryStoreError(SmartTodoError):
    message = "Failed to access the todo store"


class EntryNotFoundError(EntryStoreError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Entry not found"

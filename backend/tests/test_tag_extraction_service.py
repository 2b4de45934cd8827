"""Tests for the structured-output tag extraction service."""

import httpx
import openai
import pytest

from smart_todo.config import settings
from smart_todo.core.errors import (
    InvalidInputError,
    TagExtractionError,
    TagExtractionNotConfiguredError,
    TagExtractionQuotaExceededError,
    TagExtractionRateLimitedError,
    TagExtractionUnauthorizedError,
)
from smart_todo.core.schemas.tag_extraction import TagExtractionResult
from smart_todo.core.services.tag_extraction_service import (
    TAG_EXTRACTION_INSTRUCTIONS,
    TagExtractionService,
)
from smart_todo.utils.openai_client import get_openai_client


def _status_error(cls, status_code: int, message: str = "error", body: dict | None = None):
    request = httpx.Request("POST", "https://api.openai.com/v1/responses")
    response = httpx.Response(status_code, request=request)
    return cls(message, response=response, body=body)


def _service(fake_client) -> TagExtractionService:
    return TagExtractionService(client_factory=lambda: fake_client, model="gpt-4o-mini")


@pytest.mark.asyncio
class TestExtraction:
    async def test_scenario_person_time_product(self, fake_openai):
        client = fake_openai(
            result=TagExtractionResult(todo=True, person="张三", time="明天", product="GitHub")
        )
        tags = await _service(client).extract_tags("明天和张三讨论GitHub项目进展")

        assert tags.person == "张三"
        assert tags.time == "明天"
        assert tags.product == "GitHub"
        assert tags.to_json() == {"todo": True, "person": "张三", "time": "明天", "product": "GitHub"}

    async def test_request_uses_schema_and_instructions(self, fake_openai):
        client = fake_openai(result=TagExtractionResult())
        await _service(client).extract_tags("  记录一下今天的想法  ")

        call = client.responses.calls[0]
        assert call["model"] == "gpt-4o-mini"
        assert call["text_format"] is TagExtractionResult
        system, user = call["input"]
        assert system == {"role": "system", "content": TAG_EXTRACTION_INSTRUCTIONS}
        assert user["role"] == "user"
        assert user["content"].endswith("记录一下今天的想法")

    async def test_default_model_from_settings(self, fake_openai):
        client = fake_openai(result=TagExtractionResult())
        service = TagExtractionService(client_factory=lambda: client)
        await service.extract_tags("hello")
        assert client.responses.calls[0]["model"] == settings.tag_extraction_model

    async def test_absent_fields_are_omitted(self, fake_openai):
        client = fake_openai(result=TagExtractionResult(person="  ", time=None, product=""))
        tags = await _service(client).extract_tags("随便写点什么")
        assert tags.to_json() == {}

    async def test_todo_false_is_kept(self, fake_openai):
        client = fake_openai(result=TagExtractionResult(todo=False))
        tags = await _service(client).extract_tags("今天天气不错")
        assert tags.to_json() == {"todo": False}


class TestInstructions:
    def test_instructions_cover_heuristics(self):
        assert "明确的时间点" in TAG_EXTRACTION_INSTRUCTIONS
        for field in ("person", "time", "product"):
            assert f"{field} 字段" in TAG_EXTRACTION_INSTRUCTIONS
        assert "tag 字段" not in TAG_EXTRACTION_INSTRUCTIONS
        assert "1-4个字" in TAG_EXTRACTION_INSTRUCTIONS


@pytest.mark.asyncio
class TestInputValidation:
    @pytest.mark.parametrize("bad", ["", "   ", None, 42, ["text"]])
    async def test_invalid_text_rejected_before_model_call(self, fake_openai, bad):
        client = fake_openai(result=TagExtractionResult())
        with pytest.raises(InvalidInputError):
            await _service(client).extract_tags(bad)
        assert client.responses.calls == []

    async def test_missing_credential_is_configuration_error(self, monkeypatch):
        monkeypatch.setattr(settings, "openai_api_key", None)
        get_openai_client.cache_clear()
        try:
            with pytest.raises(TagExtractionNotConfiguredError) as exc_info:
                await TagExtractionService().extract_tags("明天开会")
        finally:
            get_openai_client.cache_clear()

        assert not isinstance(exc_info.value, InvalidInputError)
        assert exc_info.value.status_code == 500

    async def test_empty_text_wins_over_missing_credential(self, monkeypatch):
        monkeypatch.setattr(settings, "openai_api_key", None)
        get_openai_client.cache_clear()
        try:
            with pytest.raises(InvalidInputError) as exc_info:
                await TagExtractionService().extract_tags("")
        finally:
            get_openai_client.cache_clear()
        assert exc_info.value.status_code == 400


@pytest.mark.asyncio
class TestUpstreamErrors:
    async def test_unauthorized(self, fake_openai):
        client = fake_openai(error=_status_error(openai.AuthenticationError, 401, "Incorrect API key"))
        with pytest.raises(TagExtractionUnauthorizedError) as exc_info:
            await _service(client).extract_tags("明天开会")
        assert exc_info.value.status_code == 401

    async def test_rate_limited(self, fake_openai):
        client = fake_openai(
            error=_status_error(openai.RateLimitError, 429, "Rate limit reached", {"code": "rate_limit_exceeded"})
        )
        with pytest.raises(TagExtractionRateLimitedError) as exc_info:
            await _service(client).extract_tags("明天开会")
        assert exc_info.value.status_code == 429

    async def test_quota_by_code(self, fake_openai):
        client = fake_openai(
            error=_status_error(openai.RateLimitError, 429, "You exceeded your current plan", {"code": "insufficient_quota"})
        )
        with pytest.raises(TagExtractionQuotaExceededError) as exc_info:
            await _service(client).extract_tags("明天开会")
        assert exc_info.value.status_code == 402

    async def test_quota_by_message(self, fake_openai):
        client = fake_openai(
            error=_status_error(openai.PermissionDeniedError, 403, "You exceeded your current quota")
        )
        with pytest.raises(TagExtractionQuotaExceededError):
            await _service(client).extract_tags("明天开会")

    async def test_other_status_error_is_generic(self, fake_openai):
        client = fake_openai(error=_status_error(openai.InternalServerError, 500, "server exploded"))
        with pytest.raises(TagExtractionError) as exc_info:
            await _service(client).extract_tags("明天开会")
        assert type(exc_info.value) is TagExtractionError
        assert exc_info.value.status_code == 500

    async def test_connection_error_is_generic(self, fake_openai):
        request = httpx.Request("POST", "https://api.openai.com/v1/responses")
        client = fake_openai(error=openai.APIConnectionError(request=request))
        with pytest.raises(TagExtractionError) as exc_info:
            await _service(client).extract_tags("明天开会")
        assert type(exc_info.value) is TagExtractionError

    async def test_refusal_is_generic(self, fake_openai):
        client = fake_openai(result=None)
        with pytest.raises(TagExtractionError) as exc_info:
            await _service(client).extract_tags("明天开会")
        assert type(exc_info.value) is TagExtractionError

    async def test_error_messages_are_distinct(self):
        messages = {
            cls().message
            for cls in (
                TagExtractionError,
                TagExtractionNotConfiguredError,
                TagExtractionUnauthorizedError,
                TagExtractionRateLimitedError,
                TagExtractionQuotaExceededError,
            )
        }
        assert len(messages) == 5

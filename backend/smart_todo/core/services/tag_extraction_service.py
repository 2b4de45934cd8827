from __future__ import annotations

from typing import TYPE_CHECKING

import openai

from smart_todo.config import settings
from smart_todo.core.errors import (
    TagExtractionError,
    TagExtractionQuotaExceededError,
    TagExtractionRateLimitedError,
    TagExtractionUnauthorizedError,
)
from smart_todo.core.schemas.tag_extraction import TagExtractionResult
from smart_todo.utils.logging import get_logger
from smart_todo.utils.openai_client import get_openai_client
from smart_todo.utils.validation import normalize_entry_text

if TYPE_CHECKING:
    from collections.abc import Callable

    from openai import AsyncOpenAI

    from smart_todo.core.models.entry import TagRecord

logger = get_logger(__name__)

TAG_EXTRACTION_INSTRUCTIONS = """\
请按照以下顺序分析输入文本，并提取相应标签：

1. 是否是todo（待办事项）？
   - 必须包含明确的时间点，比如前后、xx日期，并且包含需要执行的行动、任务、计划、目标等，才标记为 todo: true
   - 一般性的陈述或记录不要标记 todo

2. 有人物吗？
   - 提取具体人名、角色、团体等，保持原文
   - 如：张三、李经理、开发团队、客户、用户等
   - 标记在 person 字段

3. 有时间吗？
   - 提取明确的时间表达，包括相对时间和具体日期
   - 如：今天、明天、下周、3月15日等
   - 标记在 time 字段

4. 有网址或产品吗？
   - 提取网站、应用、产品名称
   - 如：GitHub、微信、淘宝、百度、ChatGPT等
   - 标记在 product 字段

注意：
- 如果同时符合多个条件，可以都标记
- 提取的标签应该简洁明了，通常1-4个字，不要使用完整句子
- 要符合中文表达习惯
- 优先提取最明确和最重要的信息
- 如果某个维度不明确，可以不标记
"""

_QUOTA_CODES = {"insufficient_quota", "billing_hard_limit_reached"}


def _is_quota_error(err: openai.APIStatusError) -> bool:
    code = getattr(err, "code", None)
    if code in _QUOTA_CODES:
        return True
    return "quota" in str(err).lower()


class TagExtractionService:
    """Extracts a tag record from entry text with a structured-output model call."""

    def __init__(
        self,
        client_factory: Callable[[], AsyncOpenAI] = get_openai_client,
        model: str | None = None,
    ) -> None:
        self._client_factory = client_factory
        self._model = model or settings.tag_extraction_model

    async def extract_tags(self, text: str) -> TagRecord:
        """Return the tags the model finds in ``text``.

        Raises InvalidInputError before any model call for empty/non-string
        input, TagExtractionNotConfiguredError when no API key is set, and a
        TagExtractionError subclass for upstream failures.
        """
        text = normalize_entry_text(text)
        client = self._client_factory()

        logger.info("Extracting tags - model: %s, text length: %d", self._model, len(text))
        logger.debug("Entry text: %s", text[:200] + "..." if len(text) > 200 else text)

        try:
            response = await client.responses.parse(
                model=self._model,
                input=[
                    {
                        "role": "system",
                        "content": TAG_EXTRACTION_INSTRUCTIONS,
                    },
                    {
                        "role": "user",
                        "content": f"输入文本：{text}",
                    },
                ],
                text_format=TagExtractionResult,
            )
        except openai.AuthenticationError as err:
            logger.error("OpenAI rejected the API key: %s", err)
            raise TagExtractionUnauthorizedError() from err
        except openai.RateLimitError as err:
            if _is_quota_error(err):
                logger.error("OpenAI quota exhausted: %s", err)
                raise TagExtractionQuotaExceededError() from err
            logger.warning("OpenAI rate limit hit: %s", err)
            raise TagExtractionRateLimitedError() from err
        except openai.APIStatusError as err:
            if _is_quota_error(err):
                logger.error("OpenAI quota exhausted: %s", err)
                raise TagExtractionQuotaExceededError() from err
            logger.error("OpenAI API error (status %s): %s", err.status_code, err)
            raise TagExtractionError() from err
        except Exception as err:
            logger.error("Tag extraction failed: %s", err)
            logger.error("Error type: %s", type(err).__name__)
            raise TagExtractionError() from err

        result = response.output_parsed
        if result is None:
            logger.warning("Model returned no parsed tags (refusal or empty output)")
            raise TagExtractionError()

        tags = result.to_tags()
        logger.info("Tag extraction successful - tags: %s", tags.to_json())
        return tags

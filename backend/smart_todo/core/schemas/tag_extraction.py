from __future__ import annotations

from pydantic import Field

from smart_todo.core.models.base import AppBaseModel
from smart_todo.core.models.entry import TagRecord


class TagExtractionResult(AppBaseModel):
    """Structured output schema the model must fill."""

    todo: bool | None = Field(default=None, description="是否是待办事项或任务")
    person: str | None = Field(default=None, description="涉及的人物，如：张三、李四、团队、客户等")
    time: str | None = Field(default=None, description="时间信息，如：今天、明天、下周、3月15日等")
    product: str | None = Field(default=None, description="产品或网站名称，如：GitHub、微信、淘宝等")

    def to_tags(self) -> TagRecord:
        return TagRecord.model_validate(self.model_dump())

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "todo": True,
                    "person": "张三",
                    "time": "明天",
                    "product": "GitHub",
                }
            ]
        }
    }

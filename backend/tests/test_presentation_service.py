"""Tests for list/trash display helpers."""

from datetime import UTC, datetime, timedelta

import pytest

from smart_todo.core.models.entry import Entry, TagField
from smart_todo.core.services.filter_service import TagFilter
from smart_todo.core.services.presentation_service import (
    deleted_label,
    display_text,
    filter_label,
    is_truncatable,
    tag_label,
    truncate_text,
)


class TestTruncation:
    def test_short_text_untouched(self):
        text = "x" * 80
        assert truncate_text(text) == text
        assert not is_truncatable(text)

    def test_long_text_truncated(self):
        text = "字" * 81
        assert truncate_text(text) == "字" * 80 + "..."
        assert is_truncatable(text)

    def test_custom_length(self):
        assert truncate_text("abcdef", 3) == "abc..."

    def test_display_text_respects_expanded_flag(self):
        text = "a" * 100
        assert display_text(Entry(text=text)) == "a" * 80 + "..."
        assert display_text(Entry(text=text, is_expanded=True)) == text


class TestLabels:
    def test_todo_labels(self):
        assert tag_label(TagField.TODO, True) == "待办"
        assert tag_label(TagField.TODO, False) == "记录"

    def test_string_labels(self):
        assert tag_label(TagField.PRODUCT, "GitHub") == "GitHub"

    def test_filter_label(self):
        assert filter_label(None) == ""
        assert filter_label(TagFilter(field=TagField.PERSON, value="张三")) == "人物: 张三"
        assert filter_label(TagFilter(field=TagField.TODO, value=False)) == "类型: 记录"


class TestDeletedLabel:
    NOW = datetime(2026, 3, 15, 12, 0, tzinfo=UTC)

    @pytest.mark.parametrize(
        "ago,expected",
        [
            (timedelta(minutes=59), "刚刚删除"),
            (timedelta(hours=1), "1小时前删除"),
            (timedelta(hours=23, minutes=59), "23小时前删除"),
            (timedelta(hours=24), "1天前删除"),
            (timedelta(days=3, hours=5), "3天前删除"),
        ],
    )
    def test_relative_labels(self, ago, expected):
        assert deleted_label(self.NOW - ago, now=self.NOW) == expected

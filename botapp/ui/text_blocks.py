"""Reusable helpers for composing MarkdownV2 messages."""

from __future__ import annotations
from tracking import t

from typing import List

from telegram.helpers import escape_markdown


def escape_telegram_markdown(text: object) -> str:
    """Escape arbitrary text (user names, dates, times) for MarkdownV2."""
    t('botapp.ui.text_blocks.escape_telegram_markdown')
    return escape_markdown(str(text), version=2)


def bold_telegram_text(text: object) -> str:
    t('botapp.ui.text_blocks.bold_telegram_text')
    return f"*{escape_telegram_markdown(text)}*"


class MarkdownBlockBuilder:
    """Line-oriented MarkdownV2 builder; every plain line is escaped."""

    __slots__ = ("_lines",)

    def __init__(self) -> None:
        t("botapp.ui.text_blocks.MarkdownBlockBuilder.__init__")
        self._lines: List[str] = []

    def heading(self, text: str) -> "MarkdownBlockBuilder":
        t('botapp.ui.text_blocks.MarkdownBlockBuilder.heading')
        if text:
            self._lines.append(bold_telegram_text(text))
        return self

    def line(self, text: str = "") -> "MarkdownBlockBuilder":
        t('botapp.ui.text_blocks.MarkdownBlockBuilder.line')
        self._lines.append(escape_telegram_markdown(text))
        return self

    def bullet(self, text: str) -> "MarkdownBlockBuilder":
        t('botapp.ui.text_blocks.MarkdownBlockBuilder.bullet')
        if text:
            self._lines.append(f"• {escape_telegram_markdown(text)}")
        return self

    def field(self, label: str, value: str) -> "MarkdownBlockBuilder":
        t('botapp.ui.text_blocks.MarkdownBlockBuilder.field')
        self._lines.append(f"{bold_telegram_text(label)}: {escape_telegram_markdown(value)}")
        return self

    def blank(self) -> "MarkdownBlockBuilder":
        t('botapp.ui.text_blocks.MarkdownBlockBuilder.blank')
        self._lines.append("")
        return self

    def build(self) -> str:
        t('botapp.ui.text_blocks.MarkdownBlockBuilder.build')
        return "\n".join(self._lines)


__all__ = [
    "MarkdownBlockBuilder",
    "escape_telegram_markdown",
    "bold_telegram_text",
]

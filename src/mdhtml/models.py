"""Domain models for Markdown/HTML conversion."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields, replace
from enum import Enum
from typing import Any, Literal, Mapping, Union

HEADING_OFFSET_LIMIT = 5


class BlockKind(str, Enum):
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    CODE_BLOCK = "code-block"
    TABLE = "table"
    BLOCKQUOTE = "blockquote"
    UNORDERED_LIST_ITEM = "unordered-list-item"
    ORDERED_LIST_ITEM = "ordered-list-item"
    TASK_LIST_ITEM = "task-list-item"
    HORIZONTAL_RULE = "horizontal-rule"
    EMPTY_LINE = "empty-line"

    @property
    def is_list_item(self) -> bool:
        return self in _LIST_KINDS


_LIST_KINDS = frozenset(
    {
        BlockKind.UNORDERED_LIST_ITEM,
        BlockKind.ORDERED_LIST_ITEM,
        BlockKind.TASK_LIST_ITEM,
    }
)


@dataclass(frozen=True, slots=True)
class Block:
    """One classified unit of scanned Markdown."""

    kind: BlockKind
    text: str
    level: int | None = None
    language: str | None = None


class ConversionMode(str, Enum):
    MARKDOWN_TO_HTML = "markdown-to-html"
    HTML_TO_MARKDOWN = "html-to-markdown"


class OutputFormat(str, Enum):
    FULL_HTML = "full-html"
    HTML_FRAGMENT = "html-fragment"


# camelCase keys accepted alongside the snake_case field names
_OPTION_ALIASES = {
    "enableTables": "enable_tables",
    "enableStrikethrough": "enable_strikethrough",
    "enableTaskLists": "enable_task_lists",
    "enableAutolinks": "enable_autolinks",
    "generateToc": "generate_toc",
    "sanitizeHtml": "sanitize_html",
    "outputFormat": "output_format",
    "headingOffset": "heading_offset",
}


@dataclass(frozen=True, slots=True)
class ConversionOptions:
    """Configuration for a single conversion call."""

    mode: ConversionMode = ConversionMode.MARKDOWN_TO_HTML
    enable_tables: bool = True
    enable_strikethrough: bool = True
    enable_task_lists: bool = True
    enable_autolinks: bool = True
    generate_toc: bool = False
    sanitize_html: bool = True
    output_format: OutputFormat = OutputFormat.HTML_FRAGMENT
    heading_offset: int = 0

    @classmethod
    def from_mapping(
        cls, data: Mapping[str, Any] | None, base: ConversionOptions | None = None
    ) -> ConversionOptions:
        """Build options from a loosely typed mapping.

        Unknown keys are ignored, missing keys fall back to *base* (or the
        defaults). ``heading_offset`` is clamped to a sane range.
        """

        base = base or cls()
        if not data:
            return base
        known = {f.name for f in fields(cls)}
        updates: dict[str, Any] = {}
        for key, value in data.items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in known or value is None:
                continue
            updates[name] = value
        if "mode" in updates:
            updates["mode"] = ConversionMode(updates["mode"])
        if "output_format" in updates:
            updates["output_format"] = OutputFormat(updates["output_format"])
        if "heading_offset" in updates:
            offset = int(updates["heading_offset"])
            updates["heading_offset"] = max(-HEADING_OFFSET_LIMIT, min(offset, HEADING_OFFSET_LIMIT))
        for name in ("enable_tables", "enable_strikethrough", "enable_task_lists",
                     "enable_autolinks", "generate_toc", "sanitize_html"):
            if name in updates:
                updates[name] = bool(updates[name])
        return replace(base, **updates)

    def with_mode(self, mode: ConversionMode) -> ConversionOptions:
        return replace(self, mode=mode)

    def as_dict(self) -> dict[str, object]:
        payload = asdict(self)
        payload["mode"] = self.mode.value
        payload["output_format"] = self.output_format.value
        return payload


@dataclass(frozen=True, slots=True)
class Statistics:
    original_size: int
    processed_size: int
    word_count: int
    character_count: int
    line_count: int
    heading_count: int
    link_count: int
    image_count: int
    code_block_count: int
    table_count: int
    list_count: int

    def as_dict(self) -> dict[str, int]:
        return {
            "originalSize": self.original_size,
            "processedSize": self.processed_size,
            "wordCount": self.word_count,
            "characterCount": self.character_count,
            "lineCount": self.line_count,
            "headingCount": self.heading_count,
            "linkCount": self.link_count,
            "imageCount": self.image_count,
            "codeBlockCount": self.code_block_count,
            "tableCount": self.table_count,
            "listCount": self.list_count,
        }


@dataclass(frozen=True, slots=True)
class ConversionSuccess:
    output: str
    stats: Statistics
    success: Literal[True] = field(default=True, init=False)


@dataclass(frozen=True, slots=True)
class ConversionFailure:
    error: str
    code: str = "INTERNAL"
    success: Literal[False] = field(default=False, init=False)


ConversionResult = Union[ConversionSuccess, ConversionFailure]


__all__ = [
    "Block",
    "BlockKind",
    "ConversionFailure",
    "ConversionMode",
    "ConversionOptions",
    "ConversionResult",
    "ConversionSuccess",
    "OutputFormat",
    "Statistics",
]

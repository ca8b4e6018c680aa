"""Conversion statistics.

Forward conversions count structure from the scanned blocks. Reverse
conversions have no block sequence, so the counts are pattern matches on the
Markdown output instead. The two methods can disagree on the same document.
"""

from __future__ import annotations

import re
from typing import Sequence

from .models import Block, BlockKind, Statistics
from .utils import line_count

# image syntax with a non-empty alt also matches, so images count as links too
LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
IMAGE_RE = re.compile(r"!\[([^\]]*)\]\(([^)]+)\)")
HEADING_LINE_RE = re.compile(r"^#{1,6}\s", re.MULTILINE)
FENCE_LINE_RE = re.compile(r"^\s*```", re.MULTILINE)
LIST_LINE_RE = re.compile(r"^\s*(?:[*+-]|\d+\.)\s", re.MULTILINE)
HTML_TABLE_RE = re.compile(r"<table[^>]*>", re.IGNORECASE)


def _count(kind: BlockKind, blocks: Sequence[Block]) -> int:
    return sum(1 for block in blocks if block.kind is kind)


def compute_stats(input_text: str, output: str, blocks: Sequence[Block] | None = None) -> Statistics:
    if blocks is not None:
        return _forward_stats(input_text, output, blocks)
    return _reverse_stats(input_text, output)


def _base(input_text: str, output: str) -> dict[str, int]:
    return {
        "original_size": len(input_text),
        "processed_size": len(output),
        "word_count": len(input_text.split()),
        "character_count": len(input_text),
        "line_count": line_count(input_text),
    }


def _forward_stats(input_text: str, output: str, blocks: Sequence[Block]) -> Statistics:
    return Statistics(
        **_base(input_text, output),
        heading_count=_count(BlockKind.HEADING, blocks),
        link_count=len(LINK_RE.findall(input_text)),
        image_count=len(IMAGE_RE.findall(input_text)),
        code_block_count=_count(BlockKind.CODE_BLOCK, blocks),
        table_count=_count(BlockKind.TABLE, blocks),
        list_count=sum(1 for block in blocks if block.kind.is_list_item),
    )


def _reverse_stats(input_text: str, output: str) -> Statistics:
    return Statistics(
        **_base(input_text, output),
        heading_count=len(HEADING_LINE_RE.findall(output)),
        link_count=len(LINK_RE.findall(output)),
        image_count=len(IMAGE_RE.findall(output)),
        code_block_count=len(FENCE_LINE_RE.findall(output)) // 2,
        table_count=len(HTML_TABLE_RE.findall(input_text)),
        list_count=len(LIST_LINE_RE.findall(output)),
    )


__all__ = ["compute_stats"]

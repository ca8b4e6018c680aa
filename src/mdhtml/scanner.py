"""Line oriented Markdown block scanner."""

from __future__ import annotations

import re

from .models import Block, BlockKind
from .utils import normalize_newlines

FENCE = "```"
MAX_HEADING_LEVEL = 6

HR_RE = re.compile(r"^(?:-{3,}|\*{3,}|_{3,})$")
LIST_RE = re.compile(r"^(?:[*+-]|\d+\.)\s")
ORDERED_RE = re.compile(r"^\d+\.\s")
TASK_RE = re.compile(r"^[*+-]\s\[([ x])\](?:\s+|$)")
LIST_MARKER_RE = re.compile(r"^(?:[*+-]|\d+\.)\s")


class _ScanState:
    """Mutable buffers for one ``scan`` call."""

    def __init__(self) -> None:
        self.blocks: list[Block] = []
        self.in_code = False
        self.code_language = ""
        self.code_lines: list[str] = []
        self.in_table = False
        self.table_rows: list[str] = []

    def flush_code(self) -> None:
        self.blocks.append(
            Block(
                kind=BlockKind.CODE_BLOCK,
                text="\n".join(self.code_lines),
                language=self.code_language,
            )
        )
        self.in_code = False
        self.code_language = ""
        self.code_lines = []

    def flush_table(self) -> None:
        self.blocks.append(Block(kind=BlockKind.TABLE, text="\n".join(self.table_rows)))
        self.in_table = False
        self.table_rows = []


def scan(markdown: str) -> list[Block]:
    state = _ScanState()
    for line in normalize_newlines(markdown).split("\n"):
        trimmed = line.strip()

        if trimmed.startswith(FENCE):
            if state.in_code:
                state.flush_code()
            else:
                if state.in_table:
                    state.flush_table()
                state.in_code = True
                state.code_language = trimmed[len(FENCE):].strip()
            continue

        if state.in_code:
            state.code_lines.append(line)
            continue

        if "|" in trimmed:
            state.in_table = True
            state.table_rows.append(line)
            continue
        if state.in_table:
            state.flush_table()

        state.blocks.append(classify_line(trimmed))

    if state.in_code:
        state.flush_code()
    if state.in_table:
        state.flush_table()
    return state.blocks


def classify_line(trimmed: str) -> Block:
    """Classify a single trimmed line that is outside code and table regions."""

    if trimmed.startswith("#"):
        count = len(trimmed) - len(trimmed.lstrip("#"))
        return Block(
            kind=BlockKind.HEADING,
            text=trimmed[count:].strip(),
            level=max(1, min(count, MAX_HEADING_LEVEL)),
        )

    if HR_RE.match(trimmed):
        return Block(kind=BlockKind.HORIZONTAL_RULE, text="")

    if LIST_RE.match(trimmed):
        task = TASK_RE.match(trimmed)
        if task:
            marker = "[x]" if task.group(1) == "x" else "[ ]"
            rest = trimmed[task.end():]
            return Block(kind=BlockKind.TASK_LIST_ITEM, text=f"{marker} {rest}")
        kind = BlockKind.ORDERED_LIST_ITEM if ORDERED_RE.match(trimmed) else BlockKind.UNORDERED_LIST_ITEM
        return Block(kind=kind, text=LIST_MARKER_RE.sub("", trimmed, count=1))

    if trimmed.startswith(">"):
        text = trimmed[1:]
        if text.startswith(" "):
            text = text[1:]
        return Block(kind=BlockKind.BLOCKQUOTE, text=text)

    if not trimmed:
        return Block(kind=BlockKind.EMPTY_LINE, text="")
    return Block(kind=BlockKind.PARAGRAPH, text=trimmed)


__all__ = ["scan", "classify_line"]

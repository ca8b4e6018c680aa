"""Render scanned Markdown blocks to HTML."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence

from .inline import transform_inline
from .models import Block, BlockKind, ConversionOptions, OutputFormat
from .sanitize import sanitize_html
from .utils import escape_html

SEPARATOR_ROW_RE = re.compile(r"^[\s|:-]+$")
SLUG_STRIP_RE = re.compile(r"[^\w\s-]")
WHITESPACE_RE = re.compile(r"\s+")

DOCUMENT_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Converted Document</title>
    <style>
        body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; line-height: 1.6; max-width: 800px; margin: 0 auto; padding: 2rem; }
        h1, h2, h3, h4, h5, h6 { margin-top: 2rem; margin-bottom: 1rem; }
        pre { background: #f4f4f4; padding: 1rem; border-radius: 4px; overflow-x: auto; }
        code { background: #f4f4f4; padding: 0.2rem 0.4rem; border-radius: 3px; font-family: 'Monaco', 'Consolas', monospace; }
        blockquote { border-left: 4px solid #ddd; margin: 0; padding-left: 1rem; }
        table { border-collapse: collapse; width: 100%; }
        th, td { border: 1px solid #ddd; padding: 0.5rem; text-align: left; }
        th { background: #f4f4f4; }
        .task-list { list-style: none; padding-left: 0; }
        .task-list-item { margin: 0.5rem 0; }
        .table-of-contents { background: #f9f9f9; padding: 1rem; border-radius: 4px; margin-bottom: 2rem; }
        .table-of-contents ul { margin: 0; padding-left: 1.5rem; }
    </style>
</head>
<body>
{body}
</body>
</html>"""


@dataclass(frozen=True, slots=True)
class TocEntry:
    level: int
    title: str
    anchor: str


def heading_id(text: str) -> str:
    slug = SLUG_STRIP_RE.sub("", text.lower())
    return WHITESPACE_RE.sub("-", slug)


def clamp_heading_level(level: int) -> int:
    return max(1, min(level, 6))


def _close_lists(stack: list[str], out: list[str]) -> None:
    while stack:
        out.append(f"</{stack.pop()}>\n")


def _open_list(stack: list[str], out: list[str], tag: str, opening: str | None = None) -> None:
    if stack and stack[-1] == tag:
        return
    # one level only: switching list type closes the current list first
    _close_lists(stack, out)
    out.append(opening or f"<{tag}>\n")
    stack.append(tag)


def split_cells(row: str) -> list[str]:
    row = row.strip()
    if row.startswith("|"):
        row = row[1:]
    if row.endswith("|"):
        row = row[:-1]
    return [cell.strip() for cell in row.split("|")]


def render_table(raw: str, options: ConversionOptions) -> str:
    rows = [row.strip() for row in raw.split("\n")]
    content_rows = [row for row in rows if row and not SEPARATOR_ROW_RE.match(row)]
    if not content_rows:
        return ""
    parts = ["<table>\n"]
    header, body = content_rows[0], content_rows[1:]
    parts.append("<thead>\n")
    parts.append(_render_row(header, "th", options))
    parts.append("</thead>\n")
    if body:
        parts.append("<tbody>\n")
        for row in body:
            parts.append(_render_row(row, "td", options))
        parts.append("</tbody>\n")
    parts.append("</table>\n")
    return "".join(parts)


def _render_row(row: str, tag: str, options: ConversionOptions) -> str:
    cells = "".join(
        f"    <{tag}>{transform_inline(cell, options)}</{tag}>\n" for cell in split_cells(row)
    )
    return f"  <tr>\n{cells}  </tr>\n"


def render_toc(entries: Sequence[TocEntry]) -> str:
    items = "".join(f'  <li><a href="#{entry.anchor}">{entry.title}</a></li>\n' for entry in entries)
    return (
        '<div class="table-of-contents">\n<h2>Table of Contents</h2>\n<ul>\n'
        f"{items}</ul>\n</div>\n\n"
    )


def render(blocks: Sequence[Block], options: ConversionOptions | None = None) -> str:
    """Render *blocks* to an HTML fragment or document per *options*."""

    options = options or ConversionOptions()
    out: list[str] = []
    list_stack: list[str] = []
    toc: list[TocEntry] = []

    for block in blocks:
        if not block.kind.is_list_item:
            _close_lists(list_stack, out)

        if block.kind is BlockKind.HEADING:
            level = clamp_heading_level((block.level or 1) + options.heading_offset)
            anchor = heading_id(block.text)
            if options.generate_toc:
                toc.append(TocEntry(level=level, title=block.text, anchor=anchor))
            content = transform_inline(block.text, options)
            out.append(f'<h{level} id="{anchor}">{content}</h{level}>\n')
        elif block.kind is BlockKind.PARAGRAPH:
            out.append(f"<p>{transform_inline(block.text, options)}</p>\n")
        elif block.kind is BlockKind.CODE_BLOCK:
            code_class = f' class="language-{block.language}"' if block.language else ""
            out.append(f"<pre><code{code_class}>{escape_html(block.text)}</code></pre>\n")
        elif block.kind is BlockKind.BLOCKQUOTE:
            out.append(f"<blockquote><p>{transform_inline(block.text, options)}</p></blockquote>\n")
        elif block.kind is BlockKind.UNORDERED_LIST_ITEM:
            _open_list(list_stack, out, "ul")
            out.append(f"  <li>{transform_inline(block.text, options)}</li>\n")
        elif block.kind is BlockKind.ORDERED_LIST_ITEM:
            _open_list(list_stack, out, "ol")
            out.append(f"  <li>{transform_inline(block.text, options)}</li>\n")
        elif block.kind is BlockKind.TASK_LIST_ITEM:
            if not options.enable_task_lists:
                continue
            _open_list(list_stack, out, "ul", '<ul class="task-list">\n')
            checked = " checked" if block.text.startswith("[x]") else ""
            content = transform_inline(block.text[3:].strip(), options)
            out.append(
                f'  <li class="task-list-item"><input type="checkbox"{checked} disabled> {content}</li>\n'
            )
        elif block.kind is BlockKind.TABLE:
            if options.enable_tables:
                out.append(render_table(block.text, options))
        elif block.kind is BlockKind.HORIZONTAL_RULE:
            out.append("<hr>\n")
        # empty lines only close open lists

    _close_lists(list_stack, out)

    fragment = "".join(out)
    if options.generate_toc and toc:
        fragment = render_toc(toc) + fragment
    fragment = fragment.strip()
    if options.sanitize_html:
        fragment = sanitize_html(fragment)
    if options.output_format is OutputFormat.FULL_HTML:
        return wrap_document(fragment)
    return fragment


def wrap_document(fragment: str) -> str:
    return DOCUMENT_TEMPLATE.replace("{body}", fragment, 1)


__all__ = ["TocEntry", "heading_id", "render", "render_table", "render_toc", "wrap_document"]

"""Best effort HTML to Markdown conversion.

This is a fixed chain of regex substitutions, not an HTML parser. Simple,
well nested HTML comes out as reasonable Markdown; overlapping or deeply
nested markup does not round trip.
"""

from __future__ import annotations

import html as html_lib
import re

from .models import ConversionMode, ConversionOptions

_FLAGS = re.IGNORECASE | re.DOTALL

PRE_CODE_RE = re.compile(r"<pre[^>]*>\s*<code([^>]*)>(.*?)</code>\s*</pre>", _FLAGS)
PRE_RE = re.compile(r"<pre[^>]*>(.*?)</pre>", _FLAGS)
LANGUAGE_RE = re.compile(r"""class\s*=\s*["'][^"']*?language-([\w+#.-]+)""", re.IGNORECASE)
HEADING_RE = re.compile(r"[ \t]*<h([1-6])(?:\s[^>]*)?>(.*?)</h\1\s*>", _FLAGS)
BOLD_RE = re.compile(r"<(strong|b)(?:\s[^>]*)?>(.*?)</\1\s*>", _FLAGS)
ITALIC_RE = re.compile(r"<(em|i)(?:\s[^>]*)?>(.*?)</\1\s*>", _FLAGS)
STRIKE_RE = re.compile(r"<(del|s|strike)(?:\s[^>]*)?>(.*?)</\1\s*>", _FLAGS)
CODE_RE = re.compile(r"<code(?:\s[^>]*)?>(.*?)</code\s*>", _FLAGS)
LINK_RE = re.compile(r"<a(\s[^>]*)?>(.*?)</a\s*>", _FLAGS)
IMAGE_RE = re.compile(r"<img(\s[^>]*?)?\s*/?>", re.IGNORECASE)
BR_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
BLOCKQUOTE_RE = re.compile(r"[ \t]*<blockquote(?:\s[^>]*)?>(.*?)</blockquote\s*>", _FLAGS)
TABLE_RE = re.compile(r"[ \t]*<table(?:\s[^>]*)?>(.*?)</table\s*>", _FLAGS)
TABLE_ROW_RE = re.compile(r"<tr(?:\s[^>]*)?>(.*?)</tr\s*>", _FLAGS)
TABLE_CELL_RE = re.compile(r"<(th|td)(?:\s[^>]*)?>(.*?)</\1\s*>", _FLAGS)
TASK_ITEM_RE = re.compile(r"\s*<li(?:\s[^>]*)?>\s*<input([^>]*)>\s*(.*?)</li\s*>", _FLAGS)
ORDERED_LIST_RE = re.compile(r"[ \t]*<ol(?:\s[^>]*)?>(.*?)</ol\s*>", _FLAGS)
LIST_ITEM_RE = re.compile(r"\s*<li(?:\s[^>]*)?>(.*?)</li\s*>", _FLAGS)
LIST_END_RE = re.compile(r"</(?:ul|ol)\s*>", re.IGNORECASE)
PARAGRAPH_RE = re.compile(r"[ \t]*<p(?:\s[^>]*)?>(.*?)</p\s*>", _FLAGS)
HR_RE = re.compile(r"[ \t]*<hr(?:\s[^>]*)?/?>", re.IGNORECASE)
TAG_RE = re.compile(r"<[^>]+>")
ATTRIBUTE_RE = re.compile(r"""([\w-]+)\s*=\s*["']([^"']*)["']""")
EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")


def parse_attributes(fragment: str | None) -> dict[str, str]:
    if not fragment:
        return {}
    return {name.lower(): value for name, value in ATTRIBUTE_RE.findall(fragment)}


def _strip_tags(text: str) -> str:
    return TAG_RE.sub("", text)


def _title_suffix(attrs: dict[str, str]) -> str:
    title = attrs.get("title")
    return f' "{title}"' if title else ""


def _fenced_code(match: re.Match[str]) -> str:
    attributes, body = match.groups()
    language = LANGUAGE_RE.search(attributes or "")
    lang = language.group(1) if language else ""
    return f"\n```{lang}\n{body.strip(chr(10))}\n```\n\n"


def _bare_pre(match: re.Match[str]) -> str:
    body = _strip_tags(match.group(1))
    return f"\n```\n{body.strip(chr(10))}\n```\n\n"


def _heading(match: re.Match[str]) -> str:
    level, text = match.groups()
    return "\n" + "#" * int(level) + " " + text.strip() + "\n\n"


def _link(match: re.Match[str]) -> str:
    attrs = parse_attributes(match.group(1))
    return f"[{match.group(2).strip()}]({attrs.get('href', '')}{_title_suffix(attrs)})"


def _image(match: re.Match[str]) -> str:
    attrs = parse_attributes(match.group(1))
    return f"![{attrs.get('alt', '')}]({attrs.get('src', '')}{_title_suffix(attrs)})"


def _blockquote(match: re.Match[str]) -> str:
    inner = PARAGRAPH_RE.sub(lambda m: m.group(1).strip() + "\n", match.group(1))
    lines = [line.strip() for line in _strip_tags(inner).split("\n")]
    quoted = "".join(f"> {line}\n" for line in lines if line)
    return f"\n{quoted}\n"


def _table(match: re.Match[str]) -> str:
    rows: list[list[str]] = []
    for row in TABLE_ROW_RE.findall(match.group(1)):
        cells = [
            " ".join(_strip_tags(cell).split())
            for _, cell in TABLE_CELL_RE.findall(row)
        ]
        if cells:
            rows.append(cells)
    if not rows:
        return ""
    lines: list[str] = []
    for index, cells in enumerate(rows):
        lines.append("| " + " | ".join(cells) + " |")
        if index == 0:
            lines.append("| " + " | ".join("---" for _ in cells) + " |")
    return "\n" + "\n".join(lines) + "\n\n"


def _task_item(match: re.Match[str]) -> str:
    attributes, text = match.groups()
    attrs = attributes.lower()
    if "checkbox" not in attrs:
        return match.group(0)
    mark = "[x]" if re.search(r"\bchecked\b", attrs) else "[ ]"
    return f"\n- {mark} {_strip_tags(text).strip()}"


def _ordered_list(match: re.Match[str]) -> str:
    items = LIST_ITEM_RE.findall(match.group(1))
    numbered = "".join(
        f"{index}. {' '.join(_strip_tags(item).split())}\n"
        for index, item in enumerate(items, start=1)
    )
    return f"\n{numbered}\n"


def _list_item(match: re.Match[str]) -> str:
    return f"\n- {' '.join(_strip_tags(match.group(1)).split())}"


def html_to_markdown(html: str, options: ConversionOptions | None = None) -> str:
    """Convert simple HTML to Markdown."""

    options = options or ConversionOptions(mode=ConversionMode.HTML_TO_MARKDOWN)
    text = html

    text = PRE_CODE_RE.sub(_fenced_code, text)
    text = PRE_RE.sub(_bare_pre, text)
    text = HEADING_RE.sub(_heading, text)

    text = BOLD_RE.sub(r"**\2**", text)
    text = ITALIC_RE.sub(r"*\2*", text)
    if options.enable_strikethrough:
        text = STRIKE_RE.sub(r"~~\2~~", text)
    text = CODE_RE.sub(r"`\1`", text)
    text = LINK_RE.sub(_link, text)
    text = IMAGE_RE.sub(_image, text)
    text = BR_RE.sub("\n", text)

    text = BLOCKQUOTE_RE.sub(_blockquote, text)
    if options.enable_tables:
        text = TABLE_RE.sub(_table, text)
    if options.enable_task_lists:
        text = TASK_ITEM_RE.sub(_task_item, text)
    text = ORDERED_LIST_RE.sub(_ordered_list, text)
    text = LIST_ITEM_RE.sub(_list_item, text)
    text = LIST_END_RE.sub("\n", text)

    text = PARAGRAPH_RE.sub(lambda m: m.group(1).strip() + "\n\n", text)
    text = HR_RE.sub("\n---\n\n", text)

    text = _strip_tags(text)
    text = html_lib.unescape(text)
    text = "\n".join(line.rstrip() for line in text.split("\n"))
    text = EXCESS_NEWLINES_RE.sub("\n\n", text)
    return text.strip()


__all__ = ["html_to_markdown", "parse_attributes"]

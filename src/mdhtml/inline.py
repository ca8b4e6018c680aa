"""Span level Markdown to HTML substitutions.

The rules run in a fixed order and each one sees the output of the previous
one. Reordering them changes the result on ambiguous input such as
``***x***``, so ``INLINE_RULES`` is the contract:

1. bold, 2. italic, 3. strikethrough, 4. inline code, 5. links, 6. images,
7. autolinks.
"""

from __future__ import annotations

import re
from typing import Callable

from .models import ConversionOptions

InlineRule = Callable[[str, ConversionOptions], str]

BOLD_STAR_RE = re.compile(r"\*\*(.*?)\*\*")
BOLD_UNDERSCORE_RE = re.compile(r"__(.*?)__")
ITALIC_STAR_RE = re.compile(r"\*(.*?)\*")
ITALIC_UNDERSCORE_RE = re.compile(r"_(.*?)_")
STRIKE_RE = re.compile(r"~~(.*?)~~")
CODE_RE = re.compile(r"`(.*?)`")
LINK_RE = re.compile(r'(?<!!)\[([^\]]+)\]\(([^)]+?)(?:\s+"([^"]+)")?\)')
IMAGE_RE = re.compile(r'!\[([^\]]*)\]\(([^)]+?)(?:\s+"([^"]+)")?\)')
URL_RE = re.compile(r"""(?<![\w"'=>/])(https?://[^\s<>"']+)""")
EMAIL_RE = re.compile(r"""(?<![\w.%+:/"'=>-])([a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,})""")


def _title_attr(title: str | None) -> str:
    return f' title="{title}"' if title else ""


def bold(text: str, options: ConversionOptions) -> str:
    text = BOLD_STAR_RE.sub(r"<strong>\1</strong>", text)
    return BOLD_UNDERSCORE_RE.sub(r"<strong>\1</strong>", text)


def italic(text: str, options: ConversionOptions) -> str:
    text = ITALIC_STAR_RE.sub(r"<em>\1</em>", text)
    return ITALIC_UNDERSCORE_RE.sub(r"<em>\1</em>", text)


def strikethrough(text: str, options: ConversionOptions) -> str:
    if not options.enable_strikethrough:
        return text
    return STRIKE_RE.sub(r"<del>\1</del>", text)


def inline_code(text: str, options: ConversionOptions) -> str:
    # content is not escaped, unlike fenced code blocks
    return CODE_RE.sub(r"<code>\1</code>", text)


def links(text: str, options: ConversionOptions) -> str:
    def _replace(match: re.Match[str]) -> str:
        label, url, title = match.groups()
        return f'<a href="{url}"{_title_attr(title)}>{label}</a>'

    return LINK_RE.sub(_replace, text)


def images(text: str, options: ConversionOptions) -> str:
    def _replace(match: re.Match[str]) -> str:
        alt, url, title = match.groups()
        return f'<img src="{url}" alt="{alt}"{_title_attr(title)} />'

    return IMAGE_RE.sub(_replace, text)


def autolinks(text: str, options: ConversionOptions) -> str:
    if not options.enable_autolinks:
        return text
    text = URL_RE.sub(r'<a href="\1">\1</a>', text)
    return EMAIL_RE.sub(r'<a href="mailto:\1">\1</a>', text)


INLINE_RULES: tuple[InlineRule, ...] = (
    bold,
    italic,
    strikethrough,
    inline_code,
    links,
    images,
    autolinks,
)


def transform_inline(text: str, options: ConversionOptions | None = None) -> str:
    options = options or ConversionOptions()
    for rule in INLINE_RULES:
        text = rule(text, options)
    return text


__all__ = ["INLINE_RULES", "transform_inline"]

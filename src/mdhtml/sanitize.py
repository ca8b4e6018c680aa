"""Strip unsafe constructs from rendered HTML."""

from __future__ import annotations

import bleach

ALLOWED_TAGS = frozenset(bleach.sanitizer.ALLOWED_TAGS).union(
    {
        # text
        "p",
        "br",
        "div",
        "span",
        "del",
        "s",
        "ins",
        "mark",
        "sub",
        "sup",
        # headings
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        # lists, task lists use input
        "ul",
        "ol",
        "li",
        "input",
        "hr",
        "blockquote",
        # code
        "pre",
        "code",
        "kbd",
        # tables
        "table",
        "thead",
        "tbody",
        "tr",
        "th",
        "td",
        # media
        "img",
    }
)

ALLOWED_ATTRIBUTES = {
    "a": ["href", "title"],
    "img": ["src", "alt", "title"],
    "code": ["class"],
    "pre": ["class"],
    "input": ["type", "checked", "disabled"],
    "ul": ["class"],
    "ol": ["start", "class"],
    "li": ["class"],
    "div": ["class"],
    "span": ["class"],
    "th": ["colspan", "rowspan", "align"],
    "td": ["colspan", "rowspan", "align"],
    **{f"h{level}": ["id"] for level in range(1, 7)},
}

ALLOWED_PROTOCOLS = frozenset({"http", "https", "mailto"})


def sanitize_html(html: str) -> str:
    """Return *html* reduced to the tags, attributes and URL schemes the renderer emits.

    Disallowed tags are dropped and their text is kept escaped. Attribute
    values are entity-decoded before the protocol check, so encoded or
    unquoted ``javascript:`` URLs are removed as well.
    """

    return bleach.clean(
        html,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        protocols=ALLOWED_PROTOCOLS,
        strip=True,
        strip_comments=True,
    )


__all__ = ["ALLOWED_ATTRIBUTES", "ALLOWED_PROTOCOLS", "ALLOWED_TAGS", "sanitize_html"]

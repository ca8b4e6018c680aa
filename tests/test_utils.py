from pathlib import Path

from mdhtml.utils import (
    atomic_write,
    escape_html,
    generate_entry_id,
    line_count,
    normalize_newlines,
    text_within_limit,
)


def test_escape_html_encodes_ampersand_first() -> None:
    assert escape_html("<a href=\"x\">Tom & 'Jerry'</a>") == (
        "&lt;a href=&quot;x&quot;&gt;Tom &amp; &#39;Jerry&#39;&lt;/a&gt;"
    )
    assert escape_html("&lt;") == "&amp;lt;"


def test_normalize_newlines() -> None:
    text = "line1\r\nline2 \rline3\n"
    assert normalize_newlines(text) == "line1\nline2 \nline3\n"


def test_line_count() -> None:
    assert line_count("") == 1
    assert line_count("a\nb\n") == 3


def test_generate_entry_id_unique() -> None:
    first = generate_entry_id()
    second = generate_entry_id()
    assert first != second
    assert first.startswith("conv-")
    assert len(first.split("-")) == 3


def test_text_within_limit() -> None:
    assert text_within_limit("a" * 1024 * 1024, 1)
    assert not text_within_limit("a" * (1024 * 1024 + 1), 1)
    assert not text_within_limit("é" * (512 * 1024 + 1), 1)


def test_atomic_write_creates_parents(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b" / "out.txt"
    atomic_write(target, "data")
    assert target.read_text(encoding="utf-8") == "data"

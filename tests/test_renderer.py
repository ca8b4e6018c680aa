import re

from mdhtml.models import ConversionOptions, OutputFormat
from mdhtml.renderer import heading_id, render
from mdhtml.scanner import scan


def to_html(text: str, **options: object) -> str:
    return render(scan(text), ConversionOptions(**options))


def test_plain_paragraph_round_trips_through_tag_stripping() -> None:
    text = "Just some plain words here."
    html = to_html(text)
    assert html == "<p>Just some plain words here.</p>"
    assert re.sub(r"<[^>]+>", "", html) == text


def test_heading_gets_slug_id() -> None:
    assert to_html("## Hello, World!") == '<h2 id="hello-world">Hello, World!</h2>'
    assert heading_id("Code   Example v2") == "code-example-v2"


def test_heading_offset_is_clamped() -> None:
    assert to_html("# Title", heading_offset=5).startswith("<h6 ")
    assert to_html("# Title", heading_offset=-5).startswith("<h1 ")
    assert to_html("### Title", heading_offset=-1).startswith("<h2 ")


def test_unordered_and_ordered_lists() -> None:
    html = to_html("- a\n- b\n1. one\n2. two")
    assert html == (
        "<ul>\n  <li>a</li>\n  <li>b</li>\n</ul>\n"
        "<ol>\n  <li>one</li>\n  <li>two</li>\n</ol>"
    )


def test_non_list_block_closes_open_list() -> None:
    html = to_html("- a\nafter")
    assert html == "<ul>\n  <li>a</li>\n</ul>\n<p>after</p>"


def test_task_list_checkbox_fidelity() -> None:
    html = to_html("- [x] done\n- [ ] pending")
    assert '<ul class="task-list">' in html
    assert '<input type="checkbox" checked disabled> done' in html
    assert '<input type="checkbox" disabled> pending' in html


def test_task_items_are_dropped_when_disabled() -> None:
    html = to_html("- [x] done\n- [ ] pending\n\nkeep", enable_task_lists=False)
    assert "done" not in html
    assert "pending" not in html
    assert "<li" not in html
    assert html == "<p>keep</p>"


def test_table_rendering_skips_separator() -> None:
    html = to_html("| Name | Role |\n|------|:----:|\n| Ann | Dev |\n| Bob | Ops |")
    assert html == (
        "<table>\n<thead>\n  <tr>\n    <th>Name</th>\n    <th>Role</th>\n  </tr>\n</thead>\n"
        "<tbody>\n  <tr>\n    <td>Ann</td>\n    <td>Dev</td>\n  </tr>\n"
        "  <tr>\n    <td>Bob</td>\n    <td>Ops</td>\n  </tr>\n</tbody>\n</table>"
    )
    assert "---" not in html


def test_tables_are_gated() -> None:
    html = to_html("| a | b |\n|---|---|\n| 1 | 2 |\n\ntext", enable_tables=False)
    assert "<table" not in html
    assert html == "<p>text</p>"


def test_code_block_is_escaped_with_language_class() -> None:
    html = to_html("```html\n<b>\"x\" & 'y'</b>\n```")
    assert html == (
        '<pre><code class="language-html">'
        "&lt;b&gt;&quot;x&quot; &amp; &#39;y&#39;&lt;/b&gt;</code></pre>"
    )


def test_unterminated_fence_still_renders() -> None:
    html = to_html("```\nfirst\nsecond")
    assert html == "<pre><code>first\nsecond</code></pre>"


def test_blockquote_and_rule() -> None:
    assert to_html("> *quoted*\n---") == "<blockquote><p><em>quoted</em></p></blockquote>\n<hr>"


def test_table_of_contents_is_prepended() -> None:
    html = to_html("# Intro\n## Usage", generate_toc=True)
    assert html.startswith('<div class="table-of-contents">\n<h2>Table of Contents</h2>\n<ul>\n')
    assert '  <li><a href="#intro">Intro</a></li>\n' in html
    assert '  <li><a href="#usage">Usage</a></li>\n' in html
    assert html.endswith('<h2 id="usage">Usage</h2>')


def test_full_html_wraps_fragment() -> None:
    fragment = to_html("# Doc\n\ntext")
    document = to_html("# Doc\n\ntext", output_format=OutputFormat.FULL_HTML)
    assert document.startswith("<!DOCTYPE html>")
    assert f"<body>\n{fragment}\n</body>" in document
    assert "<style>" in document


def test_fragment_has_no_document_wrapper() -> None:
    html = to_html("# Doc", output_format=OutputFormat.HTML_FRAGMENT)
    assert "<html" not in html
    assert "<body>" not in html


def test_sanitizer_removes_scripts_from_raw_html() -> None:
    text = 'hi <script>alert(1)</script> <a href="javascript:evil()" onclick="x()">x</a>'
    html = to_html(text)
    assert "<script" not in html
    assert "onclick" not in html
    assert "javascript:" not in html
    unsafe = to_html(text, sanitize_html=False)
    assert "<script>alert(1)</script>" in unsafe

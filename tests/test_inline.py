from mdhtml.inline import INLINE_RULES, transform_inline
from mdhtml.models import ConversionOptions


def test_bold_and_italic() -> None:
    assert transform_inline("**bold**") == "<strong>bold</strong>"
    assert transform_inline("*italic*") == "<em>italic</em>"
    assert transform_inline("__bold__ and _it_") == "<strong>bold</strong> and <em>it</em>"


def test_bold_resolves_before_italic() -> None:
    assert transform_inline("**a *b* c**") == "<strong>a <em>b</em> c</strong>"


def test_strikethrough_is_gated() -> None:
    assert transform_inline("~~gone~~") == "<del>gone</del>"
    disabled = ConversionOptions(enable_strikethrough=False)
    assert transform_inline("~~gone~~", disabled) == "~~gone~~"


def test_inline_code_content_is_not_escaped() -> None:
    assert transform_inline("use `<b>` here") == "use <code><b></code> here"


def test_links_with_and_without_title() -> None:
    assert transform_inline("[site](https://example.com)") == '<a href="https://example.com">site</a>'
    assert (
        transform_inline('[site](https://example.com "Example")')
        == '<a href="https://example.com" title="Example">site</a>'
    )


def test_images_are_not_consumed_by_the_link_rule() -> None:
    assert transform_inline("![logo](logo.png)") == '<img src="logo.png" alt="logo" />'
    assert (
        transform_inline('![logo](logo.png "Our logo")')
        == '<img src="logo.png" alt="logo" title="Our logo" />'
    )


def test_autolinks_for_bare_urls_and_emails() -> None:
    assert (
        transform_inline("visit https://example.com now")
        == 'visit <a href="https://example.com">https://example.com</a> now'
    )
    assert (
        transform_inline("mail me@example.com please")
        == 'mail <a href="mailto:me@example.com">me@example.com</a> please'
    )


def test_autolinks_skip_urls_already_linked() -> None:
    html = transform_inline("[docs](https://example.com)")
    assert html == '<a href="https://example.com">docs</a>'
    assert html.count("<a ") == 1


def test_autolinks_are_gated() -> None:
    options = ConversionOptions(enable_autolinks=False)
    assert transform_inline("https://example.com", options) == "https://example.com"


def test_rule_order_is_fixed() -> None:
    names = [rule.__name__ for rule in INLINE_RULES]
    assert names == [
        "bold",
        "italic",
        "strikethrough",
        "inline_code",
        "links",
        "images",
        "autolinks",
    ]

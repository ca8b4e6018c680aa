from pathlib import Path

import pytest

from mdhtml.config import AppConfig, RuntimeConfig
from mdhtml.core import ConversionError, ConversionService, convert
from mdhtml.models import (
    ConversionFailure,
    ConversionMode,
    ConversionOptions,
    ConversionSuccess,
    OutputFormat,
)


def build_config(tmp_path: Path, **runtime: object) -> AppConfig:
    return AppConfig(runtime=RuntimeConfig(history_dir=tmp_path / "history", **runtime))


def test_empty_input_is_rejected(tmp_path: Path) -> None:
    service = ConversionService(build_config(tmp_path))
    for text in ("", "   \n\t"):
        result = service.convert(text)
        assert isinstance(result, ConversionFailure)
        assert result.success is False
        assert result.code == "EMPTY_INPUT"
        assert result.error == "Please provide content to convert"
    assert service.history is not None
    assert service.history.entries() == []


def test_convert_markdown_records_history(tmp_path: Path) -> None:
    service = ConversionService(build_config(tmp_path))
    result = service.convert("# Hi")
    assert isinstance(result, ConversionSuccess)
    assert result.success is True
    assert result.output == '<h1 id="hi">Hi</h1>'
    assert result.stats.original_size == 4
    assert result.stats.processed_size == len(result.output)
    entries = service.history.entries()
    assert len(entries) == 1
    assert entries[0].tool_id == "markdown-converter"
    assert entries[0].input == "# Hi"
    assert entries[0].options["mode"] == "markdown-to-html"


def test_full_html_document(tmp_path: Path) -> None:
    service = ConversionService(build_config(tmp_path))
    result = service.convert("text", ConversionOptions(output_format=OutputFormat.FULL_HTML))
    assert isinstance(result, ConversionSuccess)
    assert result.output.startswith("<!DOCTYPE html>")
    assert "<body>\n<p>text</p>\n</body>" in result.output


def test_reverse_conversion(tmp_path: Path) -> None:
    service = ConversionService(build_config(tmp_path))
    options = ConversionOptions(mode=ConversionMode.HTML_TO_MARKDOWN)
    result = service.convert("<h2>Hi</h2><p><strong>there</strong></p>", options)
    assert isinstance(result, ConversionSuccess)
    assert result.output == "## Hi\n\n**there**"


def test_size_limit(tmp_path: Path) -> None:
    service = ConversionService(build_config(tmp_path, max_input_size_mb=1))
    result = service.convert("a" * (1024 * 1024 + 1))
    assert isinstance(result, ConversionFailure)
    assert result.code == "SIZE_LIMIT"


def test_history_can_be_disabled(tmp_path: Path) -> None:
    assert ConversionService(build_config(tmp_path, history_enabled=False)).history is None
    service = ConversionService(build_config(tmp_path), record_history=False)
    assert service.history is None
    assert isinstance(service.convert("# Hi"), ConversionSuccess)
    assert not (tmp_path / "history").exists()


def test_unexpected_errors_become_failures(monkeypatch: pytest.MonkeyPatch) -> None:
    def boom(_: str) -> list:
        raise ValueError("scanner exploded")

    monkeypatch.setattr("mdhtml.core.scan", boom)
    result = convert("# Hi")
    assert isinstance(result, ConversionFailure)
    assert result.code == "INTERNAL"
    assert result.error == "scanner exploded"


def test_convert_file_detects_mode_and_writes_output(tmp_path: Path) -> None:
    source = tmp_path / "page.html"
    source.write_text("<h1>Title</h1><p>Body</p>", encoding="utf-8")
    target = tmp_path / "out" / "page.md"
    service = ConversionService(build_config(tmp_path))
    conversion = service.convert_file(source, output=target)
    assert conversion.mode is ConversionMode.HTML_TO_MARKDOWN
    assert conversion.output_path == target
    assert target.read_text(encoding="utf-8") == "# Title\n\nBody"


def test_convert_file_without_detection_keeps_mode(tmp_path: Path) -> None:
    source = tmp_path / "notes.txt"
    source.write_text("<p>hello</p>", encoding="utf-8")
    service = ConversionService(build_config(tmp_path))
    options = ConversionOptions(mode=ConversionMode.HTML_TO_MARKDOWN)
    conversion = service.convert_file(source, options, detect=False)
    assert conversion.mode is ConversionMode.HTML_TO_MARKDOWN
    assert conversion.output_path is None
    assert isinstance(conversion.result, ConversionSuccess)
    assert conversion.result.output == "hello"


def test_convert_file_errors(tmp_path: Path) -> None:
    service = ConversionService(build_config(tmp_path))
    with pytest.raises(ConversionError) as missing:
        service.convert_file(tmp_path / "missing.md")
    assert missing.value.code == "NOT_FOUND"

    unsupported = tmp_path / "report.pdf"
    unsupported.write_bytes(b"%PDF-1.7")
    with pytest.raises(ConversionError) as exc:
        service.convert_file(unsupported)
    assert exc.value.code == "UNSUPPORTED_TYPE"

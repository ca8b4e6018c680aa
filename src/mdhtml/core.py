from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path

from .config import AppConfig
from .constraint import EMPTY_INPUT_MESSAGE, TOOL_ID
from .detection import DetectionError, detect_mode
from .history import HistoryEntry, HistoryLog
from .models import (
    ConversionFailure,
    ConversionMode,
    ConversionOptions,
    ConversionResult,
    ConversionSuccess,
)
from .renderer import render
from .reverse import html_to_markdown
from .scanner import scan
from .stats import compute_stats
from .utils import atomic_write, text_within_limit

LOG = logging.getLogger("mdhtml")


class ConversionError(RuntimeError):
    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code


def _validate_input(text: str) -> None:
    if not text.strip():
        raise ConversionError("EMPTY_INPUT", EMPTY_INPUT_MESSAGE)


def _markdown_to_html(text: str, options: ConversionOptions) -> ConversionSuccess:
    blocks = scan(text)
    output = render(blocks, options)
    return ConversionSuccess(output=output, stats=compute_stats(text, output, blocks))


def _html_to_markdown(text: str, options: ConversionOptions) -> ConversionSuccess:
    output = html_to_markdown(text, options)
    return ConversionSuccess(output=output, stats=compute_stats(text, output))


def convert(text: str, options: ConversionOptions | None = None) -> ConversionResult:
    """Convert *text* in the direction given by ``options.mode``.

    Never raises: empty input and unexpected errors come back as a
    :class:`ConversionFailure`.
    """

    options = options or ConversionOptions()
    try:
        _validate_input(text)
        if options.mode is ConversionMode.MARKDOWN_TO_HTML:
            return _markdown_to_html(text, options)
        return _html_to_markdown(text, options)
    except ConversionError as exc:
        return ConversionFailure(error=str(exc), code=exc.code)
    except Exception as exc:
        LOG.exception("Conversion failed unexpectedly")
        return ConversionFailure(error=str(exc) or "Failed to convert content", code="INTERNAL")


@dataclass(slots=True)
class FileConversion:
    source: Path
    mode: ConversionMode
    result: ConversionResult
    output_path: Path | None = None


class ConversionService:
    def __init__(
        self, config: AppConfig, history: HistoryLog | None = None, *, record_history: bool = True
    ) -> None:
        self._config = config
        if history is None and record_history and config.runtime.history_enabled:
            history = HistoryLog(config.runtime.history_path, config.runtime.max_history_entries)
        self._history = history

    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def history(self) -> HistoryLog | None:
        return self._history

    def default_options(self) -> ConversionOptions:
        return self._config.conversion

    def convert(self, text: str, options: ConversionOptions | None = None) -> ConversionResult:
        opts = options or self.default_options()
        if not text_within_limit(text, self._config.runtime.max_input_size_mb):
            return ConversionFailure(
                error=f"Input exceeds configured limit of {self._config.runtime.max_input_size_mb} MB",
                code="SIZE_LIMIT",
            )
        start = time.perf_counter()
        result = convert(text, opts)
        elapsed = (time.perf_counter() - start) * 1000
        LOG.debug("Converted %d chars (%s) in %.2fms", len(text), opts.mode.value, elapsed)
        if isinstance(result, ConversionSuccess):
            self._record(text, result.output, opts, elapsed)
        return result

    def convert_file(
        self,
        path: Path,
        options: ConversionOptions | None = None,
        *,
        output: Path | None = None,
        detect: bool = True,
    ) -> FileConversion:
        if not path.exists():
            raise ConversionError("NOT_FOUND", f"Source file does not exist: {path}")
        opts = options or self.default_options()
        if detect:
            try:
                detection = detect_mode(path)
            except DetectionError as exc:
                raise ConversionError("UNSUPPORTED_TYPE", str(exc)) from exc
            opts = opts.with_mode(detection.mode)
        text = path.read_text(encoding="utf-8")
        result = self.convert(text, opts)
        written: Path | None = None
        if output is not None and isinstance(result, ConversionSuccess):
            atomic_write(output, result.output)
            written = output
        return FileConversion(source=path, mode=opts.mode, result=result, output_path=written)

    def _record(self, text: str, output: str, options: ConversionOptions, elapsed_ms: float) -> None:
        if self._history is None:
            return
        try:
            self._history.append(
                HistoryEntry(
                    tool_id=TOOL_ID,
                    input=text,
                    output=output,
                    options=options.as_dict(),
                    elapsed_ms=elapsed_ms,
                )
            )
        except OSError:
            LOG.warning("Could not write history to %s", self._history.path, exc_info=True)


__all__ = [
    "ConversionError",
    "ConversionService",
    "FileConversion",
    "convert",
]

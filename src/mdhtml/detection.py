from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from .models import ConversionMode

EXTENSION_MAP: dict[str, ConversionMode] = {
    ".md": ConversionMode.MARKDOWN_TO_HTML,
    ".markdown": ConversionMode.MARKDOWN_TO_HTML,
    ".mdown": ConversionMode.MARKDOWN_TO_HTML,
    ".mkd": ConversionMode.MARKDOWN_TO_HTML,
    ".txt": ConversionMode.MARKDOWN_TO_HTML,
    ".html": ConversionMode.HTML_TO_MARKDOWN,
    ".htm": ConversionMode.HTML_TO_MARKDOWN,
    ".xhtml": ConversionMode.HTML_TO_MARKDOWN,
}

HTML_EXTENSIONS = frozenset({".html", ".htm", ".xhtml"})
HTML_SNIFF_RE = re.compile(r"^\s*(?:<!doctype\s+html|<\?xml|<!--|<[a-zA-Z][\w-]*[\s/>])", re.IGNORECASE)


@dataclass(slots=True)
class DetectionResult:
    mode: ConversionMode
    extension: str


class DetectionError(RuntimeError):
    """Raised when the conversion direction cannot be determined."""


def sniff_mode(text: str) -> ConversionMode:
    if HTML_SNIFF_RE.match(text):
        return ConversionMode.HTML_TO_MARKDOWN
    return ConversionMode.MARKDOWN_TO_HTML


def detect_mode(path: Path) -> DetectionResult:
    extension = path.suffix.lower()
    mode = EXTENSION_MAP.get(extension)
    if not mode:
        raise DetectionError(f"Unsupported file extension: {extension or '<none>'}")
    if extension in HTML_EXTENSIONS:
        with path.open("r", encoding="utf-8", errors="replace") as handle:
            sample = handle.read(512)
        if sniff_mode(sample) is not ConversionMode.HTML_TO_MARKDOWN:
            raise DetectionError(f"Content of {path.name} does not look like HTML")
    return DetectionResult(mode=mode, extension=extension)


__all__ = ["DetectionError", "DetectionResult", "detect_mode", "sniff_mode"]

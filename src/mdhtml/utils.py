from __future__ import annotations

import hashlib
import os
import tempfile
import time
from pathlib import Path


HTML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
}


def escape_html(text: str) -> str:
    # & first so the other entities are not double encoded
    for char in ("&", "<", ">", '"', "'"):
        text = text.replace(char, HTML_ESCAPES[char])
    return text


def generate_entry_id(prefix: str = "conv") -> str:
    epoch_ms = int(time.time() * 1000)
    random_bits = hashlib.sha256(os.urandom(16)).hexdigest()[:8]
    return f"{prefix}-{epoch_ms}-{random_bits}"


def atomic_write(path: Path, data: str, encoding: str = "utf-8") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile("w", delete=False, dir=path.parent, encoding=encoding) as tmp:
        tmp.write(data)
        tmp.flush()
        os.fsync(tmp.fileno())
    os.replace(tmp.name, path)


def text_within_limit(text: str, max_mb: int) -> bool:
    return len(text.encode("utf-8")) <= max_mb * 1024 * 1024


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def line_count(text: str) -> int:
    return len(text.split("\n"))

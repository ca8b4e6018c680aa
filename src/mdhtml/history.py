"""Persistent conversion history stored as JSON lines."""

from __future__ import annotations

import csv
import json
import threading
import time
from dataclasses import asdict, dataclass, field
from io import StringIO
from pathlib import Path
from typing import Any

from .utils import atomic_write, generate_entry_id

CSV_HEADER = [
    "entry_id",
    "tool_id",
    "timestamp",
    "mode",
    "input_chars",
    "output_chars",
    "elapsed_ms",
]


@dataclass(slots=True)
class HistoryEntry:
    tool_id: str
    input: str
    output: str
    options: dict[str, Any]
    timestamp: float = field(default_factory=time.time)
    elapsed_ms: float = 0.0
    entry_id: str = field(default_factory=generate_entry_id)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> HistoryEntry:
        return cls(
            tool_id=str(payload.get("tool_id", "")),
            input=str(payload.get("input", "")),
            output=str(payload.get("output", "")),
            options=dict(payload.get("options") or {}),
            timestamp=float(payload.get("timestamp", 0.0)),
            elapsed_ms=float(payload.get("elapsed_ms", 0.0)),
            entry_id=str(payload.get("entry_id", "")),
        )

    def as_row(self) -> list[str]:
        return [
            self.entry_id,
            self.tool_id,
            time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime(self.timestamp)),
            str(self.options.get("mode", "")),
            str(len(self.input)),
            str(len(self.output)),
            f"{self.elapsed_ms:.2f}",
        ]


class HistoryLog:
    """Newest-last JSONL log capped at ``max_entries`` lines."""

    def __init__(self, log_file: Path, max_entries: int = 100) -> None:
        self._log_file = log_file
        self._max_entries = max(1, max_entries)
        # guards the read-modify-write in append against concurrent callers
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._log_file

    def _read_lines(self) -> list[str]:
        if not self._log_file.exists():
            return []
        with self._log_file.open("r", encoding="utf-8") as handle:
            return [line for line in handle.read().splitlines() if line.strip()]

    def append(self, entry: HistoryEntry) -> None:
        line = json.dumps(entry.to_dict(), ensure_ascii=False)
        with self._lock:
            lines = self._read_lines()
            lines.append(line)
            lines = lines[-self._max_entries:]
            atomic_write(self._log_file, "\n".join(lines) + "\n")

    def entries(self, limit: int | None = None) -> list[HistoryEntry]:
        entries: list[HistoryEntry] = []
        for line in reversed(self._read_lines()):
            try:
                payload = json.loads(line)
            except json.JSONDecodeError:
                continue
            entries.append(HistoryEntry.from_dict(payload))
            if limit is not None and len(entries) >= limit:
                break
        return entries

    def clear(self) -> None:
        with self._lock:
            self._log_file.unlink(missing_ok=True)

    def export_csv(self, path: Path) -> int:
        entries = self.entries()
        buffer = StringIO()
        writer = csv.writer(buffer)
        writer.writerow(CSV_HEADER)
        writer.writerows(entry.as_row() for entry in entries)
        atomic_write(path, buffer.getvalue())
        return len(entries)


__all__ = ["CSV_HEADER", "HistoryEntry", "HistoryLog"]

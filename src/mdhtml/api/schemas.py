from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..history import HistoryEntry
from ..models import ConversionMode, ConversionOptions, OutputFormat


class HealthStatus(BaseModel):
    status: str
    version: str | None = None


class ConversionOptionsPayload(BaseModel):
    """Per-request overrides; unset fields fall back to the configured defaults."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    mode: ConversionMode | None = None
    enable_tables: bool | None = None
    enable_strikethrough: bool | None = None
    enable_task_lists: bool | None = None
    enable_autolinks: bool | None = None
    generate_toc: bool | None = None
    sanitize_html: bool | None = None
    output_format: OutputFormat | None = None
    heading_offset: int | None = Field(default=None, ge=-5, le=5)

    def to_options(self, base: ConversionOptions) -> ConversionOptions:
        return ConversionOptions.from_mapping(self.model_dump(exclude_none=True), base=base)


class ConvertRequest(BaseModel):
    text: str
    options: ConversionOptionsPayload = Field(default_factory=ConversionOptionsPayload)


class ConvertResponse(BaseModel):
    success: bool = True
    mode: ConversionMode
    output: str
    stats: dict[str, int]


class HistoryItem(BaseModel):
    entry_id: str
    tool_id: str
    timestamp: float
    mode: str
    input_chars: int
    output_chars: int
    elapsed_ms: float

    @classmethod
    def from_entry(cls, entry: HistoryEntry) -> HistoryItem:
        return cls(
            entry_id=entry.entry_id,
            tool_id=entry.tool_id,
            timestamp=entry.timestamp,
            mode=str(entry.options.get("mode", "")),
            input_chars=len(entry.input),
            output_chars=len(entry.output),
            elapsed_ms=entry.elapsed_ms,
        )


class ErrorDetail(BaseModel):
    code: str
    message: str


__all__ = [
    "ConversionOptionsPayload",
    "ConvertRequest",
    "ConvertResponse",
    "ErrorDetail",
    "HealthStatus",
    "HistoryItem",
]

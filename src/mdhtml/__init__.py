"""Bidirectional Markdown/HTML conversion toolkit."""

from .config import AppConfig, load_config
from .core import ConversionError, ConversionService, convert
from .models import (
    ConversionFailure,
    ConversionMode,
    ConversionOptions,
    ConversionResult,
    ConversionSuccess,
    OutputFormat,
    Statistics,
)

__all__ = [
    "AppConfig",
    "load_config",
    "ConversionError",
    "ConversionFailure",
    "ConversionMode",
    "ConversionOptions",
    "ConversionResult",
    "ConversionService",
    "ConversionSuccess",
    "OutputFormat",
    "Statistics",
    "convert",
]

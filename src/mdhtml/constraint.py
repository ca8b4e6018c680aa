from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_PATH = Path("config.toml")
ENV_PREFIX = "MDHTML_"
TOOL_ID = "markdown-converter"
EMPTY_INPUT_MESSAGE = "Please provide content to convert"

__all__ = ["DEFAULT_CONFIG_PATH", "EMPTY_INPUT_MESSAGE", "ENV_PREFIX", "TOOL_ID"]

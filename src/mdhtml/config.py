from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from .constraint import DEFAULT_CONFIG_PATH
from .models import ConversionOptions


@dataclass(slots=True)
class RuntimeConfig:
    history_dir: Path = Path(".mdhtml")
    history_file: str = "history.jsonl"
    history_enabled: bool = True
    max_history_entries: int = 100
    max_input_size_mb: int = 5
    enable_local_api: bool = False

    @property
    def history_path(self) -> Path:
        return self.history_dir / self.history_file


@dataclass(slots=True)
class APIConfig:
    host: str = "127.0.0.1"
    port: int = 8000


@dataclass(slots=True)
class AppConfig:
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)
    conversion: ConversionOptions = field(default_factory=ConversionOptions)
    api: APIConfig = field(default_factory=APIConfig)


def _read_toml(path: Path) -> Mapping[str, object]:
    if not path.exists():
        return {}
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _section(raw: Mapping[str, object], name: str) -> Mapping[str, object] | None:
    data = raw.get(name)
    return data if isinstance(data, Mapping) else None


def _build_runtime(data: Mapping[str, object] | None) -> RuntimeConfig:
    if not data:
        return RuntimeConfig()
    return RuntimeConfig(
        history_dir=Path(str(data.get("history_dir", ".mdhtml"))),
        history_file=str(data.get("history_file", "history.jsonl")),
        history_enabled=bool(data.get("history_enabled", True)),
        max_history_entries=max(1, int(data.get("max_history_entries", 100))),
        max_input_size_mb=max(1, int(data.get("max_input_size_mb", 5))),
        enable_local_api=bool(data.get("enable_local_api", False)),
    )


def _build_api(data: Mapping[str, object] | None) -> APIConfig:
    if not data:
        return APIConfig()
    return APIConfig(host=str(data.get("host", "127.0.0.1")), port=int(data.get("port", 8000)))


def load_config(path: Path | None = None) -> AppConfig:
    path = path or DEFAULT_CONFIG_PATH
    raw = _read_toml(path)
    runtime = _build_runtime(_section(raw, "runtime"))
    conversion = ConversionOptions.from_mapping(_section(raw, "conversion"))
    api = _build_api(_section(raw, "api"))
    return AppConfig(runtime=runtime, conversion=conversion, api=api)


def dump_config(config: AppConfig) -> str:
    payload = {
        "runtime": {
            "history_dir": str(config.runtime.history_dir),
            "history_file": config.runtime.history_file,
            "history_enabled": config.runtime.history_enabled,
            "max_history_entries": config.runtime.max_history_entries,
            "max_input_size_mb": config.runtime.max_input_size_mb,
            "enable_local_api": config.runtime.enable_local_api,
        },
        "conversion": config.conversion.as_dict(),
        "api": {
            "host": config.api.host,
            "port": config.api.port,
        },
    }
    return json.dumps(payload, indent=2)

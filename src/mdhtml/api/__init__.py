from __future__ import annotations

from fastapi import FastAPI

from ..config import AppConfig, load_config
from ..core import ConversionService
from ..settings import Settings, get_settings
from ..version import __version__
from .routers import convert, health, history


def create_app(settings: Settings | None = None, *, require_enabled: bool = True) -> FastAPI:
    settings = settings or get_settings()
    config = _prepare_config(settings)
    if require_enabled and not config.runtime.enable_local_api:
        raise RuntimeError("Local API is disabled. Enable it via configuration or environment.")

    app = FastAPI(title="Markdown HTML Converter", version=__version__)
    app.state.config = config
    app.state.service = ConversionService(config)

    app.include_router(health.router)
    app.include_router(convert.router)
    app.include_router(history.router)
    return app


def _prepare_config(settings: Settings) -> AppConfig:
    config = load_config(settings.config_path)
    if settings.enable_local_api is not None:
        config.runtime.enable_local_api = settings.enable_local_api
    return config


__all__ = ["create_app"]

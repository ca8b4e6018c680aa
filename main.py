"""ASGI entry point: ``uvicorn main:app`` or ``python main.py``."""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException

from mdhtml.api import create_app
from mdhtml.settings import Settings, get_settings
from mdhtml.version import __version__

LOG = logging.getLogger("mdhtml")

DISABLED_HINT = "Set enable_local_api = true in config.toml or MDHTML_ENABLE_LOCAL_API=1."


def _disabled_app(reason: str) -> FastAPI:
    stub = FastAPI(title="Markdown HTML Converter (disabled)", version=__version__)

    @stub.api_route("/{path:path}", methods=["GET", "POST", "DELETE"])
    async def api_disabled(path: str) -> None:
        raise HTTPException(status_code=503, detail={"code": "API_DISABLED", "message": reason})

    return stub


def build_app(settings: Settings | None = None) -> FastAPI:
    try:
        return create_app(settings, require_enabled=True)
    except RuntimeError as exc:
        LOG.warning("Serving 503 for every route: %s", exc)
        return _disabled_app(f"{exc} {DISABLED_HINT}")


app = build_app()


if __name__ == "__main__":
    import uvicorn

    from mdhtml.config import load_config

    api_config = load_config(get_settings().config_path).api
    uvicorn.run(app, host=api_config.host, port=api_config.port)

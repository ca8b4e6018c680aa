"""FastAPI dependency providers reading the conversion state from ``app.state``."""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request

from ..config import AppConfig
from ..core import ConversionService
from ..history import HistoryLog


def get_config(request: Request) -> AppConfig:
    config: AppConfig | None = getattr(request.app.state, "config", None)
    if config is None:
        raise HTTPException(status_code=503, detail="CONFIG_UNAVAILABLE")
    return config


def get_service(request: Request) -> ConversionService:
    service: ConversionService | None = getattr(request.app.state, "service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="SERVICE_UNAVAILABLE")
    return service


def get_history(service: ConversionService = Depends(get_service)) -> HistoryLog:
    """The history log the conversion service records into.

    Responds 404 when history is turned off in ``[runtime]``.
    """

    if service.history is None:
        raise HTTPException(
            status_code=404,
            detail={"code": "HISTORY_DISABLED", "message": "Conversion history is disabled"},
        )
    return service.history


__all__ = ["get_config", "get_history", "get_service"]

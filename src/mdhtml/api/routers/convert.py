from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool

from ...config import AppConfig
from ...core import ConversionService
from ...detection import EXTENSION_MAP, sniff_mode
from ...models import ConversionFailure, ConversionMode, ConversionResult, ConversionSuccess
from ..dependencies import get_config, get_service
from ..schemas import ConversionOptionsPayload, ConvertRequest, ConvertResponse

router = APIRouter(tags=["conversion"])

_STATUS_BY_CODE = {
    "EMPTY_INPUT": 400,
    "SIZE_LIMIT": 413,
    "INTERNAL": 500,
}


@router.post("/convert", summary="Convert Markdown to HTML or HTML to Markdown")
async def convert_text(
    payload: ConvertRequest,
    service: ConversionService = Depends(get_service),
) -> ConvertResponse:
    options = payload.options.to_options(service.default_options())
    result = await run_in_threadpool(service.convert, payload.text, options)
    return _to_response(result, options.mode)


@router.post("/convert/file", summary="Convert an uploaded document")
async def convert_upload(
    file: UploadFile = File(...),
    mode: ConversionMode | None = Form(None),
    service: ConversionService = Depends(get_service),
    config: AppConfig = Depends(get_config),
) -> ConvertResponse:
    content = await file.read()
    _enforce_size_limit(content, config)
    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise HTTPException(
            status_code=400, detail={"code": "ENCODING", "message": "Upload must be UTF-8 text"}
        ) from exc
    if mode is None:
        mode = _guess_mode(file.filename, text)
    options = ConversionOptionsPayload(mode=mode).to_options(service.default_options())
    result = await run_in_threadpool(service.convert, text, options)
    return _to_response(result, options.mode)


def _guess_mode(filename: str | None, text: str) -> ConversionMode:
    suffix = Path(filename or "upload").suffix.lower()
    return EXTENSION_MAP.get(suffix) or sniff_mode(text)


def _to_response(result: ConversionResult, mode: ConversionMode) -> ConvertResponse:
    match result:
        case ConversionSuccess(output=output, stats=stats):
            return ConvertResponse(mode=mode, output=output, stats=stats.as_dict())
        case ConversionFailure(error=message, code=code):
            raise HTTPException(
                status_code=_STATUS_BY_CODE.get(code, 400),
                detail={"code": code, "message": message},
            )
    raise TypeError(f"Unexpected conversion result: {result!r}")


def _enforce_size_limit(payload: bytes, config: AppConfig) -> None:
    max_bytes = config.runtime.max_input_size_mb * 1024 * 1024
    if len(payload) > max_bytes:
        raise HTTPException(
            status_code=413,
            detail={"code": "SIZE_LIMIT", "message": f"Upload exceeds {config.runtime.max_input_size_mb} MB"},
        )


__all__ = [
    "router",
]

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response
from fastapi.concurrency import run_in_threadpool

from ...history import HistoryLog
from ..dependencies import get_history
from ..schemas import HistoryItem

router = APIRouter(prefix="/history", tags=["history"])


@router.get("", summary="Recent conversions, newest first")
async def list_history(
    limit: int = Query(20, ge=1, le=100),
    history: HistoryLog = Depends(get_history),
) -> list[HistoryItem]:
    entries = await run_in_threadpool(history.entries, limit)
    return [HistoryItem.from_entry(entry) for entry in entries]


@router.delete("", status_code=204, summary="Delete the conversion history")
async def clear_history(history: HistoryLog = Depends(get_history)) -> Response:
    await run_in_threadpool(history.clear)
    return Response(status_code=204)


__all__ = ["router"]

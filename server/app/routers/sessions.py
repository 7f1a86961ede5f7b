"""SSE session endpoints carrying JSON-RPC tool traffic."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse, StreamingResponse

from ..services.sessions import SessionManager
from ..services.tools import PARSE_ERROR, jsonrpc_error

router = APIRouter(tags=["sessions"])


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": {"message": message}})


@router.get("/sse")
async def open_session(request: Request) -> StreamingResponse:
    """Open an event stream; the first event names the endpoint for posting messages."""

    manager: SessionManager = request.app.state.sessions
    session_id = manager.open()
    return StreamingResponse(
        manager.stream(session_id),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache"},
    )


@router.post("/messages")
async def post_message(
    request: Request,
    session_id: Optional[str] = Query(default=None, alias="sessionId"),
):
    """Accept one JSON-RPC message for a session; the reply arrives on its stream."""

    manager: SessionManager = request.app.state.sessions
    if session_id is None or session_id not in manager:
        return _failure(400, "No transport found for sessionId")

    try:
        message = await request.json()
    except ValueError:
        await manager.publish(session_id, jsonrpc_error(None, PARSE_ERROR, "Parse error"))
        return _failure(400, "Invalid JSON body")

    manager.submit(session_id, message)
    return PlainTextResponse("Accepted", status_code=202)

"""WebSocket endpoint carrying JSON-RPC tool traffic."""
from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from ..services.tools import PARSE_ERROR, ToolGateway, jsonrpc_error

logger = logging.getLogger(__name__)

router = APIRouter(tags=["realtime"])


@router.websocket("/ws/{session_id}")
async def websocket_session(websocket: WebSocket, session_id: str) -> None:
    """Each text frame is one JSON-RPC message; replies go back on the same socket."""

    await websocket.accept()
    gateway: ToolGateway = websocket.app.state.gateway
    logger.info("WebSocket session opened: sessionId=%s", session_id)
    try:
        while True:
            data = await websocket.receive_text()
            try:
                message = json.loads(data)
            except json.JSONDecodeError:
                await websocket.send_text(json.dumps(jsonrpc_error(None, PARSE_ERROR, "Parse error")))
                continue

            response = await gateway.handle_message(message)
            if response is not None:
                await websocket.send_text(json.dumps(response))
    except WebSocketDisconnect:
        logger.info("WebSocket session closed: sessionId=%s", session_id)

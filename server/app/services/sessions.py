"""Bookkeeping for server-sent-event tool sessions."""
from __future__ import annotations

import asyncio
import json
import logging
import uuid
from typing import Any, AsyncIterator

from .tools import INTERNAL_ERROR, ToolGateway, jsonrpc_error

logger = logging.getLogger(__name__)


def format_sse(event: str, data: str) -> str:
    """Encode one server-sent event frame."""

    lines = "".join(f"data: {line}\n" for line in data.splitlines() or [""])
    return f"event: {event}\n{lines}\n"


class SessionManager:
    """Tracks open SSE sessions and routes JSON-RPC responses to them.

    Each session owns a queue. Responses to messages posted for a session
    are queued and drained by that session's event stream. Posted messages
    are handled on background tasks so the POST returns before the tool runs.
    """

    def __init__(self, gateway: ToolGateway, *, message_path: str = "/messages") -> None:
        self._gateway = gateway
        self._message_path = message_path
        self.queues: dict[str, asyncio.Queue[dict[str, Any]]] = {}
        self._tasks: set[asyncio.Task[None]] = set()

    def __contains__(self, session_id: object) -> bool:
        return session_id in self.queues

    def open(self) -> str:
        session_id = uuid.uuid4().hex
        self.queues[session_id] = asyncio.Queue()
        logger.info("SSE session opened: sessionId=%s", session_id)
        return session_id

    def close(self, session_id: str) -> None:
        if self.queues.pop(session_id, None) is not None:
            logger.info("SSE session closed: sessionId=%s", session_id)

    async def publish(self, session_id: str, payload: dict[str, Any]) -> None:
        queue = self.queues.get(session_id)
        if queue is None:
            logger.warning("Dropping message for closed session %s", session_id)
            return
        await queue.put(payload)

    async def dispatch(self, session_id: str, message: Any) -> None:
        """Handle a posted JSON-RPC message and queue its response on the session."""

        response = await self._gateway.handle_message(message)
        if response is not None:
            await self.publish(session_id, response)

    def submit(self, session_id: str, message: Any) -> asyncio.Task[None]:
        """Dispatch `message` in the background; its response lands on the session stream."""

        task = asyncio.create_task(self._dispatch_logged(session_id, message))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _dispatch_logged(self, session_id: str, message: Any) -> None:
        try:
            await self.dispatch(session_id, message)
        except Exception:
            logger.exception("Error processing message for session %s", session_id)
            request_id = message.get("id") if isinstance(message, dict) else None
            await self.publish(session_id, jsonrpc_error(request_id, INTERNAL_ERROR, "Internal error"))

    async def stream(self, session_id: str) -> AsyncIterator[str]:
        """Yield the endpoint announcement, then every queued response, as SSE frames."""

        queue = self.queues[session_id]
        try:
            yield format_sse("endpoint", f"{self._message_path}?sessionId={session_id}")
            while True:
                payload = await queue.get()
                yield format_sse("message", json.dumps(payload))
        finally:
            self.close(session_id)

"""Tool registry and JSON-RPC dispatch for the search tools."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Type

from pydantic import BaseModel, ValidationError

from ..models.schemas import (
    JsonRpcRequest,
    LocalSearchArgs,
    TextContent,
    ToolCallParams,
    ToolCallResult,
    ToolDefinition,
    WebSearchArgs,
)
from .errors import BraveSearchError
from .orchestration import SearchOrchestrator

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "2024-11-05"
SERVER_NAME = "example-servers/brave-search"
SERVER_VERSION = "0.1.0"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

WEB_SEARCH_DESCRIPTION = (
    "Performs a web search using the Brave Search API, ideal for general queries, news, articles, and online content. "
    "Use this for broad information gathering, recent events, or when you need diverse web sources. "
    "Supports pagination, content filtering, and freshness controls. "
    "Maximum 20 results per request, with offset for pagination. "
)

LOCAL_SEARCH_DESCRIPTION = (
    "Searches for local businesses and places using Brave's Local Search API. "
    "Best for queries related to physical locations, businesses, restaurants, services, etc. "
    "Returns detailed information including:\n"
    "- Business names and addresses\n"
    "- Ratings and review counts\n"
    "- Phone numbers and opening hours\n"
    "Use this when the query implies 'near me' or mentions specific locations. "
    "Automatically falls back to web search if no local results are found."
)


class ToolInvocationError(Exception):
    """A `tools/call` request that cannot be dispatched (bad name or arguments)."""


@dataclass(frozen=True)
class Tool:
    name: str
    description: str
    args_model: Type[BaseModel]
    handler: Callable[[Any], Awaitable[str]]

    def definition(self) -> ToolDefinition:
        return ToolDefinition(
            name=self.name,
            description=self.description,
            input_schema=self.args_model.model_json_schema(),
        )


def jsonrpc_error(request_id: Any, code: int, message: str) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": request_id, "error": {"code": code, "message": message}}


def jsonrpc_result(request_id: Any, result: Any) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": request_id, "result": result}


class ToolGateway:
    """Exposes the search orchestrator as named, schema-checked tools."""

    def __init__(self, orchestrator: SearchOrchestrator) -> None:
        self._orchestrator = orchestrator
        self._tools = {
            tool.name: tool
            for tool in (
                Tool("brave_web_search", WEB_SEARCH_DESCRIPTION, WebSearchArgs, self._run_web_search),
                Tool("brave_local_search", LOCAL_SEARCH_DESCRIPTION, LocalSearchArgs, self._run_local_search),
            )
        }

    async def _run_web_search(self, args: WebSearchArgs) -> str:
        return await self._orchestrator.web_search(args.query, args.count, args.offset)

    async def _run_local_search(self, args: LocalSearchArgs) -> str:
        return await self._orchestrator.local_search(args.query, args.count)

    def list_tools(self) -> list[ToolDefinition]:
        return [tool.definition() for tool in self._tools.values()]

    async def call_tool(self, name: str, arguments: Optional[dict[str, Any]] = None) -> ToolCallResult:
        """Validate arguments and run the tool.

        Raises `ToolInvocationError` for unknown tools or invalid arguments.
        Failures of the search itself come back as an `isError` result.
        """

        tool = self._tools.get(name)
        if tool is None:
            raise ToolInvocationError(f"Unknown tool: {name}")
        try:
            args = tool.args_model.model_validate(arguments or {})
        except ValidationError as exc:
            raise ToolInvocationError(f"Invalid arguments for tool {name}: {exc}") from exc

        try:
            text = await tool.handler(args)
        except BraveSearchError as exc:
            logger.warning("Tool %s failed: %s", name, exc)
            return _error_result(exc)
        except Exception as exc:
            logger.exception("Tool %s raised an unexpected error", name)
            return _error_result(exc)
        return ToolCallResult(content=[TextContent(text=text)])

    async def handle_message(self, message: Any) -> Optional[dict[str, Any]]:
        """Dispatch one JSON-RPC message; returns the response, or None for notifications."""

        raw_id = message.get("id") if isinstance(message, dict) else None
        try:
            request = JsonRpcRequest.model_validate(message)
        except ValidationError:
            return jsonrpc_error(raw_id if isinstance(raw_id, (int, str)) else None, INVALID_REQUEST, "Invalid Request")

        if request.id is None:
            logger.debug("Notification received: %s", request.method)
            return None

        if request.method == "initialize":
            return jsonrpc_result(
                request.id,
                {
                    "protocolVersion": PROTOCOL_VERSION,
                    "capabilities": {"tools": {}},
                    "serverInfo": {"name": SERVER_NAME, "version": SERVER_VERSION},
                },
            )
        if request.method == "ping":
            return jsonrpc_result(request.id, {})
        if request.method == "tools/list":
            tools = [tool.model_dump(by_alias=True) for tool in self.list_tools()]
            return jsonrpc_result(request.id, {"tools": tools})
        if request.method == "tools/call":
            try:
                params = ToolCallParams.model_validate(request.params or {})
                result = await self.call_tool(params.name, params.arguments)
            except ValidationError as exc:
                return jsonrpc_error(request.id, INVALID_PARAMS, f"Invalid params: {exc}")
            except ToolInvocationError as exc:
                return jsonrpc_error(request.id, INVALID_PARAMS, str(exc))
            return jsonrpc_result(request.id, result.model_dump(by_alias=True))

        return jsonrpc_error(request.id, METHOD_NOT_FOUND, f"Method not found: {request.method}")


def _error_result(exc: Exception) -> ToolCallResult:
    return ToolCallResult(content=[TextContent(text=f"Error: {exc}")], is_error=True)

"""Pydantic models describing tool arguments and JSON-RPC payloads."""
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class WebSearchArgs(BaseModel):
    """Arguments accepted by the `brave_web_search` tool."""

    query: str = Field(..., description="Search query (max 400 chars, 50 words)")
    count: int = Field(default=10, description="Number of results (1-20, default 10)")
    offset: int = Field(default=0, description="Pagination offset (max 9, default 0)")


class LocalSearchArgs(BaseModel):
    """Arguments accepted by the `brave_local_search` tool."""

    query: str = Field(..., description="Local search query (e.g. 'pizza near Central Park')")
    count: int = Field(default=5, description="Number of results (1-20, default 5)")


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request or notification received on a session."""

    jsonrpc: Literal["2.0"] = "2.0"
    id: Optional[Union[int, str]] = None
    method: str
    params: Optional[Dict[str, Any]] = None


class ToolCallParams(BaseModel):
    name: str
    arguments: Dict[str, Any] = Field(default_factory=dict)


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolCallResult(BaseModel):
    """Result of `tools/call`; tool-level failures set `isError`."""

    model_config = ConfigDict(populate_by_name=True)

    content: List[TextContent]
    is_error: bool = Field(default=False, alias="isError")


class ToolDefinition(BaseModel):
    """Entry returned by `tools/list`."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str
    input_schema: Dict[str, Any] = Field(..., alias="inputSchema")

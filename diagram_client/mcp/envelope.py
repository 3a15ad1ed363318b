"""JSON-RPC 2.0 request envelopes for MCP tool calls."""
from __future__ import annotations

from typing import Any, Dict, Literal, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field

JSONRPC_VERSION = "2.0"
TOOLS_CALL = "tools/call"

RequestId = Union[int, float, str]


class ToolCallParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    arguments: Dict[str, Any] = Field(default_factory=dict)


class ToolCallRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    jsonrpc: Literal["2.0"] = JSONRPC_VERSION
    method: str = TOOLS_CALL
    params: ToolCallParams
    id: RequestId

    def to_payload(self) -> Dict[str, Any]:
        """Return the wire representation sent as the POST body."""
        return {
            "jsonrpc": self.jsonrpc,
            "method": self.method,
            "params": {"name": self.params.name, "arguments": dict(self.params.arguments)},
            "id": self.id,
        }


def build_tool_call(
    tool_name: str,
    arguments: Mapping[str, Any],
    request_id: RequestId,
    method: str = TOOLS_CALL,
) -> ToolCallRequest:
    return ToolCallRequest(
        method=method,
        params=ToolCallParams(name=tool_name, arguments=dict(arguments)),
        id=request_id,
    )

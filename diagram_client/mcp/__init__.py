"""JSON-RPC tool-call envelopes, transport and response classification."""

from .envelope import ToolCallParams, ToolCallRequest, build_tool_call
from .interpreter import Malformed, Outcome, ServerError, Success, interpret

__all__ = [
    "Malformed",
    "Outcome",
    "ServerError",
    "Success",
    "ToolCallParams",
    "ToolCallRequest",
    "build_tool_call",
    "interpret",
]

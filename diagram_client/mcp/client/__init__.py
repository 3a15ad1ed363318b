"""Transport clients for the diagram-modeling service."""

from .http_client import MCPHTTPClient, send_tool_call

__all__ = ["MCPHTTPClient", "send_tool_call"]

"""Sample UML diagram client for a JSON-RPC diagram-modeling service."""

__version__ = "0.1.0"

"""Application configuration."""
from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings loaded from .env and environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    mcp_server_url: str = Field(
        default="http://127.0.0.1:3000/messages",
        validation_alias=AliasChoices("MCP_SERVER_URL", "GLSP_MCP_URL"),
    )
    mcp_timeout_seconds: float = 30.0
    # Diagrams left behind by earlier sample runs.
    previous_diagram_id: str = "9abb0ddb-4026-4a19-926e-0b63b1d395ea"
    empty_diagram_id: str = "2b7c78b0-96e5-4ecc-b1da-de9ca391ce17"
    log_level: str = "INFO"


settings = Settings()

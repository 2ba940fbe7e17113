"""Configuration loaded from environment variables.

Uses pydantic-settings so every field can be overridden via env vars.
The pipeline operations take no configuration themselves; these settings
feed whatever wires up the ledger client and the transfer service.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class LedgerConfig(BaseSettings):
    """Transfer ledger HTTP client settings."""

    model_config = {"env_prefix": "LEDGER_"}

    base_url: str = Field(
        default="http://localhost:8787",
        description="Base URL of the ledger service",
    )
    timeout_seconds: float | None = Field(
        default=None,
        description="HTTP request timeout; unset means the httpx default",
    )


class TransferConfig(BaseSettings):
    """Root configuration for an add-in backend instance."""

    model_config = {"env_prefix": "TRANSFER_"}

    owner_id: str = Field(description="Owner (tenant / client) under which transfers are tracked")
    configure_logging: bool = Field(
        default=False,
        description="Let create_service install the root log handler (off when embedded)",
    )
    log_json: bool = Field(default=True, description="Emit JSON log lines instead of console output")
    log_level: str = Field(default="INFO", description="Root log level name")

    ledger: LedgerConfig = Field(default_factory=LedgerConfig)

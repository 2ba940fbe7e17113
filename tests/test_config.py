"""Tests for lira_transfer.config."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from lira_transfer.config import LedgerConfig, TransferConfig


class TestLedgerConfig:
    def test_defaults(self):
        cfg = LedgerConfig()
        assert cfg.base_url == "http://localhost:8787"
        assert cfg.timeout_seconds is None

    def test_override(self):
        cfg = LedgerConfig(base_url="https://ledger.example.com", timeout_seconds=2.5)
        assert cfg.base_url == "https://ledger.example.com"
        assert cfg.timeout_seconds == 2.5

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("LEDGER_BASE_URL", "https://ledger.prod")
        monkeypatch.setenv("LEDGER_TIMEOUT_SECONDS", "10")
        cfg = LedgerConfig()
        assert cfg.base_url == "https://ledger.prod"
        assert cfg.timeout_seconds == 10.0


class TestTransferConfig:
    def test_construction_with_owner(self):
        cfg = TransferConfig(owner_id="demo-client-123")
        assert cfg.owner_id == "demo-client-123"
        assert cfg.log_json is True
        assert cfg.log_level == "INFO"
        assert cfg.configure_logging is False
        assert isinstance(cfg.ledger, LedgerConfig)

    def test_owner_required(self, monkeypatch):
        monkeypatch.delenv("TRANSFER_OWNER_ID", raising=False)
        with pytest.raises(ValidationError):
            TransferConfig()  # type: ignore[call-arg]

    def test_nested_override(self):
        cfg = TransferConfig(owner_id="o", ledger=LedgerConfig(base_url="http://kv:8787"))
        assert cfg.ledger.base_url == "http://kv:8787"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("TRANSFER_OWNER_ID", "env-owner")
        monkeypatch.setenv("TRANSFER_LOG_JSON", "false")
        monkeypatch.setenv("TRANSFER_CONFIGURE_LOGGING", "true")
        monkeypatch.setenv("LEDGER_BASE_URL", "http://env-ledger")
        cfg = TransferConfig()
        assert cfg.owner_id == "env-owner"
        assert cfg.log_json is False
        assert cfg.configure_logging is True
        assert cfg.ledger.base_url == "http://env-ledger"

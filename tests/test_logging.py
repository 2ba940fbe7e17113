"""Tests for lira_transfer.logging."""

from __future__ import annotations

import json
import logging

import structlog

from lira_transfer.logging import setup_logging, transfer_context


def _lines(capsys) -> list[dict]:
    return [json.loads(line) for line in capsys.readouterr().out.splitlines()]


class TestSetupLogging:
    def test_json_mode(self):
        setup_logging(json=True, level="INFO")
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    def test_console_mode(self):
        setup_logging(json=False, level="DEBUG")
        assert logging.getLogger().level == logging.DEBUG

    def test_level_case_insensitive(self):
        setup_logging(level="warning")
        assert logging.getLogger().level == logging.WARNING

    def test_replaces_existing_handlers(self):
        root = logging.getLogger()
        root.addHandler(logging.StreamHandler())
        root.addHandler(logging.StreamHandler())
        setup_logging()
        assert len(root.handlers) == 1

    def test_quiets_http_client_loggers(self):
        setup_logging(level="DEBUG")
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING

    def test_custom_quiet_loggers(self):
        logging.getLogger("kv.client").setLevel(logging.NOTSET)
        setup_logging(level="DEBUG", quiet=["kv.client"])
        assert logging.getLogger("kv.client").level == logging.WARNING

    def test_structlog_produces_output(self, capsys):
        setup_logging(json=True, level="DEBUG")
        structlog.get_logger("test_logger").info("transfer_recorded", owner_id="o-1")
        (line,) = _lines(capsys)
        assert line["event"] == "transfer_recorded"
        assert line["owner_id"] == "o-1"
        assert line["service"] == "lira-transfer"

    def test_stdlib_records_share_format(self, capsys):
        setup_logging(json=True, level="DEBUG")
        logging.getLogger("kv.other").warning("plain stdlib record")
        (line,) = _lines(capsys)
        assert line["event"] == "plain stdlib record"
        assert line["service"] == "lira-transfer"
        assert line["level"] == "warning"


class TestTransferContext:
    def test_binds_owner_and_identity(self, capsys):
        setup_logging(json=True, level="DEBUG")
        log = structlog.get_logger("test_logger")
        with transfer_context("o-1", "<m-1@x.com>"):
            log.info("inside")
        log.info("outside")

        inside, outside = _lines(capsys)
        assert inside["owner_id"] == "o-1"
        assert inside["identity"] == "<m-1@x.com>"
        assert "owner_id" not in outside
        assert "identity" not in outside

    def test_identity_optional(self, capsys):
        setup_logging(json=True, level="DEBUG")
        with transfer_context("o-1"):
            structlog.get_logger("test_logger").info("inside")
        (line,) = _lines(capsys)
        assert line["owner_id"] == "o-1"
        assert "identity" not in line

    def test_nested_restores_outer_bindings(self, capsys):
        setup_logging(json=True, level="DEBUG")
        log = structlog.get_logger("test_logger")
        with transfer_context("o-1"):
            with transfer_context("o-1", "m-1"):
                log.info("inner")
            log.info("outer")

        inner, outer = _lines(capsys)
        assert inner["identity"] == "m-1"
        assert outer["owner_id"] == "o-1"
        assert "identity" not in outer

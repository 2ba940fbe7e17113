"""Shared test fixtures: a fake host session, sample records and ledger config."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from lira_transfer.config import LedgerConfig
from lira_transfer.models import Address, AttachmentRef, MessageRecord
from tests.fakes import FakeItem, FakeSession

LEDGER_URL = "http://ledger.test"


@pytest.fixture
def alice() -> Address:
    return Address(display_name="A", email_address="a@x.com")


@pytest.fixture
def bob() -> Address:
    return Address(display_name="B", email_address="b@x.com")


@pytest.fixture
def read_item(alice: Address, bob: Address) -> FakeItem:
    return FakeItem(
        item_class="IPM.Note.SMIME",
        sender=alice,
        to=[bob],
        cc=[],
        attachments=[
            AttachmentRef(id="att-1", name="q1.pdf", content_type="application/pdf", size=2048),
        ],
        date_time_created=datetime(2025, 6, 1, 12, 0, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def session(read_item: FakeItem) -> FakeSession:
    return FakeSession(read_item)


@pytest.fixture
def item_factory():
    """Factory to create FakeItem instances with overrides."""

    def _make(**overrides) -> FakeItem:
        return FakeItem(**overrides)

    return _make


@pytest.fixture
def record(alice: Address, bob: Address) -> MessageRecord:
    return MessageRecord(
        subject="Q1 Report",
        from_address=alice,
        to=[bob],
        cc=[],
        body="<p>Hi</p>",
        message_id="m-1",
    )


@pytest.fixture
def ledger_config() -> LedgerConfig:
    return LedgerConfig(base_url=LEDGER_URL, timeout_seconds=5.0)

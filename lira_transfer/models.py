"""Data models shared by extraction, encoding and the ledger client."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, NewType

from pydantic import BaseModel, ConfigDict, Field

MessageIdentity = NewType("MessageIdentity", str)
"""Deduplication key for one email, stable across repeated extractions."""


class IdentitySource(str, Enum):
    """Which host identifier a :data:`MessageIdentity` was derived from.

    ``ITEM_ID`` is the weak fallback: the client-local item handle may
    change when the message is moved between folders.
    """

    INTERNET_MESSAGE_ID = "internet_message_id"
    ITEM_ID = "item_id"


class RecipientType(str, Enum):
    """Recipient kind as reported by the host mail client."""

    USER = "user"
    DISTRIBUTION_LIST = "distributionList"
    EXTERNAL_USER = "externalUser"
    OTHER = "other"


class Address(BaseModel):
    """A single mailbox: display name plus SMTP address."""

    display_name: str = Field(description="Human-readable name (may be empty)")
    email_address: str = Field(description="SMTP address")
    recipient_type: RecipientType | None = Field(
        default=None,
        description="Host-reported recipient kind, if known",
    )


class AttachmentRef(BaseModel):
    """Attachment metadata.  Content is never fetched."""

    id: str = Field(default="", description="Host attachment identifier")
    name: str = Field(description="Original filename")
    content_type: str = Field(default="application/octet-stream", description="MIME type")
    size: int = Field(default=0, description="Size in bytes as reported by the host")
    is_inline: bool = Field(default=False, description="Inline (embedded) attachment")


class MessageRecord(BaseModel):
    """Normalized representation of one email extracted from the host."""

    subject: str = Field(default="", description="Message subject")
    body: str = Field(default="", description="HTML-coerced message body")
    from_address: Address = Field(description="Sender")
    to: list[Address] = Field(default_factory=list, description="Primary recipients, in order")
    cc: list[Address] | None = Field(default=None, description="Carbon-copy recipients")
    bcc: list[Address] | None = Field(default=None, description="Blind carbon-copy recipients")
    attachments: list[AttachmentRef] = Field(
        default_factory=list,
        description="Attachment metadata, in host order",
    )
    message_id: str | None = Field(
        default=None,
        description="Durable transport-level identifier (internet message id)",
    )
    created_at: datetime | None = Field(default=None, description="Item creation timestamp")


class UserProfile(BaseModel):
    """The signed-in mailbox user."""

    email_address: str
    display_name: str = ""


class AckResult(BaseModel):
    """Acknowledgement returned by the ledger for add/remove calls.

    Unknown fields sent by the remote are kept as extras.
    """

    model_config = ConfigDict(extra="allow")

    success: bool | None = None
    error: str | None = None
    data: Any = None


class TransferStatus(BaseModel):
    """Whether the active message is recorded in the ledger."""

    identity: MessageIdentity
    transferred: bool


class TransferOutcome(BaseModel):
    """Result of exporting the active message."""

    identity: MessageIdentity
    document: str = Field(description="The interchange (.eml) document that was produced")
    ack: AckResult


class LedgerListResponse(BaseModel):
    """Body of ``GET /emails/{owner_id}``.  A missing ``data`` field means no transfers."""

    success: bool | None = None
    data: list[str] | None = None
    error: str | None = None

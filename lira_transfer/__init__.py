"""Export the open email as an .eml document and track transfers in a remote ledger.

Public API re-exported here for convenience::

    from lira_transfer import MailExtractor, TransferLedgerClient, encode
"""

from .config import LedgerConfig, TransferConfig
from .eml import encode, encode_bytes
from .errors import (
    BodyRetrievalError,
    HostError,
    HostUnavailable,
    InsertTextError,
    LedgerError,
    NetworkError,
    NoActiveMessage,
    TransferError,
    TransportError,
)
from .extraction import MailExtractor, resolve_identity
from .host import AsyncResult, CoercionType, HostItem, HostSession, ItemType, RecipientsHandle
from .ledger import TransferLedgerClient
from .logging import setup_logging, transfer_context
from .models import (
    AckResult,
    Address,
    AttachmentRef,
    IdentitySource,
    LedgerListResponse,
    MessageIdentity,
    MessageRecord,
    RecipientType,
    TransferOutcome,
    TransferStatus,
    UserProfile,
)
from .transfer import TransferService, create_service

__all__ = [
    "AckResult",
    "Address",
    "AsyncResult",
    "AttachmentRef",
    "BodyRetrievalError",
    "CoercionType",
    "HostError",
    "HostItem",
    "HostSession",
    "HostUnavailable",
    "IdentitySource",
    "InsertTextError",
    "ItemType",
    "LedgerConfig",
    "LedgerError",
    "LedgerListResponse",
    "MailExtractor",
    "MessageIdentity",
    "MessageRecord",
    "NetworkError",
    "NoActiveMessage",
    "RecipientType",
    "RecipientsHandle",
    "TransferConfig",
    "TransferError",
    "TransferLedgerClient",
    "TransferOutcome",
    "TransferService",
    "TransportError",
    "UserProfile",
    "create_service",
    "encode",
    "encode_bytes",
    "resolve_identity",
    "setup_logging",
    "transfer_context",
]

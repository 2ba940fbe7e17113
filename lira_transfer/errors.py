"""Exception hierarchy for the transfer pipeline.

Host-side failures (``HostError``) come from mail extraction; remote
failures (``LedgerError``) come from the ledger client.  Callers render
``str(exc)`` and let the user retry.
"""

from __future__ import annotations


class TransferError(Exception):
    """Base class for every error raised by ``lira_transfer``."""


class HostError(TransferError):
    """The host mail client could not satisfy a request."""


class HostUnavailable(HostError):
    """No message item is active, or the host is not ready."""


class NoActiveMessage(HostError):
    """A message identity was requested but no identifiable item is active."""


class BodyRetrievalError(HostError):
    """The host reported a failure while fetching the message body."""

    def __init__(self, host_message: str) -> None:
        super().__init__(f"Failed to get email body: {host_message}")
        self.host_message = host_message


class InsertTextError(HostError):
    """The host rejected a cursor insert on a compose surface."""

    def __init__(self, host_message: str) -> None:
        super().__init__(f"Failed to insert text: {host_message}")
        self.host_message = host_message


class LedgerError(TransferError):
    """A ledger request failed."""


class NetworkError(LedgerError):
    """The ledger could not be reached (connect failure, timeout, reset)."""


class TransportError(LedgerError):
    """The ledger answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Ledger responded with {status_code}: {body}")
        self.status_code = status_code
        self.body = body

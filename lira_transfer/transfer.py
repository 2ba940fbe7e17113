"""TransferService: the status / transfer / remove flow behind the taskpane."""

from __future__ import annotations

import structlog

from .config import TransferConfig
from .eml import encode
from .extraction import MailExtractor
from .host import HostSession
from .ledger import TransferLedgerClient
from .logging import setup_logging, transfer_context
from .models import TransferOutcome, TransferStatus

logger = structlog.get_logger()


class TransferService:
    """Composes extraction, encoding and the ledger for one owner.

    Errors from any component propagate unchanged, except that
    :meth:`status` inherits the fail-safe ``False`` of
    :meth:`TransferLedgerClient.contains`.  Every operation binds the owner
    and message identity into the structlog context for its duration.
    """

    def __init__(
        self,
        extractor: MailExtractor,
        ledger: TransferLedgerClient,
        owner_id: str,
    ) -> None:
        self._extractor = extractor
        self._ledger = ledger
        self._owner_id = owner_id

    @property
    def owner_id(self) -> str:
        return self._owner_id

    @property
    def ledger(self) -> TransferLedgerClient:
        return self._ledger

    async def status(self) -> TransferStatus:
        identity = self._extractor.get_message_identity()
        with transfer_context(self._owner_id, identity):
            transferred = await self._ledger.contains(self._owner_id, identity)
        return TransferStatus(identity=identity, transferred=transferred)

    async def transfer(self) -> TransferOutcome:
        """Encode the active message and record it in the ledger."""
        with transfer_context(self._owner_id):
            record = await self._extractor.get_current_message()
            identity = self._extractor.get_message_identity()
            document = encode(record)

            with transfer_context(self._owner_id, identity):
                ack = await self._ledger.add(self._owner_id, identity)
                logger.info("message_transferred", document_bytes=len(document.encode("utf-8")))
        return TransferOutcome(identity=identity, document=document, ack=ack)

    async def remove(self) -> TransferStatus:
        identity = self._extractor.get_message_identity()
        with transfer_context(self._owner_id, identity):
            await self._ledger.remove(self._owner_id, identity)
            logger.info("message_transfer_removed")
        return TransferStatus(identity=identity, transferred=False)


async def create_service(config: TransferConfig, session: HostSession) -> TransferService:
    """Start a ledger client and build a service.

    Logging is left to the embedding application unless
    ``config.configure_logging`` is set, in which case :func:`setup_logging`
    installs the root handler from ``log_json`` / ``log_level``.

    The caller owns the returned service's ledger client and must stop it
    (``await service.ledger.stop()``) when done.
    """
    if config.configure_logging:
        setup_logging(json=config.log_json, level=config.log_level)
    ledger = TransferLedgerClient(config.ledger)
    await ledger.start()
    return TransferService(MailExtractor(session), ledger, config.owner_id)

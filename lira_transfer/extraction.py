"""Mail extraction: turn the host's active item into a :class:`MessageRecord`.

Every callback-style host accessor is awaited through :func:`_host_call`,
which gives each one a single suspension point on the running event loop.
Host callbacks may fire synchronously or from another thread.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import TypeVar

import structlog

from .errors import BodyRetrievalError, HostUnavailable, InsertTextError, NoActiveMessage
from .host import (
    COMPOSE_ITEM_CLASS,
    AsyncResult,
    CoercionType,
    HostItem,
    HostSession,
    ItemType,
    RecipientsHandle,
    RecipientsValue,
)
from .models import Address, IdentitySource, MessageIdentity, MessageRecord, RecipientType

logger = structlog.get_logger()

T = TypeVar("T")


async def _host_call(start: Callable[[Callable[[T], None]], None]) -> T:
    """Run a callback-style host call and await the value it delivers."""
    loop = asyncio.get_running_loop()
    future: asyncio.Future[T] = loop.create_future()

    def _settle(value: T) -> None:
        if not future.done():
            future.set_result(value)

    def _callback(value: T) -> None:
        loop.call_soon_threadsafe(_settle, value)

    start(_callback)
    return await future


def resolve_identity(item: HostItem) -> tuple[MessageIdentity, IdentitySource]:
    """Pick the deduplication key for *item*.

    The internet message id survives folder moves and re-syncs; the item
    id is client-local and only used when the former is missing.
    """
    if item.internet_message_id:
        return MessageIdentity(item.internet_message_id), IdentitySource.INTERNET_MESSAGE_ID
    if item.item_id:
        return MessageIdentity(item.item_id), IdentitySource.ITEM_ID
    raise NoActiveMessage("Active item has no identifier yet")


class MailExtractor:
    """Reads the active message from a :class:`HostSession`."""

    def __init__(self, session: HostSession) -> None:
        self._session = session

    # ------------------------------------------------------------------
    # Message record
    # ------------------------------------------------------------------

    async def get_current_message(self) -> MessageRecord:
        """Wait for the host, then extract the active message.

        Raises :class:`HostUnavailable` when no message is active (nothing
        open, or an appointment or other non-message item) and
        :class:`BodyRetrievalError` when the host fails to deliver the
        HTML body.
        """
        await _host_call(lambda done: self._session.on_ready(lambda: done(None)))

        item = self._session.item
        if item is None or item.item_type is not ItemType.MESSAGE:
            raise HostUnavailable("No email item available")

        result: AsyncResult[str] = await _host_call(
            lambda done: item.get_body_async(CoercionType.HTML, done)
        )
        if result.failed:
            logger.error("body_retrieval_failed", error=result.error_message)
            raise BodyRetrievalError(result.error_message)

        to = await self._resolve_recipients(item.to, "to")
        record = MessageRecord(
            subject=item.subject or "",
            body=result.value or "",
            from_address=self._resolve_sender(item),
            to=to or [],
            cc=await self._resolve_recipients(item.cc, "cc"),
            bcc=await self._resolve_recipients(item.bcc, "bcc"),
            attachments=list(item.attachments or []),
            message_id=item.internet_message_id or None,
            created_at=item.date_time_created,
        )
        logger.debug(
            "message_extracted",
            message_id=record.message_id,
            recipients=len(record.to),
            attachments=len(record.attachments),
        )
        return record

    def _resolve_sender(self, item: HostItem) -> Address:
        if item.sender is not None:
            return item.sender
        # Unsent compose items have no sender yet; the signed-in user is it.
        profile = self._session.user_profile
        return Address(display_name=profile.display_name, email_address=profile.email_address)

    async def _resolve_recipients(self, value: RecipientsValue, field: str) -> list[Address] | None:
        """Flatten a host recipient value into addresses.

        Distribution lists are returned as their own address: the host
        does not expose their membership.  An unresolvable handle yields
        an empty list.
        """
        if value is None:
            return None

        if isinstance(value, RecipientsHandle):
            result = await _host_call(value.get_async)
            if result.failed:
                logger.warning("recipients_unresolved", field=field, error=result.error_message)
                return []
            addresses = list(result.value or [])
        else:
            addresses = list(value)

        for address in addresses:
            if address.recipient_type is RecipientType.DISTRIBUTION_LIST:
                logger.debug(
                    "distribution_list_unexpanded",
                    field=field,
                    address=address.email_address,
                )
        return addresses

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    def get_message_identity(self) -> MessageIdentity:
        """Return the deduplication key of the active message.

        Stable across calls for an unchanged item.  Falls back to the
        client-local item id when the message has no internet message id;
        that key may change if the message is moved to another folder.
        """
        item = self._session.item
        if item is None:
            raise NoActiveMessage("No email item available")

        identity, source = resolve_identity(item)
        if source is IdentitySource.ITEM_ID:
            logger.debug("weak_message_identity", item_id=identity)
        return identity

    def identity_source(self) -> IdentitySource:
        item = self._session.item
        if item is None:
            raise NoActiveMessage("No email item available")
        return resolve_identity(item)[1]

    # ------------------------------------------------------------------
    # Surface classification
    # ------------------------------------------------------------------

    def is_compose_context(self) -> bool:
        item = self._session.item
        return (
            item is not None
            and item.item_type is ItemType.MESSAGE
            and item.item_class == COMPOSE_ITEM_CLASS
        )

    def is_read_context(self) -> bool:
        item = self._session.item
        return (
            item is not None
            and item.item_type is ItemType.MESSAGE
            and item.item_class != COMPOSE_ITEM_CLASS
        )

    # ------------------------------------------------------------------
    # User profile and compose helpers
    # ------------------------------------------------------------------

    def current_user_email(self) -> str:
        return self._session.user_profile.email_address

    def current_user_display_name(self) -> str:
        return self._session.user_profile.display_name

    async def insert_text(self, text: str) -> None:
        """Insert *text* at the cursor of the active compose item."""
        item = self._session.item
        if item is None:
            raise HostUnavailable("No email item available")

        result: AsyncResult[None] = await _host_call(
            lambda done: item.set_selected_data_async(text, CoercionType.TEXT, done)
        )
        if result.failed:
            logger.error("insert_text_failed", error=result.error_message)
            raise InsertTextError(result.error_message)

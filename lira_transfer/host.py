"""Host mail-client seam.

The mail client's "current item" is ambient state owned by the host.
These ABCs give it an explicit shape so extraction can run against a
live add-in bridge or a fake session in tests.

The host API is callback based: asynchronous accessors take a callback
that receives an :class:`AsyncResult`.  :mod:`lira_transfer.extraction`
turns each of those into a single awaitable.
"""

from __future__ import annotations

import abc
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Generic, TypeVar

from .models import Address, AttachmentRef, UserProfile

T = TypeVar("T")

COMPOSE_ITEM_CLASS = "IPM.Note"


class AsyncResultStatus(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class CoercionType(str, Enum):
    """Format the host should coerce body content into."""

    HTML = "html"
    TEXT = "text"


class ItemType(str, Enum):
    MESSAGE = "message"
    APPOINTMENT = "appointment"


@dataclass
class AsyncResult(Generic[T]):
    """Outcome handed to a host callback."""

    status: AsyncResultStatus
    value: T | None = None
    error_message: str = ""

    @property
    def failed(self) -> bool:
        return self.status is AsyncResultStatus.FAILED

    @classmethod
    def ok(cls, value: T | None = None) -> AsyncResult[T]:
        return cls(status=AsyncResultStatus.SUCCEEDED, value=value)

    @classmethod
    def error(cls, message: str) -> AsyncResult[T]:
        return cls(status=AsyncResultStatus.FAILED, error_message=message)


class RecipientsHandle(abc.ABC):
    """Lazy recipient accessor exposed by compose surfaces.

    Read surfaces hand back resolved address lists directly; compose
    surfaces only expose this handle.
    """

    @abc.abstractmethod
    def get_async(self, callback: Callable[[AsyncResult[Sequence[Address]]], None]) -> None:
        """Deliver the current recipients to *callback*."""
        ...


RecipientsValue = Sequence[Address] | RecipientsHandle | None


class HostItem(abc.ABC):
    """The active mailbox item."""

    item_type: ItemType
    item_class: str
    item_id: str | None
    internet_message_id: str | None
    subject: str | None
    sender: Address | None
    to: RecipientsValue
    cc: RecipientsValue
    bcc: RecipientsValue
    attachments: Sequence[AttachmentRef]
    date_time_created: datetime | None

    @abc.abstractmethod
    def get_body_async(
        self,
        coercion: CoercionType,
        callback: Callable[[AsyncResult[str]], None],
    ) -> None:
        """Fetch the body coerced to *coercion* and deliver it to *callback*."""
        ...

    @abc.abstractmethod
    def set_selected_data_async(
        self,
        data: str,
        coercion: CoercionType,
        callback: Callable[[AsyncResult[None]], None],
    ) -> None:
        """Insert *data* at the cursor (compose surfaces only)."""
        ...


class HostSession(abc.ABC):
    """Handle on a running host mail client."""

    @abc.abstractmethod
    def on_ready(self, callback: Callable[[], None]) -> None:
        """Invoke *callback* once the host has finished initialising.

        Hosts that are already ready may call it immediately.
        """
        ...

    @property
    @abc.abstractmethod
    def item(self) -> HostItem | None:
        """The active item, or ``None`` when nothing is selected."""
        ...

    @property
    @abc.abstractmethod
    def user_profile(self) -> UserProfile: ...

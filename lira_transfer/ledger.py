"""Async HTTP client for the transfer ledger.

The ledger is a remote key-value service that records, per owner, which
message identities have been exported.  This client is stateless beyond
its connection pool: nothing is cached and nothing is retried.
"""

from __future__ import annotations

import builtins
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from .config import LedgerConfig
from .errors import LedgerError, NetworkError, TransportError
from .models import AckResult, LedgerListResponse, MessageIdentity

logger = structlog.get_logger()

M = TypeVar("M", bound=BaseModel)


def _segment(value: str) -> str:
    # Internet message ids carry <, >, @ and sometimes /.
    return quote(value, safe="")


class TransferLedgerClient:
    """Add, remove and list transferred message identities per owner.

    Call :meth:`start` before use and :meth:`stop` afterwards, or use the
    client as an async context manager.
    """

    def __init__(self, config: LedgerConfig) -> None:
        self._config = config
        self._client: httpx.AsyncClient | None = None

    async def start(self) -> None:
        kwargs: dict[str, Any] = {"base_url": self._config.base_url}
        if self._config.timeout_seconds is not None:
            kwargs["timeout"] = httpx.Timeout(self._config.timeout_seconds)
        self._client = httpx.AsyncClient(**kwargs)
        logger.info("ledger_client_started", base_url=self._config.base_url)

    async def stop(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            logger.info("ledger_client_stopped")

    async def __aenter__(self) -> TransferLedgerClient:
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        """Send one request and return the decoded JSON body.

        Raises :class:`NetworkError` when the request fails before a response
        is read (connect, timeout, decoding) and :class:`TransportError` on
        any non-2xx response.
        """
        if self._client is None:
            raise AssertionError("Client not started")

        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.RequestError as exc:
            logger.error("ledger_unreachable", method=method, url=url, error=str(exc))
            raise NetworkError(f"Could not reach ledger: {exc}") from exc

        if not response.is_success:
            logger.error(
                "ledger_error_response",
                method=method,
                url=url,
                status_code=response.status_code,
                body=response.text,
            )
            raise TransportError(response.status_code, response.text)

        logger.debug("ledger_request_ok", method=method, url=url, status_code=response.status_code)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            logger.error("ledger_invalid_json", method=method, url=url, body=response.text)
            raise LedgerError(f"Ledger returned a non-JSON body: {response.text}") from exc

    def _parse(self, model: type[M], result: Any, url: str) -> M:
        """Validate a decoded body; an empty body validates as ``{}``."""
        try:
            return model.model_validate(result or {})
        except ValidationError as exc:
            logger.error("ledger_unexpected_body", url=url, error=str(exc))
            raise LedgerError(f"Ledger returned an unexpected body: {result!r}") from exc

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def list(self, owner_id: str) -> builtins.list[MessageIdentity]:
        """Return every identity recorded for *owner_id*.

        A response without a ``data`` field is an empty set, not an error.
        A ``data`` field that is not a list of strings raises
        :class:`LedgerError`.
        """
        url = f"/emails/{_segment(owner_id)}"
        response = self._parse(LedgerListResponse, await self._request("GET", url), url)
        return [MessageIdentity(identity) for identity in response.data or []]

    async def add(self, owner_id: str, identity: MessageIdentity) -> AckResult:
        """Record *identity* as transferred for *owner_id*.

        Duplicates are not filtered here; the ledger treats a repeated add
        as a no-op.
        """
        result = await self._request(
            "POST",
            "/emails",
            json={"ownerId": owner_id, "identity": identity},
        )
        logger.info("transfer_recorded", owner_id=owner_id, identity=identity)
        return self._parse(AckResult, result, "/emails")

    async def remove(self, owner_id: str, identity: MessageIdentity) -> AckResult:
        """Drop *identity* for *owner_id*.  The ledger's answer is passed through."""
        url = f"/emails/{_segment(owner_id)}/{_segment(identity)}"
        result = await self._request("DELETE", url)
        logger.info("transfer_removed", owner_id=owner_id, identity=identity)
        return self._parse(AckResult, result, url)

    async def contains(self, owner_id: str, identity: MessageIdentity) -> bool:
        """Whether *identity* is currently recorded for *owner_id*.

        A ``list`` followed by a membership test: not atomic with concurrent
        writers, so only suitable for display.  Any failure is logged and
        reported as ``False`` (not transferred) instead of raising, which
        hides ledger outages from the caller.
        """
        try:
            identities = await self.list(owner_id)
        except Exception as exc:
            logger.warning(
                "transfer_status_check_failed",
                owner_id=owner_id,
                identity=identity,
                error=str(exc),
            )
            return False
        return identity in identities

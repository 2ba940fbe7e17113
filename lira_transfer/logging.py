"""Structured logging for lira-transfer.

Library code only ever calls ``structlog.get_logger()``; handlers and levels
belong to the embedding application, which may call :func:`setup_logging`
once at start-up (or set ``TRANSFER_CONFIGURE_LOGGING=true``).
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

import structlog

SERVICE_NAME = "lira-transfer"

# Both log every ledger request at INFO.
NOISY_LOGGERS = ("httpx", "httpcore")


def _add_service(
    logger: object, method_name: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def setup_logging(
    *,
    json: bool = True,
    level: str = "INFO",
    quiet: Iterable[str] = NOISY_LOGGERS,
) -> None:
    """Route structlog and stdlib logging through one stdout handler.

    Replaces any handlers already on the root logger.

    Parameters
    ----------
    json:
        If *True* (the default), output JSON lines.  If *False*, use a
        human-friendly console renderer.
    level:
        Root log level name (e.g. ``"DEBUG"``, ``"INFO"``).
    quiet:
        Stdlib logger names capped at ``WARNING`` regardless of *level*.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        _add_service,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]

    renderer: structlog.types.Processor
    if json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        # Records from plain stdlib loggers (httpx) get the same fields.
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper())

    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)


@contextmanager
def transfer_context(owner_id: str, identity: str | None = None) -> Iterator[None]:
    """Bind *owner_id* (and *identity*, once known) to every event in the block.

    The bindings live in :mod:`structlog.contextvars`, so ledger client events
    emitted inside the block carry them too.
    """
    bindings = {"owner_id": owner_id}
    if identity is not None:
        bindings["identity"] = identity
    with structlog.contextvars.bound_contextvars(**bindings):
        yield

"""Single-message interchange (.eml) encoder.

Produces an RFC 822 style document: header block, blank line, body.
Lines end with CRLF.  The body is quoted-printable encoded to match the
declared ``Content-Transfer-Encoding``.

Header values are written verbatim.  Display names or addresses that
contain quotes or control characters are not escaped.
"""

from __future__ import annotations

import email.quoprimime
import email.utils
from datetime import UTC, datetime

from .models import Address, MessageRecord

CRLF = "\r\n"

TRAILER_HEADERS = (
    ("MIME-Version", "1.0"),
    ("Content-Type", "text/html; charset=utf-8"),
    ("Content-Transfer-Encoding", "quoted-printable"),
)


def format_address(address: Address) -> str:
    return f'"{address.display_name}" <{address.email_address}>'


def format_address_list(addresses: list[Address]) -> str:
    return ", ".join(format_address(a) for a in addresses)


def format_date(value: datetime) -> str:
    """RFC 5322 date in UTC.  Naive datetimes are taken to be UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return email.utils.format_datetime(value.astimezone(UTC), usegmt=True)


def encode_body(body: str) -> str:
    """Quoted-printable encode *body* as UTF-8 with CRLF line endings."""
    if not body:
        return ""
    # quoprimime works on code points 0-255, so hand it the UTF-8 bytes
    # spelled as latin-1 characters.
    latin = body.encode("utf-8").decode("latin-1")
    return email.quoprimime.body_encode(latin, maxlinelen=76, eol=CRLF)


def encode(record: MessageRecord) -> str:
    """Serialize *record* into an interchange document.

    Deterministic: the same record always yields the same string.
    """
    headers: list[tuple[str, str]] = [
        ("Subject", record.subject),
        ("From", format_address(record.from_address)),
    ]

    for name, addresses in (("To", record.to), ("Cc", record.cc), ("Bcc", record.bcc)):
        if addresses:
            headers.append((name, format_address_list(addresses)))

    if record.created_at is not None:
        headers.append(("Date", format_date(record.created_at)))

    if record.message_id:
        headers.append(("Message-ID", record.message_id))

    headers.extend(TRAILER_HEADERS)

    head = "".join(f"{name}: {value}{CRLF}" for name, value in headers)
    return head + CRLF + encode_body(record.body)


def encode_bytes(record: MessageRecord) -> bytes:
    """:func:`encode` as UTF-8 bytes, ready to hand to an uploader."""
    return encode(record).encode("utf-8")

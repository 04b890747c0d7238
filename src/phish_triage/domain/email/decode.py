"""MIME decoding adapter.

The analysis core only depends on the ``MessageDecoder`` protocol. The default
implementation wraps the standard library ``email`` parser so the pipeline can
run end to end without another MIME package.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timezone
from email import policy
from email.message import Message
from email.parser import BytesParser
from email.utils import getaddresses, parsedate_to_datetime
import logging
from typing import Any, Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecodedAddress:
    address: str
    name: str = ""


@dataclass(frozen=True)
class DecodedAttachment:
    filename: str | None
    mime_type: str | None
    # Raw bytes, base64 text, or a wrapped buffer; the normalizer coerces all three.
    content: Any = None


@dataclass(frozen=True)
class DecodedMessage:
    headers: list[tuple[str, str]] = field(default_factory=list)
    from_address: DecodedAddress | None = None
    to: list[DecodedAddress] = field(default_factory=list)
    reply_to: list[DecodedAddress] = field(default_factory=list)
    subject: str = ""
    date: str | None = None
    text: str = ""
    html: str = ""
    attachments: list[DecodedAttachment] = field(default_factory=list)


class MessageDecoder(Protocol):
    def decode(self, raw: bytes) -> DecodedMessage: ...


def _decode_part(part: Message) -> str:
    payload = part.get_payload(decode=True)
    if payload is None:
        return ""
    charset = part.get_content_charset() or "utf-8"
    for name in (charset, "utf-8", "latin-1"):
        try:
            return payload.decode(name, errors="replace")
        except LookupError:
            continue
    return ""


def _is_attachment(part: Message) -> bool:
    disposition = (part.get("Content-Disposition") or "").lower()
    return "attachment" in disposition or bool(part.get_filename())


def _parse_address_list(raw_values: list[str]) -> list[DecodedAddress]:
    values: list[DecodedAddress] = []
    seen: set[str] = set()
    for name, addr in getaddresses(raw_values):
        clean = " ".join((addr or "").split())
        if not clean or "@" not in clean or clean in seen:
            continue
        seen.add(clean)
        values.append(DecodedAddress(address=clean, name=" ".join((name or "").split())))
    return values


def _parse_date(raw: str | None) -> str | None:
    if not raw:
        return None
    try:
        parsed = parsedate_to_datetime(raw)
    except (TypeError, ValueError, IndexError):
        logger.debug("unparseable Date header: %r", raw)
        return None
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _leaf_parts(message: Message) -> list[Message]:
    """Flatten the MIME tree without descending into attachments or attached messages."""

    if not message.is_multipart():
        return [message]
    leaves: list[Message] = []
    for child in message.iter_parts():
        if child.get_content_maintype() == "multipart" and not _is_attachment(child):
            leaves.extend(_leaf_parts(child))
        else:
            leaves.append(child)
    return leaves


def _attachment_bytes(part: Message) -> bytes:
    payload = part.get_payload(decode=True)
    if payload is not None:
        return payload
    # message/* parts carry a parsed message instead of an encoded body.
    inner = part.get_payload()
    if isinstance(inner, list) and inner:
        return inner[0].as_bytes()
    return b""


def _extract_parts(message: Message) -> tuple[str, str, list[DecodedAttachment]]:
    body_text: list[str] = []
    body_html: list[str] = []
    attachments: list[DecodedAttachment] = []

    for part in _leaf_parts(message):
        content_type = (part.get_content_type() or "").lower()
        if _is_attachment(part):
            attachments.append(
                DecodedAttachment(
                    filename=part.get_filename(),
                    mime_type=content_type or None,
                    content=_attachment_bytes(part),
                )
            )
            continue
        if content_type == "message/rfc822":
            continue
        content = _decode_part(part)
        if not content:
            continue
        if content_type == "text/plain":
            body_text.append(content)
        elif content_type == "text/html":
            body_html.append(content)
    return "\n".join(body_text), "\n".join(body_html), attachments


class StdlibMessageDecoder:
    """Decode RFC 5322 messages with ``email.parser.BytesParser``."""

    def decode(self, raw: bytes) -> DecodedMessage:
        message = BytesParser(policy=policy.default).parsebytes(raw)
        headers = [(str(key), str(value)) for key, value in message.items()]
        senders = _parse_address_list([str(value) for value in message.get_all("From", [])])
        body_text, body_html, attachments = _extract_parts(message)
        return DecodedMessage(
            headers=headers,
            from_address=senders[0] if senders else None,
            to=_parse_address_list([str(value) for value in message.get_all("To", [])]),
            reply_to=_parse_address_list([str(value) for value in message.get_all("Reply-To", [])]),
            subject=str(message.get("Subject") or ""),
            date=_parse_date(str(message.get("Date") or "")),
            text=body_text,
            html=body_html,
            attachments=attachments,
        )

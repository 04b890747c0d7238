"""Build canonical email records from decoded MIME structures."""

from __future__ import annotations

import base64
import binascii
from concurrent.futures import ThreadPoolExecutor
import logging
from typing import Any

from phish_triage.domain.attachment.detect import get_preview_type, pdf_preview_error, sha256_hex
from phish_triage.domain.attachment.models import Attachment
from phish_triage.domain.email.decode import DecodedAddress, DecodedAttachment, DecodedMessage
from phish_triage.domain.email.models import Email, Header
from phish_triage.domain.url.extract import (
    extract_domains,
    extract_email_addresses,
    extract_header_ips,
    extract_message_urls,
)
from phish_triage.intel.header_intel import classify_authentication

logger = logging.getLogger(__name__)

DEFAULT_HASH_WORKERS = 4


def raw_to_bytes(raw: bytes | bytearray | str) -> bytes:
    if isinstance(raw, str):
        return raw.encode("utf-8")
    return bytes(raw)


def raw_to_text(raw: bytes | bytearray | str) -> str:
    if isinstance(raw, str):
        return raw
    return bytes(raw).decode("utf-8", errors="replace")


def generate_id(raw: bytes | bytearray | str) -> str:
    """Return a stable, order-sensitive 32-bit fingerprint of the raw message.

    This is a dedup key, not a cryptographic digest; collisions are tolerated.
    """

    value = 0
    for byte in raw_to_bytes(raw):
        value = (value * 31 + byte) & 0xFFFFFFFF
    if value & 0x80000000:
        value -= 1 << 32
    return format(abs(value), "x")[:16]


def coerce_content(content: Any) -> bytes:
    """Normalize raw bytes, base64 text, or a wrapped buffer to one byte form."""

    if isinstance(content, (bytes, bytearray)):
        return bytes(content)
    if isinstance(content, memoryview):
        return content.tobytes()
    if isinstance(content, str):
        try:
            return base64.b64decode("".join(content.split()), validate=True)
        except (binascii.Error, ValueError):
            return content.encode("utf-8")
    buffer = content.get("buffer") if isinstance(content, dict) else getattr(content, "buffer", None)
    if isinstance(buffer, (bytes, bytearray, memoryview)):
        return bytes(buffer)
    if content is not None:
        logger.warning("attachment content of type %s cannot be read as bytes", type(content).__name__)
    return b""


def format_address(address: DecodedAddress | None) -> str:
    if address is None or not address.address:
        return ""
    if address.name:
        return f"{address.name} <{address.address}>"
    return address.address


def _join_addresses(addresses: list[DecodedAddress]) -> str:
    return ", ".join(item.address for item in addresses if item.address)


def build_attachment(decoded: DecodedAttachment) -> Attachment:
    data = coerce_content(decoded.content)
    filename = decoded.filename or "unknown"
    content_type = decoded.mime_type or "application/octet-stream"
    preview_error = pdf_preview_error(content_type, filename, data)
    if preview_error:
        logger.warning("attachment %s: PDF header mismatch", filename)
    return Attachment(
        filename=filename,
        content_type=content_type,
        size=len(data),
        sha256=sha256_hex(data),
        preview_type=get_preview_type(content_type),
        preview_error=preview_error,
        content=data,
    )


def build_attachments(items: list[DecodedAttachment], *, workers: int = DEFAULT_HASH_WORKERS) -> list[Attachment]:
    """Hash every attachment concurrently; returns only after all tasks finish, in input order."""

    if not items:
        return []
    with ThreadPoolExecutor(max_workers=max(1, min(workers, len(items)))) as executor:
        futures = [executor.submit(build_attachment, item) for item in items]
        return [future.result() for future in futures]


def normalize_message(
    decoded: DecodedMessage,
    raw: bytes | bytearray | str,
    *,
    hash_workers: int = DEFAULT_HASH_WORKERS,
) -> Email:
    headers = [Header(name=name, value=value) for name, value in decoded.headers]
    header_values = [item.value for item in headers]
    body_text = decoded.text or ""
    body_html = decoded.html or ""
    urls = extract_message_urls(body_text, body_html)
    return_path = next((item.value for item in headers if item.name.lower() == "return-path"), None)
    attachments = build_attachments(list(decoded.attachments), workers=hash_workers)

    email = Email(
        id=generate_id(raw),
        subject=decoded.subject or "",
        sender=format_address(decoded.from_address),
        to=_join_addresses(decoded.to),
        reply_to=_join_addresses(decoded.reply_to) or None,
        return_path=return_path or None,
        date=decoded.date,
        headers=tuple(headers),
        body_text=body_text,
        body_html=body_html,
        urls=tuple(urls),
        domains=tuple(extract_domains(urls, body_text)),
        ip_addresses=tuple(extract_header_ips(header_values)),
        email_addresses=tuple(extract_email_addresses(body_text, header_values)),
        attachments=tuple(attachments),
        authentication=classify_authentication(headers),
        raw_content=raw_to_text(raw),
    )
    logger.debug(
        "normalized message id=%s urls=%d attachments=%d", email.id, len(email.urls), len(email.attachments)
    )
    return email

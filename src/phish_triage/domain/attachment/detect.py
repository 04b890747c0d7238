"""Attachment typing heuristics."""

from __future__ import annotations

import hashlib

PDF_MAGIC = b"%PDF-"
PDF_HEADER_MISMATCH = (
    "Attachment is labeled PDF but does not contain a valid PDF header (%PDF-). "
    "Bytes may be truncated or decoded incorrectly."
)


def sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def get_preview_type(mime: str) -> str:
    """Map a declared MIME type onto the preview tag used by viewers."""

    value = (mime or "").strip().lower()
    if not value:
        return "unknown"
    if value == "application/pdf":
        return "pdf"
    if value.startswith("image/"):
        return "image"
    if value.startswith("text/") or value == "application/json":
        return "text"
    return "unknown"


def is_likely_pdf(content_type: str, filename: str) -> bool:
    return "pdf" in (content_type or "").lower() or (filename or "").lower().endswith(".pdf")


def has_pdf_header(data: bytes) -> bool:
    return len(data) >= len(PDF_MAGIC) and data[: len(PDF_MAGIC)] == PDF_MAGIC


def pdf_preview_error(content_type: str, filename: str, data: bytes) -> str | None:
    if is_likely_pdf(content_type, filename) and not has_pdf_header(data):
        return PDF_HEADER_MISMATCH
    return None

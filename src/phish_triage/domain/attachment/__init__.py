"""Attachment domain typing and models."""

from phish_triage.domain.attachment.detect import (
    PDF_HEADER_MISMATCH,
    get_preview_type,
    has_pdf_header,
    is_likely_pdf,
    pdf_preview_error,
    sha256_hex,
)
from phish_triage.domain.attachment.models import Attachment, FileHash

__all__ = [
    "Attachment",
    "FileHash",
    "PDF_HEADER_MISMATCH",
    "get_preview_type",
    "has_pdf_header",
    "is_likely_pdf",
    "pdf_preview_error",
    "sha256_hex",
]

"""Best-effort PII redaction for message bodies."""

from __future__ import annotations

import logging
import re
from typing import Callable

from phish_triage.evidence.models import Redaction, RedactionOptions, RedactionResult

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
_PHONE_RE = re.compile(r"(?:\+?1[-.\s]?)?\(?[0-9]{3}\)?[-.\s]?[0-9]{3}[-.\s]?[0-9]{4}")
_CREDIT_CARD_RE = re.compile(
    r"\b(?:4[0-9]{12}(?:[0-9]{3})?|5[1-5][0-9]{14}|3[47][0-9]{13}|6(?:011|5[0-9]{2})[0-9]{12})\b"
)
_SSN_RE = re.compile(r"\b[0-9]{3}[-\s]?[0-9]{2}[-\s]?[0-9]{4}\b")
# Greeting is case-insensitive; the name itself must be capitalized.
_NAME_RE = re.compile(r"\b(?i:dear|hello|hi|hey)[ \t]+([A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+)?)")

EMAIL_PLACEHOLDER = "[REDACTED-EMAIL]"
PHONE_PLACEHOLDER = "[REDACTED-PHONE]"
CREDIT_CARD_PLACEHOLDER = "[REDACTED-CC]"
SSN_PLACEHOLDER = "[REDACTED-SSN]"
NAME_PLACEHOLDER = "[REDACTED-NAME]"
CUSTOM_PLACEHOLDER = "[REDACTED-CUSTOM]"


def _mask_email(value: str) -> str:
    parts = value.split("@")
    if len(parts) == 2:
        return f"[REDACTED]@{parts[1]}"
    return EMAIL_PLACEHOLDER


def _substitute(
    pattern: re.Pattern[str],
    text: str,
    redaction_type: str,
    replacement: Callable[[str], str],
    redactions: list[Redaction],
) -> str:
    def _replace(match: re.Match[str]) -> str:
        original = match.group(0)
        if not original:
            return original
        redacted = replacement(original)
        redactions.append(Redaction(original=original, redacted=redacted, redaction_type=redaction_type))
        return redacted

    return pattern.sub(_replace, text)


def _redact_names(text: str, redactions: list[Redaction]) -> str:
    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        redactions.append(Redaction(original=name, redacted=NAME_PLACEHOLDER, redaction_type="name"))
        offset = match.start(1) - match.start(0)
        whole = match.group(0)
        return whole[:offset] + NAME_PLACEHOLDER + whole[offset + len(name) :]

    return _NAME_RE.sub(_replace, text)


def compile_custom_patterns(patterns: tuple[str, ...] | list[str]) -> list[re.Pattern[str]]:
    compiled: list[re.Pattern[str]] = []
    for raw in patterns:
        try:
            compiled.append(re.compile(raw))
        except re.error as exc:
            logger.warning("skipping invalid custom redaction pattern %r: %s", raw, exc)
    return compiled


def redact_text(text: str, options: RedactionOptions | None = None) -> RedactionResult:
    """Redact PII in a fixed category order; each category sees the previous output."""

    opts = options or RedactionOptions()
    result = text or ""
    redactions: list[Redaction] = []

    if opts.redact_emails:
        result = _substitute(_EMAIL_RE, result, "email", _mask_email, redactions)
    if opts.redact_phones:
        result = _substitute(_PHONE_RE, result, "phone", lambda _: PHONE_PLACEHOLDER, redactions)
    if opts.redact_credit_cards:
        result = _substitute(_CREDIT_CARD_RE, result, "credit_card", lambda _: CREDIT_CARD_PLACEHOLDER, redactions)
    if opts.redact_ssn:
        result = _substitute(_SSN_RE, result, "ssn", lambda _: SSN_PLACEHOLDER, redactions)
    if opts.redact_names:
        result = _redact_names(result, redactions)
    for pattern in compile_custom_patterns(opts.custom_patterns):
        result = _substitute(pattern, result, "custom", lambda _: CUSTOM_PLACEHOLDER, redactions)

    return RedactionResult(
        redacted_text=result,
        redaction_count=len(redactions),
        redactions=tuple(redactions),
    )

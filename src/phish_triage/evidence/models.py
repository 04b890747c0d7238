"""Redaction models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RedactionOptions(BaseModel):
    """Which PII categories to redact; every category is independently toggleable."""

    model_config = ConfigDict(frozen=True)

    redact_emails: bool = True
    redact_phones: bool = True
    redact_credit_cards: bool = True
    redact_ssn: bool = True
    redact_names: bool = True
    custom_patterns: tuple[str, ...] = ()


class Redaction(BaseModel):
    model_config = ConfigDict(frozen=True)

    original: str
    redacted: str
    redaction_type: str


class RedactionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    redacted_text: str = ""
    redaction_count: int = Field(ge=0, default=0)
    redactions: tuple[Redaction, ...] = ()

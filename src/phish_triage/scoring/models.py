"""Threat scoring models and rule-set configuration."""

from __future__ import annotations

import re
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Severity = Literal["low", "medium", "high"]
ThreatLevel = Literal["Low", "Medium", "High"]

DEFAULT_URGENCY_PATTERNS = (
    r"\b(urgent|immediately|asap|right away|act now|limited time)\b",
    r"\b(expire|suspend|terminate|deactivate|close your account)\b",
    r"\b(within 24 hours|within 48 hours|today only)\b",
    r"\b(final notice|last warning|immediate action required)\b",
)
DEFAULT_CREDENTIAL_PATTERNS = (
    r"\b(verify your|confirm your|update your)\s+(account|password|credentials|identity)\b",
    r"\b(login|sign in|log in)\s+(here|now|to)\b",
    r"\b(enter your|provide your)\s+(password|credentials|ssn|social security)\b",
    r"\b(click here to|click the link|click below)\b",
)
DEFAULT_IMPERSONATION_PATTERNS = (
    r"\b(paypal|microsoft|apple|amazon|netflix|bank of|wells fargo|chase)\b",
    r"\b(security team|support team|customer service|help desk)\b",
    r"\b(official|authorized|verified)\b",
)
DEFAULT_URL_SHORTENERS = (
    "bit.ly",
    "tinyurl.com",
    "goo.gl",
    "t.co",
    "ow.ly",
    "is.gd",
    "buff.ly",
    "adf.ly",
    "bit.do",
    "mcaf.ee",
    "su.pr",
    "tiny.cc",
)
DEFAULT_DANGEROUS_EXTENSIONS = ("exe", "scr", "bat", "cmd", "ps1", "vbs", "js", "jar", "msi")
DEFAULT_ARCHIVE_EXTENSIONS = ("zip", "rar", "7z", "iso", "img")
DEFAULT_WEIGHTS: dict[str, int] = {
    "spf_fail": 25,
    "spf_softfail": 10,
    "dkim_fail": 25,
    "dmarc_fail": 25,
    "return_path_mismatch": 15,
    "reply_to_mismatch": 15,
    "urgency_language": 10,
    "credential_request": 20,
    "impersonation": 15,
    "url_shortener": 10,
    "external_link_domain": 5,
    "dangerous_attachment": 30,
    "archive_attachment": 10,
}


class Indicator(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: str
    description: str
    severity: Severity
    details: str | None = None


class ThreatAssessment(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: ThreatLevel
    score: int = Field(ge=0)
    indicators: tuple[Indicator, ...] = ()
    summary: str


class RuleSet(BaseModel):
    """Immutable pattern lists and weights consumed by the scorer.

    Phrase patterns are compiled case-insensitively. Build one at startup and
    pass it into every scoring call; tests substitute their own.
    """

    model_config = ConfigDict(frozen=True, validate_default=True)

    urgency_patterns: tuple[re.Pattern[str], ...] = DEFAULT_URGENCY_PATTERNS  # type: ignore[assignment]
    credential_patterns: tuple[re.Pattern[str], ...] = DEFAULT_CREDENTIAL_PATTERNS  # type: ignore[assignment]
    impersonation_patterns: tuple[re.Pattern[str], ...] = DEFAULT_IMPERSONATION_PATTERNS  # type: ignore[assignment]
    url_shorteners: tuple[str, ...] = DEFAULT_URL_SHORTENERS
    dangerous_extensions: tuple[str, ...] = DEFAULT_DANGEROUS_EXTENSIONS
    archive_extensions: tuple[str, ...] = DEFAULT_ARCHIVE_EXTENSIONS
    # Name/weight pairs; defaults merged with overrides and kept immutable.
    weights: tuple[tuple[str, int], ...] = ()

    @field_validator("urgency_patterns", "credential_patterns", "impersonation_patterns", mode="before")
    @classmethod
    def _compile_patterns(cls, value: Any) -> tuple[re.Pattern[str], ...]:
        if isinstance(value, (str, re.Pattern)):
            value = [value]
        compiled: list[re.Pattern[str]] = []
        for item in value or ():
            if isinstance(item, re.Pattern):
                compiled.append(item)
                continue
            try:
                compiled.append(re.compile(str(item), re.IGNORECASE))
            except re.error as exc:
                raise ValueError(f"invalid pattern {item!r}: {exc}") from exc
        return tuple(compiled)

    @field_validator("url_shorteners", "dangerous_extensions", "archive_extensions", mode="before")
    @classmethod
    def _lower_tokens(cls, value: Any) -> tuple[str, ...]:
        if isinstance(value, str):
            value = [value]
        return tuple(str(item).strip().lower().lstrip(".") for item in value or () if str(item).strip())

    @field_validator("weights", mode="before")
    @classmethod
    def _merge_weights(cls, value: Any) -> tuple[tuple[str, int], ...]:
        merged = dict(DEFAULT_WEIGHTS)
        if isinstance(value, dict):
            value = value.items()
        for key, weight in value or ():
            merged[str(key)] = int(weight)
        return tuple(merged.items())

    def weight(self, rule_name: str, fallback: int = 0) -> int:
        return max(0, int(dict(self.weights).get(rule_name, fallback)))

"""Shared errors and logging helpers."""

from phish_triage.core.errors import ConfigError, ParseError, PhishTriageError

__all__ = ["ConfigError", "ParseError", "PhishTriageError"]

"""Custom exceptions for phish_triage."""


class PhishTriageError(Exception):
    """Base exception for application-level errors."""


class ParseError(PhishTriageError):
    """Raised when a raw message cannot be decoded into an email record."""


class ConfigError(PhishTriageError):
    """Raised when configuration cannot be loaded or validated."""

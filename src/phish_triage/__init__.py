"""Email triage: normalization, IOC extraction, PII redaction and phishing risk scoring."""

from phish_triage.core.errors import ConfigError, ParseError, PhishTriageError
from phish_triage.pipeline import Analysis, analyze_email, analyze_file, analyze_message, parse_message

__version__ = "0.1.0"

__all__ = [
    "Analysis",
    "ConfigError",
    "ParseError",
    "PhishTriageError",
    "analyze_email",
    "analyze_file",
    "analyze_message",
    "parse_message",
]

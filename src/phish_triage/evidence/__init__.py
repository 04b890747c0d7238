"""PII redaction."""

from phish_triage.evidence.models import Redaction, RedactionOptions, RedactionResult
from phish_triage.evidence.redact import redact_text

__all__ = ["Redaction", "RedactionOptions", "RedactionResult", "redact_text"]

"""Email domain models and decoding."""

from phish_triage.domain.email.decode import (
    DecodedAddress,
    DecodedAttachment,
    DecodedMessage,
    MessageDecoder,
    StdlibMessageDecoder,
)
from phish_triage.domain.email.models import AuthenticationResult, Email, Header

__all__ = [
    "AuthenticationResult",
    "DecodedAddress",
    "DecodedAttachment",
    "DecodedMessage",
    "Email",
    "Header",
    "MessageDecoder",
    "StdlibMessageDecoder",
]

"""Email domain models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from phish_triage.domain.attachment.models import Attachment

AuthStatus = Literal["pass", "fail", "softfail", "neutral", "none", "present", "unknown"]


class Header(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    value: str = ""


class AuthenticationResult(BaseModel):
    """Derived SPF/DKIM/DMARC verdicts plus the raw header text they came from."""

    model_config = ConfigDict(frozen=True)

    spf: str | None = None
    dkim: str | None = None
    dmarc: str | None = None
    spf_status: AuthStatus = "unknown"
    dkim_status: AuthStatus = "unknown"
    dmarc_status: AuthStatus = "unknown"


class Email(BaseModel):
    """Canonical email record shared by every analysis stage."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    subject: str = ""
    sender: str = Field(default="", alias="from")
    to: str = ""
    reply_to: str | None = None
    return_path: str | None = None
    date: str | None = None
    headers: tuple[Header, ...] = ()
    body_text: str = ""
    body_html: str = ""
    urls: tuple[str, ...] = ()
    domains: tuple[str, ...] = ()
    ip_addresses: tuple[str, ...] = ()
    email_addresses: tuple[str, ...] = ()
    attachments: tuple[Attachment, ...] = ()
    authentication: AuthenticationResult = Field(default_factory=AuthenticationResult)
    raw_content: str = ""

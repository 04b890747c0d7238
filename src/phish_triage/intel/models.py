"""Indicator-of-compromise report models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from phish_triage.domain.attachment.models import FileHash


class HeaderOfInterest(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    value: str
    reason: str


class IOCSet(BaseModel):
    """Defanged, safe-to-paste indicators extracted from one message."""

    model_config = ConfigDict(frozen=True)

    domains: tuple[str, ...] = ()
    urls: tuple[str, ...] = ()
    ip_addresses: tuple[str, ...] = ()
    email_addresses: tuple[str, ...] = ()
    file_hashes: tuple[FileHash, ...] = ()
    headers_of_interest: tuple[HeaderOfInterest, ...] = ()

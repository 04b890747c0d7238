"""IOC extraction, defanging and clipboard formatting."""

from __future__ import annotations

import re

from phish_triage.domain.attachment.models import FileHash
from phish_triage.domain.email.models import Email
from phish_triage.intel.header_intel import from_reply_to_mismatch, from_return_path_mismatch
from phish_triage.intel.models import HeaderOfInterest, IOCSet

_BARE_DOT = re.compile(r"(?<!\[)\.(?!\])")
_BARE_AT = re.compile(r"(?<!\[)@(?!\])")
_HTTP_SCHEME = re.compile(r"http://", re.IGNORECASE)
_HTTPS_SCHEME = re.compile(r"https://", re.IGNORECASE)
_MAX_RECEIVED_OF_INTEREST = 3


def _defang_dots(value: str) -> str:
    return _BARE_DOT.sub("[.]", value)


def defang_url(url: str) -> str:
    value = _HTTP_SCHEME.sub("hxxp://", url)
    value = _HTTPS_SCHEME.sub("hxxps://", value)
    return _defang_dots(value)


def defang_domain(domain: str) -> str:
    return _defang_dots(domain)


def defang_ip(ip: str) -> str:
    return _defang_dots(ip)


def defang_email(address: str) -> str:
    return _defang_dots(_BARE_AT.sub("[@]", address))


def _headers_of_interest(email: Email) -> list[HeaderOfInterest]:
    items: list[HeaderOfInterest] = []
    received = 0
    for header in email.headers:
        name = header.name.lower()
        if name == "x-originating-ip":
            items.append(
                HeaderOfInterest(name=header.name, value=header.value, reason="Source IP of the email sender")
            )
        elif name == "x-mailer":
            items.append(
                HeaderOfInterest(
                    name=header.name, value=header.value, reason="Email client used to send the message"
                )
            )
        elif name == "received" and "from" in header.value.lower() and received < _MAX_RECEIVED_OF_INTEREST:
            received += 1
            items.append(HeaderOfInterest(name=header.name, value=header.value, reason="Email routing information"))

    if from_return_path_mismatch(email.sender, email.return_path):
        items.append(
            HeaderOfInterest(
                name="Return-Path Mismatch",
                value=f"From: {email.sender} | Return-Path: {email.return_path}",
                reason="Return-Path does not match From address - possible spoofing",
            )
        )
    if from_reply_to_mismatch(email.sender, email.reply_to):
        items.append(
            HeaderOfInterest(
                name="Reply-To Mismatch",
                value=f"From: {email.sender} | Reply-To: {email.reply_to}",
                reason="Reply-To does not match From address - possible redirect",
            )
        )

    auth = email.authentication
    items.append(HeaderOfInterest(name="SPF", value=auth.spf_status, reason="SPF validation result"))
    items.append(HeaderOfInterest(name="DKIM", value=auth.dkim_status, reason="DKIM validation result"))
    items.append(HeaderOfInterest(name="DMARC", value=auth.dmarc_status, reason="DMARC validation result"))
    return items


def extract_iocs(email: Email) -> IOCSet:
    return IOCSet(
        domains=tuple(defang_domain(item) for item in email.domains),
        urls=tuple(defang_url(item) for item in email.urls),
        ip_addresses=tuple(defang_ip(item) for item in email.ip_addresses),
        email_addresses=tuple(defang_email(item) for item in email.email_addresses),
        file_hashes=tuple(FileHash(filename=item.filename, sha256=item.sha256) for item in email.attachments),
        headers_of_interest=tuple(_headers_of_interest(email)),
    )


def format_iocs_for_copy(iocs: IOCSet) -> str:
    """Render the IOC lists as a Markdown block for pasting into tickets."""

    sections = [
        ("Domains", list(iocs.domains)),
        ("URLs", list(iocs.urls)),
        ("IP Addresses", list(iocs.ip_addresses)),
        ("Email Addresses", list(iocs.email_addresses)),
        ("File Hashes", [f"{item.filename}: SHA256: {item.sha256}" for item in iocs.file_hashes]),
        ("Headers of Interest", [f"{item.name}: {item.value}" for item in iocs.headers_of_interest]),
    ]
    blocks = [
        f"## {title}\n" + "".join(f"- {line}\n" for line in lines) for title, lines in sections if lines
    ]
    return "\n".join(blocks)

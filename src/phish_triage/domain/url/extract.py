"""URL, domain, IP and address extraction."""

from __future__ import annotations

import re
from typing import Iterable
from urllib.parse import urlparse

URL_PATTERN = re.compile(r"https?://[^\s<>\"')}\]]+", re.IGNORECASE)
HREF_PATTERN = re.compile(r"href=[\"']([^\"']+)[\"']", re.IGNORECASE)
EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
IPV4_PATTERN = re.compile(
    r"\b(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}"
    r"(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\b"
)
DOMAIN_PATTERN = re.compile(
    r"(?:[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?\.)+[a-zA-Z]{2,}"
)
_TRAILING_PUNCTUATION = re.compile(r"[.,)\]>;]+$")
_ASSET_SUFFIXES = (".png", ".jpg", ".gif", ".css")
_NON_PUBLIC_IP_PREFIXES = ("10.", "192.168.", "127.", "0.")


def _unique(values: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(item for item in values if item))


def strip_trailing_punctuation(url: str) -> str:
    return _TRAILING_PUNCTUATION.sub("", url)


def extract_urls(text: str) -> list[str]:
    """Extract HTTP(S) URLs from text, trimming sentence punctuation."""

    return _unique(strip_trailing_punctuation(item) for item in URL_PATTERN.findall(text or ""))


def extract_href_urls(html: str) -> list[str]:
    return _unique(item for item in HREF_PATTERN.findall(html or "") if item.startswith("http"))


def extract_message_urls(body_text: str, body_html: str) -> list[str]:
    return _unique(extract_urls(body_text) + extract_urls(body_html) + extract_href_urls(body_html))


def url_hostname(url: str) -> str | None:
    """Return the lower-cased hostname, or ``None`` when the URL does not parse."""

    try:
        host = urlparse((url or "").strip()).hostname
    except ValueError:
        return None
    return host.lower() if host else None


def extract_domains(urls: Iterable[str], text: str) -> list[str]:
    domains = [host for host in (url_hostname(url) for url in urls) if host]
    for token in DOMAIN_PATTERN.findall(text or ""):
        lower = token.lower()
        if not lower.endswith(_ASSET_SUFFIXES):
            domains.append(lower)
    return _unique(domains)


def is_public_ipv4(ip: str) -> bool:
    return not ip.startswith(_NON_PUBLIC_IP_PREFIXES)


def extract_header_ips(header_values: Iterable[str]) -> list[str]:
    found: list[str] = []
    for value in header_values:
        found.extend(ip for ip in IPV4_PATTERN.findall(value or "") if is_public_ipv4(ip))
    return _unique(found)


def extract_email_addresses(text: str, header_values: Iterable[str]) -> list[str]:
    found = [item.lower() for item in EMAIL_PATTERN.findall(text or "")]
    for value in header_values:
        found.extend(item.lower() for item in EMAIL_PATTERN.findall(value or ""))
    return _unique(found)

"""URL and indicator extraction."""

from phish_triage.domain.url.extract import (
    extract_domains,
    extract_email_addresses,
    extract_header_ips,
    extract_href_urls,
    extract_message_urls,
    extract_urls,
    is_public_ipv4,
    url_hostname,
)

__all__ = [
    "extract_domains",
    "extract_email_addresses",
    "extract_header_ips",
    "extract_href_urls",
    "extract_message_urls",
    "extract_urls",
    "is_public_ipv4",
    "url_hostname",
]

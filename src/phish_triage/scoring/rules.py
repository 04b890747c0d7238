"""Declarative phishing rule table.

Each rule pairs a matcher with its category, severity and weight name. A
matcher returns one ``Hit`` per triggering item; rules marked ``once`` keep
only the first hit.
"""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Callable

from phish_triage.domain.email.models import Email
from phish_triage.domain.url.extract import url_hostname
from phish_triage.intel.header_intel import from_reply_to_mismatch, from_return_path_mismatch
from phish_triage.scoring.models import RuleSet, Severity

_SENDER_DOMAIN_PATTERN = re.compile(r"@([^\s>]+)")


@dataclass(frozen=True)
class Hit:
    description: str
    details: str | None = None


Matcher = Callable[[Email, RuleSet], list[Hit]]


@dataclass(frozen=True)
class ScoringRule:
    name: str
    category: str
    severity: Severity
    matcher: Matcher
    once: bool = False


def message_text(email: Email) -> str:
    return f"{email.subject} {email.body_text} {email.body_html}"


def sender_domain(sender: str) -> str:
    match = _SENDER_DOMAIN_PATTERN.search(sender or "")
    return match.group(1).lower() if match else ""


def _spf_fail(email: Email, rules: RuleSet) -> list[Hit]:
    if email.authentication.spf_status != "fail":
        return []
    return [Hit("SPF check failed", "The sender's domain did not authorize this server to send emails on its behalf.")]


def _spf_softfail(email: Email, rules: RuleSet) -> list[Hit]:
    if email.authentication.spf_status != "softfail":
        return []
    return [Hit("SPF soft fail", "The sender's SPF policy indicates this server may not be authorized.")]


def _dkim_fail(email: Email, rules: RuleSet) -> list[Hit]:
    if email.authentication.dkim_status != "fail":
        return []
    return [Hit("DKIM verification failed", "The email's DKIM signature could not be verified.")]


def _dmarc_fail(email: Email, rules: RuleSet) -> list[Hit]:
    if email.authentication.dmarc_status != "fail":
        return []
    return [Hit("DMARC check failed", "The email failed DMARC policy validation.")]


def _return_path_mismatch(email: Email, rules: RuleSet) -> list[Hit]:
    if not from_return_path_mismatch(email.sender, email.return_path):
        return []
    return [Hit("Return-Path mismatch", f"From: {email.sender} differs from Return-Path: {email.return_path}")]


def _reply_to_mismatch(email: Email, rules: RuleSet) -> list[Hit]:
    if not from_reply_to_mismatch(email.sender, email.reply_to):
        return []
    return [Hit("Reply-To mismatch", f"Replies would go to {email.reply_to} instead of {email.sender}")]


def _urgency_language(email: Email, rules: RuleSet) -> list[Hit]:
    text = message_text(email)
    for pattern in rules.urgency_patterns:
        if pattern.search(text):
            return [Hit("Urgency language detected", "The email uses urgent or pressure tactics common in phishing.")]
    return []


def _credential_request(email: Email, rules: RuleSet) -> list[Hit]:
    text = message_text(email)
    for pattern in rules.credential_patterns:
        if pattern.search(text):
            return [
                Hit(
                    "Credential request detected",
                    "The email contains language requesting login or personal information.",
                )
            ]
    return []


def _impersonation(email: Email, rules: RuleSet) -> list[Hit]:
    text = message_text(email)
    sender = email.sender.lower()
    for pattern in rules.impersonation_patterns:
        match = pattern.search(text)
        if not match:
            continue
        brand = match.group(0).lower()
        if brand not in sender:
            return [Hit(f"Possible {brand} impersonation", f"Email mentions {brand} but sender domain doesn't match.")]
    return []


def _url_shorteners(email: Email, rules: RuleSet) -> list[Hit]:
    hits: list[Hit] = []
    for url in email.urls:
        lowered = url.lower()
        shortener = next((item for item in rules.url_shorteners if item in lowered), None)
        if shortener:
            hits.append(
                Hit(
                    "URL shortener detected",
                    f"URL shortener used: {shortener} (may hide malicious destination)",
                )
            )
    return hits


def _external_link_domain(email: Email, rules: RuleSet) -> list[Hit]:
    domain = sender_domain(email.sender)
    if not domain:
        return []
    for url in email.urls:
        host = url_hostname(url)
        if host is None:
            continue
        if domain not in host and host not in domain:
            return [Hit("External domain in links", f"Link points to {host} which differs from sender domain")]
    return []


def _dangerous_attachments(email: Email, rules: RuleSet) -> list[Hit]:
    return [
        Hit(f"Dangerous file type: .{item.extension}", f"Attachment '{item.filename}' is an executable file type")
        for item in email.attachments
        if item.extension in rules.dangerous_extensions
    ]


def _archive_attachments(email: Email, rules: RuleSet) -> list[Hit]:
    return [
        Hit(
            f"Archive file type: .{item.extension}",
            f"Attachment '{item.filename}' is an archive that may contain malware",
        )
        for item in email.attachments
        if item.extension in rules.archive_extensions and item.extension not in rules.dangerous_extensions
    ]


DEFAULT_RULE_TABLE: tuple[ScoringRule, ...] = (
    ScoringRule("spf_fail", "Authentication", "high", _spf_fail),
    ScoringRule("spf_softfail", "Authentication", "medium", _spf_softfail),
    ScoringRule("dkim_fail", "Authentication", "high", _dkim_fail),
    ScoringRule("dmarc_fail", "Authentication", "high", _dmarc_fail),
    ScoringRule("return_path_mismatch", "Header Anomaly", "medium", _return_path_mismatch),
    ScoringRule("reply_to_mismatch", "Header Anomaly", "medium", _reply_to_mismatch),
    ScoringRule("urgency_language", "Social Engineering", "medium", _urgency_language, once=True),
    ScoringRule("credential_request", "Credential Harvesting", "high", _credential_request, once=True),
    ScoringRule("impersonation", "Impersonation", "high", _impersonation, once=True),
    ScoringRule("url_shortener", "Suspicious URL", "medium", _url_shorteners),
    ScoringRule("external_link_domain", "Suspicious URL", "low", _external_link_domain, once=True),
    ScoringRule("dangerous_attachment", "Malicious Attachment", "high", _dangerous_attachments),
    ScoringRule("archive_attachment", "Suspicious Attachment", "medium", _archive_attachments),
)

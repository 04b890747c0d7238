"""Header-level authentication signals (SPF/DKIM/DMARC)."""

from __future__ import annotations

import re
from typing import Iterable

from phish_triage.domain.email.models import AuthenticationResult, Header

_AUTH_RESULT_PATTERN = re.compile(r"\b(?P<key>spf|dkim|dmarc)\s*=\s*(?P<value>[a-z_]+)")
_SPF_VERDICTS = ("pass", "fail", "softfail", "neutral")
_DKIM_VERDICTS = ("pass", "fail")
_DMARC_VERDICTS = ("pass", "fail", "none")


def _values(headers: Iterable[Header], name: str) -> list[str]:
    wanted = name.lower()
    return [item.value for item in headers if item.name.lower() == wanted]


def _explicit_results(text: str) -> dict[str, set[str]]:
    found: dict[str, set[str]] = {"spf": set(), "dkim": set(), "dmarc": set()}
    for match in _AUTH_RESULT_PATTERN.finditer(text.lower()):
        found[match.group("key")].add(match.group("value"))
    return found


def _first_verdict(found: set[str], order: tuple[str, ...]) -> str | None:
    for verdict in order:
        if verdict in found:
            return verdict
    return None


def _received_spf_wording(received_spf: str) -> str:
    lowered = received_spf.lower()
    if "pass" in lowered and "fail" not in lowered:
        return "pass"
    if "softfail" in lowered:
        return "softfail"
    if "fail" in lowered:
        return "fail"
    if "neutral" in lowered:
        return "neutral"
    return "unknown"


def classify_spf(auth_results: str, received_spf: str) -> str:
    explicit = _explicit_results(f"{auth_results} {received_spf}")
    return _first_verdict(explicit["spf"], _SPF_VERDICTS) or _received_spf_wording(received_spf)


def classify_dkim(auth_results: str, has_signature: bool) -> str:
    verdict = _first_verdict(_explicit_results(auth_results)["dkim"], _DKIM_VERDICTS)
    if verdict:
        return verdict
    return "present" if has_signature else "unknown"


def classify_dmarc(auth_results: str) -> str:
    return _first_verdict(_explicit_results(auth_results)["dmarc"], _DMARC_VERDICTS) or "unknown"


def classify_authentication(headers: Iterable[Header]) -> AuthenticationResult:
    """Derive SPF/DKIM/DMARC status from Authentication-Results, Received-SPF and DKIM-Signature."""

    items = list(headers)
    auth_values = _values(items, "authentication-results")
    spf_values = _values(items, "received-spf")
    dkim_values = _values(items, "dkim-signature")
    auth_text = " ".join(auth_values)
    spf_text = " ".join(spf_values)

    return AuthenticationResult(
        spf=spf_values[0] if spf_values else None,
        dkim=dkim_values[0] if dkim_values else None,
        dmarc=auth_values[0] if auth_values else None,
        spf_status=classify_spf(auth_text, spf_text),
        dkim_status=classify_dkim(auth_text, bool(dkim_values)),
        dmarc_status=classify_dmarc(auth_text),
    )


def from_return_path_mismatch(sender: str, return_path: str | None) -> bool:
    """True when both are set and neither contains the other (case-insensitive)."""

    if not sender or not return_path:
        return False
    left, right = sender.lower(), return_path.lower()
    return right not in left and left not in right


def from_reply_to_mismatch(sender: str, reply_to: str | None) -> bool:
    if not sender or not reply_to:
        return False
    return reply_to.lower() not in sender.lower()

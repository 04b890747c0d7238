from phish_triage.domain.email.models import Header
from phish_triage.intel.header_intel import (
    classify_authentication,
    classify_spf,
    from_reply_to_mismatch,
    from_return_path_mismatch,
)


def _headers(*pairs: tuple[str, str]) -> list[Header]:
    return [Header(name=name, value=value) for name, value in pairs]


def test_header_intel_reads_explicit_results():
    auth = classify_authentication(
        _headers(
            (
                "Authentication-Results",
                "mx.example; spf=pass smtp.mailfrom=alerts@bank.com; dkim=pass header.d=bank.com; dmarc=fail (p=reject)",
            )
        )
    )
    assert auth.spf_status == "pass"
    assert auth.dkim_status == "pass"
    assert auth.dmarc_status == "fail"
    assert auth.dmarc is not None and auth.dmarc.startswith("mx.example")
    assert auth.spf is None


def test_received_spf_wording_is_the_fallback():
    assert classify_spf("", "Pass (google.com: domain of a@b.com designates 1.2.3.4 as permitted sender)") == "pass"
    assert classify_spf("", "SoftFail (transitioning domain)") == "softfail"
    assert classify_spf("", "Fail (domain does not designate sender)") == "fail"
    assert classify_spf("", "Neutral (no policy)") == "neutral"
    assert classify_spf("", "") == "unknown"


def test_explicit_spf_token_wins_over_received_spf_wording():
    auth = classify_authentication(
        _headers(
            ("Authentication-Results", "mx.example; spf=softfail smtp.mailfrom=x.com"),
            ("Received-SPF", "Pass (mailfrom) identity=mailfrom"),
        )
    )
    assert auth.spf_status == "softfail"
    assert auth.spf == "Pass (mailfrom) identity=mailfrom"


def test_dkim_signature_without_verdict_is_present():
    auth = classify_authentication(_headers(("DKIM-Signature", "v=1; a=rsa-sha256; d=example.com; s=sel")))
    assert auth.dkim_status == "present"
    assert auth.dkim == "v=1; a=rsa-sha256; d=example.com; s=sel"
    assert auth.dmarc_status == "unknown"


def test_dkim_verdict_beats_signature_presence():
    auth = classify_authentication(
        _headers(
            ("DKIM-Signature", "v=1; d=example.com"),
            ("Authentication-Results", "mx.example; dkim=fail reason=bad signature; dmarc=none"),
        )
    )
    assert auth.dkim_status == "fail"
    assert auth.dmarc_status == "none"


def test_no_auth_headers_defaults_to_unknown():
    auth = classify_authentication([])
    assert (auth.spf_status, auth.dkim_status, auth.dmarc_status) == ("unknown", "unknown", "unknown")


def test_mismatch_checks_use_substring_semantics():
    assert not from_return_path_mismatch("alice@example.com", "<alice@example.com>")
    assert from_return_path_mismatch("Alice <alice@example.com>", "<bounce@other.net>")
    assert not from_return_path_mismatch("alice@example.com", None)
    assert not from_reply_to_mismatch("Alice <ALICE@example.com>", "alice@example.com")
    assert from_reply_to_mismatch("alice@example.com", "collect@attacker.example")
    assert not from_reply_to_mismatch("", "collect@attacker.example")

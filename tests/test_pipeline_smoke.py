import json

from phish_triage.export.report import export_json, export_markdown
from phish_triage.pipeline import analyze_email, analyze_file, analyze_message


def test_pipeline_produces_full_analysis(sample_eml):
    analysis = analyze_message(sample_eml)
    assert analysis.threat.level == "High"
    assert analysis.iocs.urls == ("hxxps://bit[.]ly/abc123", "hxxps://login[.]evil-example[.]net/auth")
    assert analysis.iocs.ip_addresses == ("203[.]0[.]113[.]7", "198[.]51[.]100[.]23")
    assert analysis.redaction.redaction_count == 3
    assert "Dear [REDACTED-NAME]," in analysis.redaction.redacted_text
    assert analysis.analyzed_at.endswith(" UTC")
    descriptions = {item.description for item in analysis.threat.indicators}
    assert "Dangerous file type: .exe" in descriptions
    assert "URL shortener detected" in descriptions
    assert "Reply-To mismatch" in descriptions


def test_repeated_runs_are_identical(sample_eml):
    first = analyze_message(sample_eml)
    second = analyze_message(sample_eml.encode("utf-8"))
    assert first.email.id == second.email.id
    assert first.email.authentication == second.email.authentication
    assert (first.threat.score, first.threat.level) == (second.threat.score, second.threat.level)
    assert first.iocs == second.iocs


def test_clean_message_is_low_risk(clean_eml):
    analysis = analyze_message(clean_eml)
    assert analysis.threat.level == "Low"
    assert analysis.threat.score == 0
    assert analysis.redaction.redaction_count == 0


def test_json_export_is_the_analysis_object(sample_eml):
    payload = json.loads(export_json(analyze_message(sample_eml)))
    assert set(payload) == {"email", "redaction", "iocs", "threat", "analyzed_at"}
    assert payload["email"]["from"] == "PayPal Support <service@paypal-secure.example>"
    assert payload["email"]["authentication"]["spf_status"] == "fail"
    attachment = payload["email"]["attachments"][0]
    assert "content" not in attachment
    assert set(attachment) >= {"filename", "content_type", "size", "sha256", "preview_error"}


def test_markdown_export_has_every_section(sample_eml):
    md = export_markdown(analyze_message(sample_eml))
    for heading in (
        "# Urgent: verify your account Analysis",
        "## Summary",
        "## Email Details",
        "## Authentication Results",
        "## Threat Indicators",
        "## Indicators of Compromise",
        "### File Hashes",
        "## Email Body (Redacted)",
    ):
        assert heading in md
    assert "| SPF | FAIL |" in md
    assert "| Reply-To | collect@attacker.example |" in md


def test_analyze_email_accepts_prebuilt_records(make_email):
    analysis = analyze_email(make_email(body_text="Hi Sam"), analyzed_at="2025-01-01 00:00:00 UTC")
    assert analysis.analyzed_at == "2025-01-01 00:00:00 UTC"
    assert analysis.redaction.redacted_text == "Hi [REDACTED-NAME]"


def test_analyze_file_reads_bytes(tmp_path, sample_eml):
    path = tmp_path / "message.eml"
    path.write_bytes(sample_eml.encode("utf-8"))
    assert analyze_file(path).email.subject == "Urgent: verify your account"

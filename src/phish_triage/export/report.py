"""Report renderers over a finished analysis."""

from __future__ import annotations

from phish_triage.pipeline import Analysis

_LEVEL_MARKERS = {"High": "🔴", "Medium": "🟡", "Low": "🟢"}
_SEVERITY_MARKERS = {"high": "🔴", "medium": "🟡", "low": "🟢"}


def _list_section(title: str, lines: list[str]) -> str:
    if not lines:
        return ""
    return f"### {title}\n" + "".join(f"- {line}\n" for line in lines) + "\n"


def export_markdown(analysis: Analysis) -> str:
    email = analysis.email
    auth = email.authentication
    threat = analysis.threat
    iocs = analysis.iocs

    md = (
        f"# {email.subject} Analysis\n\n"
        f"**Analysis Date:** {analysis.analyzed_at}\n"
        f"**Threat Level:** {_LEVEL_MARKERS[threat.level]} {threat.level}\n\n"
        "## Summary\n\n"
        f"{threat.summary}\n\n"
        "## Email Details\n\n"
        "| Field | Value |\n"
        "|-------|-------|\n"
        f"| From | {email.sender} |\n"
        f"| To | {email.to} |\n"
        f"| Subject | {email.subject} |\n"
        f"| Date | {email.date or 'Unknown'} |\n"
        f"| Reply-To | {email.reply_to or 'Not specified'} |\n"
        f"| Return-Path | {email.return_path or 'Not specified'} |\n\n"
        "## Authentication Results\n\n"
        "| Check | Status |\n"
        "|-------|--------|\n"
        f"| SPF | {auth.spf_status.upper()} |\n"
        f"| DKIM | {auth.dkim_status.upper()} |\n"
        f"| DMARC | {auth.dmarc_status.upper()} |\n\n"
    )

    if threat.indicators:
        md += "## Threat Indicators\n\n"
        for indicator in threat.indicators:
            md += f"- {_SEVERITY_MARKERS[indicator.severity]} **{indicator.category}**: {indicator.description}\n"
            if indicator.details:
                md += f"  - {indicator.details}\n"
        md += "\n"

    md += "## Indicators of Compromise\n\n"
    md += _list_section("Domains", list(iocs.domains))
    md += _list_section("URLs", list(iocs.urls))
    md += _list_section("IP Addresses", list(iocs.ip_addresses))
    md += _list_section("Email Addresses", list(iocs.email_addresses))
    md += _list_section("File Hashes", [f"{item.filename}: SHA256: {item.sha256}" for item in iocs.file_hashes])
    md += _list_section("Headers of Interest", [f"{item.name}: {item.value}" for item in iocs.headers_of_interest])

    md += "## Email Body (Redacted)\n\n```\n"
    md += analysis.redaction.redacted_text
    md += "\n```\n"
    return md


def export_json(analysis: Analysis) -> str:
    return analysis.to_json(indent=2)


def export_sanitized_eml(analysis: Analysis) -> str:
    """Apply every recorded redaction, in order, as a literal replacement over the raw message."""

    sanitized = analysis.email.raw_content
    for redaction in analysis.redaction.redactions:
        sanitized = sanitized.replace(redaction.original, redaction.redacted)
    return sanitized

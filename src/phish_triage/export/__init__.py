"""Markdown, JSON and sanitized-message exports."""

from phish_triage.export.report import export_json, export_markdown, export_sanitized_eml

__all__ = ["export_json", "export_markdown", "export_sanitized_eml"]

"""Command-line entrypoint."""

from __future__ import annotations

import argparse
import sys

from phish_triage.config.settings import load_config
from phish_triage.core.errors import PhishTriageError
from phish_triage.core.logging import configure_logging
from phish_triage.export.report import export_json, export_markdown, export_sanitized_eml
from phish_triage.intel.ioc import format_iocs_for_copy
from phish_triage.pipeline import Analysis, analyze_message

_RENDERERS = {
    "json": export_json,
    "markdown": export_markdown,
    "sanitized": export_sanitized_eml,
    "iocs": lambda analysis: format_iocs_for_copy(analysis.iocs),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="phish-triage")
    parser.add_argument("path", help="Path to an .eml file, or '-' to read stdin.")
    parser.add_argument("--format", choices=sorted(_RENDERERS), default="json", help="Output format.")
    parser.add_argument("--config", help="YAML config file overriding the packaged defaults.")
    parser.add_argument("--log-level", help="Logging level, e.g. DEBUG.")
    parser.add_argument(
        "--pattern",
        action="append",
        default=[],
        help="Extra redaction regex; may be given more than once.",
    )
    for flag in ("emails", "phones", "credit-cards", "ssn", "names"):
        parser.add_argument(f"--no-redact-{flag}", action="store_true", help=f"Do not redact {flag.replace('-', ' ')}.")
    return parser


def _read_input(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    with open(path, "rb") as handle:
        return handle.read()


def run_once(raw: bytes | str, args: argparse.Namespace) -> Analysis:
    config, _ = load_config(args.config)
    configure_logging(args.log_level or config.log_level)
    base = config.redaction_options()
    options = base.model_copy(
        update={
            "redact_emails": base.redact_emails and not args.no_redact_emails,
            "redact_phones": base.redact_phones and not args.no_redact_phones,
            "redact_credit_cards": base.redact_credit_cards and not args.no_redact_credit_cards,
            "redact_ssn": base.redact_ssn and not args.no_redact_ssn,
            "redact_names": base.redact_names and not args.no_redact_names,
            "custom_patterns": tuple(base.custom_patterns) + tuple(args.pattern),
        }
    )
    return analyze_message(raw, options=options, rules=config.rule_set(), hash_workers=config.hash_workers)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        raw = _read_input(args.path)
        analysis = run_once(raw, args)
    except OSError as exc:
        print(f"error: cannot read {args.path}: {exc}", file=sys.stderr)
        return 1
    except PhishTriageError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(_RENDERERS[args.format](analysis))
    return 0

"""Logging setup for command-line use."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int = "WARNING") -> None:
    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        if not isinstance(resolved, int):
            resolved = logging.WARNING
    else:
        resolved = level
    root = logging.getLogger("phish_triage")
    root.setLevel(resolved)
    if not any(getattr(handler, "_phish_triage", False) for handler in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._phish_triage = True  # type: ignore[attr-defined]
        root.addHandler(handler)

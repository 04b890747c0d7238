"""CLI entrypoint for phish_triage."""

from __future__ import annotations

import sys

from phish_triage.cli import main

if __name__ == "__main__":
    sys.exit(main())

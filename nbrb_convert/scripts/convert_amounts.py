"""CLI entry point for converting dated BYN amounts."""

from __future__ import annotations

import sys

from nbrb_convert.conversion.cli import main

if __name__ == "__main__":  # pragma: no cover - thin wrapper
    sys.exit(main())

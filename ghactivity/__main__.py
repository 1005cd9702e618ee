"""Allow ``python -m ghactivity``."""

from __future__ import annotations

from ghactivity.cli import main

main()

"""Fetch a GitHub user's recent public events into a local JSON file."""

from __future__ import annotations

__version__ = "0.1.0"

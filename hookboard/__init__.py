"""Hookboard: aggregate GitHub webhook snapshots into dashboard views."""

from __future__ import annotations

__version__ = "0.1.0"

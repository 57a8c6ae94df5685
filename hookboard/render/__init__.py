"""Presentation helpers for dashboard bundles."""

from __future__ import annotations

from .markdown import render_dashboard_markdown

__all__ = ["render_dashboard_markdown"]

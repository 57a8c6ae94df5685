"""Base error type shared by all Hookboard packages."""

from __future__ import annotations


class HookboardError(Exception):
    """Base class for Hookboard errors.

    Subpackages derive their own error hierarchies from this class so callers
    have a single catch point at the CLI boundary.
    """

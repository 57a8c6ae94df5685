"""Errors raised by the dashboard engine and its configuration."""

from __future__ import annotations

from hookboard.errors import HookboardError


class DashboardConfigError(HookboardError, ValueError):
    """Raised when dashboard configuration values are invalid."""

    @classmethod
    def not_an_integer(cls, name: str, raw: str) -> DashboardConfigError:
        """Return an error for integer settings that fail to parse."""
        return cls(f"{name} must be an integer, got: {raw!r}")

    @classmethod
    def not_positive(cls, name: str, value: int) -> DashboardConfigError:
        """Return an error for settings that must be at least 1."""
        return cls(f"{name} must be positive, got: {value}")

    @classmethod
    def empty_separator(cls) -> DashboardConfigError:
        """Return an error for an empty team separator."""
        return cls("team separator must be a non-empty string")

    @classmethod
    def unknown_timezone(cls, name: str) -> DashboardConfigError:
        """Return an error for time zone names that cannot be resolved."""
        return cls(f"unknown time zone: {name!r}")


class TimezoneAwareRequiredError(HookboardError, ValueError):
    """Raised when the engine clock is a naive datetime."""

    def __init__(self, context: str) -> None:
        """Attach a consistent message for the failing context."""
        super().__init__(f"{context} must be timezone aware")

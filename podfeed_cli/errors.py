"""Structured error codes for podfeed.

These exceptions cover operational failures only: a feed that cannot be
read, or configuration that cannot be resolved. Problems *inside* a feed
are never raised; they are collected as violations in a ValidationReport.

All errors follow the format PODFEED-{category}{number}:
- PODFEED-FED*: Feed document errors
- PODFEED-CFG*: Configuration errors
"""

from __future__ import annotations

from typing import Any


class PodfeedError(Exception):
    """Base class for all podfeed errors.

    All errors have:
    - code: Structured error code (e.g., PODFEED-FED001)
    - message: Human-readable error message
    """

    code: str = "PODFEED-000"

    # Reserved attribute names that cannot be overwritten by context
    _RESERVED_ATTRS = frozenset({"code", "message", "context", "args"})

    def __init__(self, message: str, **context: Any) -> None:
        """Initialize a podfeed error.

        Args:
            message: Human-readable error message.
            **context: Additional context stored as error attributes.
                Reserved keys (code, message, context, args) are ignored.
        """
        self.message = message
        self.context = context
        for key, value in context.items():
            if key not in self._RESERVED_ATTRS:
                setattr(self, key, value)
        super().__init__(f"[{self.code}] {message}")

    def to_dict(self) -> dict[str, Any]:
        """Convert error to JSON-serializable dict."""
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context,
        }


# Feed Errors (PODFEED-FED*)
class FeedError(PodfeedError):
    """Base class for feed document errors."""

    code = "PODFEED-FED000"


class FeedNotFoundError(FeedError):
    """Raised when the feed file does not exist.

    Error code: PODFEED-FED001
    """

    code = "PODFEED-FED001"

    def __init__(self, path: str) -> None:
        super().__init__(f"Feed file not found: {path}", path=path)


class FeedParseError(FeedError):
    """Raised when the feed file is not well-formed XML.

    Error code: PODFEED-FED002
    """

    code = "PODFEED-FED002"

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"Cannot parse feed {source}: {reason}", source=source, reason=reason)


# Configuration Errors (PODFEED-CFG*)
class ConfigError(PodfeedError):
    """Base class for configuration-related errors."""

    code = "PODFEED-CFG000"


class ConfigParseError(ConfigError):
    """Raised when a configuration file cannot be parsed.

    Error code: PODFEED-CFG001
    """

    code = "PODFEED-CFG001"

    def __init__(self, path: str, parse_error: str) -> None:
        super().__init__(
            f"Failed to parse config file {path}: {parse_error}",
            path=path,
            parse_error=parse_error,
        )


class ConfigInvalidValueError(ConfigError):
    """Raised when a setting has a value of the wrong kind.

    Error code: PODFEED-CFG002
    """

    code = "PODFEED-CFG002"

    def __init__(self, key: str, value: Any, expected: str) -> None:
        super().__init__(
            f"Invalid value {value!r} for setting '{key}': expected {expected}",
            key=key,
            value=value,
            expected=expected,
        )

"""JSON output for ``podfeed validate --json`` and ``--format json``.

Every JSON response is one envelope on stdout:

    {
        "success": true|false,
        "command": "validate",
        "data": {
            "passed": false,
            "strict": false,
            "exit_code": 1,
            "error_count": 1,
            "warning_count": 0,
            "violations": [{"message": "title must be a string.", "severity": "fatal"}],
            "notes": ["Skipping checking of URL https://... (offline mode)"]
        },
        "errors": [{"type": "Violation", "message": "title must be a string."}]
    }

``data`` is ``ValidationReport.to_dict()``. ``errors`` is present only when
``success`` is false: one ``Violation`` entry per failing violation, or a
single entry named after the PodfeedError subclass (``FeedNotFoundError``,
``ConfigParseError``, ...) when the feed could not be validated at all, in
which case ``data`` is empty.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any


@dataclass
class ErrorDetail:
    """One entry of the errors array.

    Attributes:
        type: "Violation", or the PodfeedError subclass name (e.g. "FeedParseError")
        message: Human-readable error description
    """

    type: str
    message: str

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {"type": self.type, "message": self.message}


@dataclass
class OutputEnvelope:
    """One JSON response of a validate run.

    Attributes:
        success: True if the feed passed validation
        command: Name of the command ("validate")
        data: The report dict, or {} when the feed could not be read
        errors: Failing violations or the operational error; only when success=False
    """

    success: bool
    command: str
    data: dict[str, Any] | None
    errors: list[ErrorDetail] | None = field(default=None)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization.

        The errors field is excluded when None (for success cases).
        """
        result: dict[str, Any] = {
            "success": self.success,
            "command": self.command,
            "data": self.data,
        }
        if self.errors is not None:
            result["errors"] = [e.to_dict() for e in self.errors]
        return result

    def to_json(self, *, indent: int | None = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)


def success_envelope(command: str, data: dict[str, Any]) -> OutputEnvelope:
    """Create a success envelope with the given command and data."""
    return OutputEnvelope(success=True, command=command, data=data)


def error_envelope(
    command: str,
    errors: list[ErrorDetail],
    *,
    data: dict[str, Any] | None = None,
) -> OutputEnvelope:
    """Create an error envelope with the given command and errors.

    Args:
        command: Name of the command
        errors: List of ErrorDetail objects describing the errors
        data: Optional partial data to include (default: empty dict)
    """
    return OutputEnvelope(
        success=False,
        command=command,
        data=data if data is not None else {},
        errors=errors,
    )

"""Validation result data structures.

Checkers return a CheckResult. Section validators turn failed results into
Violations and record them on the run's ValidationReport, which decides
the final outcome for CLI display and JSON export.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Severity(Enum):
    """Severity level for violations.

    FATAL: Always fails the run.
    STRICT: Fails the run only in strict mode; a warning otherwise.
    """

    FATAL = "fatal"
    STRICT = "strict"


@dataclass(frozen=True)
class CheckResult:
    """Outcome of applying one checker to one value.

    Attributes:
        passed: Whether the value satisfied the checker.
        message: Description of the failure; empty when passed.
        notes: Informational messages produced while checking.
    """

    passed: bool
    message: str = ""
    notes: tuple[str, ...] = ()


OK = CheckResult(passed=True)


def ok(*notes: str) -> CheckResult:
    """Create a passing result, optionally carrying informational notes."""
    if not notes:
        return OK
    return CheckResult(passed=True, notes=notes)


def fail(message: str) -> CheckResult:
    """Create a failing result."""
    return CheckResult(passed=False, message=message)


@dataclass(frozen=True)
class Violation:
    """One problem found in a feed.

    Attributes:
        message: Human-readable description; the only stable contract.
        severity: FATAL or STRICT.
    """

    message: str
    severity: Severity = Severity.FATAL

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {"message": self.message, "severity": self.severity.value}


@dataclass
class ValidationReport:
    """Append-only record of the violations and notes of one run.

    Violations and notes share one ordered stream, so a skipped URL check
    is reported next to the checks around it.

    Attributes:
        strict: Whether STRICT violations count as failures.
    """

    strict: bool = False
    _entries: list[Violation | str] = field(default_factory=list)

    def record(self, violation: Violation) -> None:
        """Append a violation."""
        self._entries.append(violation)

    def record_fatal(self, message: str) -> None:
        self.record(Violation(message, Severity.FATAL))

    def record_strict(self, message: str) -> None:
        self.record(Violation(message, Severity.STRICT))

    def record_note(self, message: str) -> None:
        """Append an informational note; notes never affect the outcome."""
        self._entries.append(message)

    def record_result(self, result: CheckResult) -> None:
        """Record the notes and, if failed, the message of a CheckResult."""
        for note in result.notes:
            self.record_note(note)
        if not result.passed:
            self.record_fatal(result.message)

    @property
    def entries(self) -> tuple[Violation | str, ...]:
        """Violations and notes (plain strings) in the order they were recorded."""
        return tuple(self._entries)

    @property
    def violations(self) -> tuple[Violation, ...]:
        """All violations in the order they were recorded."""
        return tuple(e for e in self._entries if isinstance(e, Violation))

    def is_error(self, violation: Violation) -> bool:
        """True if this violation fails the run under the report's mode."""
        if violation.severity == Severity.FATAL:
            return True
        return violation.severity == Severity.STRICT and self.strict

    @property
    def errors(self) -> list[Violation]:
        """Violations that fail the run."""
        return [v for v in self.violations if self.is_error(v)]

    @property
    def warnings(self) -> list[Violation]:
        """Strict-only violations reported without failing the run."""
        return [v for v in self.violations if v.severity == Severity.STRICT and not self.strict]

    @property
    def notes(self) -> tuple[str, ...]:
        """Informational notes, such as skipped remote checks."""
        return tuple(e for e in self._entries if isinstance(e, str))

    @property
    def passed(self) -> bool:
        """True if no violation fails the run."""
        return not self.errors

    @property
    def exit_code(self) -> int:
        """Process exit signal: 0 when passed, 1 otherwise."""
        return 0 if self.passed else 1

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict for --json output."""
        return {
            "passed": self.passed,
            "strict": self.strict,
            "exit_code": self.exit_code,
            "error_count": len(self.errors),
            "warning_count": len(self.warnings),
            "violations": [v.to_dict() for v in self.violations],
            "notes": list(self.notes),
        }

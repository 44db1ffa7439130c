"""Validation engine for podcast RSS feeds.

This module provides the public API for validating feeds:
- validate_feed(): Check a parsed feed document
- validate_file(): Read and check a feed file
- ValidationReport: Aggregate of violations with the pass/fail outcome
- build_item_rules(): Item rule tables for a show type
"""

from podfeed_cli.validation.results import (
    CheckResult,
    Severity,
    ValidationReport,
    Violation,
)
from podfeed_cli.validation.rules import CheckRule, build_item_rules
from podfeed_cli.validation.runner import validate_feed, validate_file

__all__ = [
    "CheckResult",
    "CheckRule",
    "Severity",
    "ValidationReport",
    "Violation",
    "build_item_rules",
    "validate_feed",
    "validate_file",
]

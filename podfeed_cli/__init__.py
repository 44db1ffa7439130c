"""podfeed CLI - Validate podcast RSS feeds."""

from podfeed_cli.cli import cli
from podfeed_cli.config import RunConfig
from podfeed_cli.reader import parse_feed, read_feed
from podfeed_cli.tree import ParsedNode, lookup
from podfeed_cli.validation import ValidationReport, validate_feed, validate_file

__all__ = [
    "ParsedNode",
    "RunConfig",
    "ValidationReport",
    "cli",
    "lookup",
    "parse_feed",
    "read_feed",
    "validate_feed",
    "validate_file",
]

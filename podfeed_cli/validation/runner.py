"""Validation runner that checks a whole feed document."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import httpx

from podfeed_cli.config import RunConfig
from podfeed_cli.reader import read_feed
from podfeed_cli.tree import lookup
from podfeed_cli.validation.reachability import UrlProbe
from podfeed_cli.validation.results import ValidationReport
from podfeed_cli.validation.sections import (
    CHANNEL_PATH,
    check_channel,
    check_envelope,
    check_items,
)

logger = logging.getLogger(__name__)


def validate_feed(
    tree: Any,
    config: RunConfig | None = None,
    *,
    client: httpx.Client | None = None,
) -> ValidationReport:
    """Validate a parsed feed document.

    Runs the envelope, channel and item checks in that order. Every
    section always runs; the report holds every violation found.

    Args:
        tree: Parsed document (see podfeed_cli.tree).
        config: Run options. Defaults to RunConfig().
        client: Optional HTTP client for reachability checks.

    Returns:
        ValidationReport with all violations and the final outcome.
    """
    if config is None:
        config = RunConfig()

    report = ValidationReport(strict=config.strict)
    channel = lookup(tree, CHANNEL_PATH, None)

    with UrlProbe(config, client) as probe:
        logger.debug("Checking document envelope")
        check_envelope(tree, report)
        logger.debug("Checking channel")
        check_channel(channel, report, probe)
        logger.debug("Checking items")
        check_items(channel, report, probe)

    logger.debug(
        "Validation finished: %d errors, %d warnings", len(report.errors), len(report.warnings)
    )
    return report


def validate_file(
    path: Path,
    config: RunConfig | None = None,
    *,
    client: httpx.Client | None = None,
) -> ValidationReport:
    """Read a feed file and validate it.

    Raises:
        FeedNotFoundError: If the file does not exist.
        FeedParseError: If the file is not well-formed XML.
    """
    return validate_feed(read_feed(path), config, client=client)

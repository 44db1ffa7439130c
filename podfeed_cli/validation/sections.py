"""Section validators: document envelope, channel, and items.

Each validator walks its rule tables and records every failure on the
shared ValidationReport. Nothing here stops early: every rule of every
table is evaluated, so one run reports all problems in a feed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from podfeed_cli.tree import MISSING, ParsedNode, as_sequence, lookup
from podfeed_cli.validation.checkers import check_itunes_category, check_natural
from podfeed_cli.validation.reachability import UrlProbe
from podfeed_cli.validation.results import ValidationReport
from podfeed_cli.validation.rules import (
    CATEGORY_PATH,
    CATEGORY_TEXT_PATH,
    CHANNEL_OPTIONAL,
    CHANNEL_REQUIRED,
    CHANNEL_STRUCTURAL_TAGS,
    ENVELOPE_ATTRS,
    EPISODE_FIELD,
    GUID_PATH,
    ITEM_STRUCTURAL_TAGS,
    SUBCATEGORY_TEXT_PATH,
    CheckRule,
    build_item_rules,
    known_tags,
)

logger = logging.getLogger(__name__)

ROOT_TAG = "rss"
CHANNEL_PATH = "rss.channel"


def _apply_required(
    rules: Iterable[CheckRule],
    node: Any,
    report: ValidationReport,
    probe: UrlProbe | None,
    label_prefix: str = "",
) -> None:
    for rule in rules:
        logger.debug("Checking required field %s", rule.path)
        result = rule.apply(rule.read(node), f"{label_prefix}{rule.path}", probe)
        report.record_result(result)


def _apply_optional(
    rules: Iterable[CheckRule],
    node: Any,
    report: ValidationReport,
    probe: UrlProbe | None,
    label_prefix: str = "",
) -> None:
    for rule in rules:
        value = rule.read(node, MISSING)
        if value is MISSING:
            continue
        logger.debug("Checking optional field %s", rule.path)
        report.record_result(rule.apply(value, f"{label_prefix}{rule.path}", probe))


def _unexpected_tags(node: Any, expected: Iterable[str]) -> list[str]:
    if not isinstance(node, ParsedNode):
        return []
    allowed = set(expected)
    return [key for key in node if key not in allowed]


def _identity(value: Any) -> str | int | float | None:
    """Return a usable duplicate-detection key, or None for empty values."""
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return None
    return value or None


def check_envelope(tree: Any, report: ValidationReport) -> None:
    """Check the root element's version and namespace declarations."""
    for key, expected in ENVELOPE_ATTRS.items():
        actual = lookup(tree, f"{ROOT_TAG}.{key}", "")
        if actual != expected:
            report.record_fatal(f"RSS property {key} should be set to {expected}")


def check_categories(channel: Any, report: ValidationReport) -> None:
    """Check every ``itunes:category`` entry and its optional subcategory."""
    entries = as_sequence(lookup(channel, CATEGORY_PATH, MISSING))
    if not entries:
        report.record_result(check_itunes_category(""))
        return
    for entry in entries:
        category = lookup(entry, CATEGORY_TEXT_PATH, "")
        subcategory = lookup(entry, SUBCATEGORY_TEXT_PATH, None)
        report.record_result(check_itunes_category(category, subcategory))


def check_channel(channel: Any, report: ValidationReport, probe: UrlProbe | None = None) -> None:
    """Check show-level metadata.

    Required fields are always checked; optional fields only when present.
    Child tags that no rule knows about are strict-only violations.
    Without a probe, remote URLs are not requested and each one is noted.
    """
    _apply_required(CHANNEL_REQUIRED, channel, report, probe)
    check_categories(channel, report)
    _apply_optional(CHANNEL_OPTIONAL, channel, report, probe)

    expected = set(CHANNEL_STRUCTURAL_TAGS) | known_tags(CHANNEL_REQUIRED, CHANNEL_OPTIONAL)
    additional = _unexpected_tags(channel, expected)
    if additional:
        report.record_strict(f"Channel has additional tags: {','.join(additional)}")


def check_items(channel: Any, report: ValidationReport, probe: UrlProbe | None = None) -> None:
    """Check every episode and the identifiers shared across episodes.

    A guid or episode number seen on an earlier item is a duplicate; the
    first occurrence is never flagged. Without a probe, remote URLs are
    not requested and each one is noted.
    """
    items = as_sequence(lookup(channel, "item", MISSING))
    report.record_result(check_natural(len(items), "Episode count"))

    rules = build_item_rules(lookup(channel, "itunes:type", ""))
    expected = set(ITEM_STRUCTURAL_TAGS) | rules.known_tags
    logger.debug("Checking %d items", len(items))

    guids: set[Any] = set()
    episodes: set[Any] = set()

    for item in items:
        title = lookup(item, "title")

        guid = _identity(lookup(item, GUID_PATH, ""))
        if guid is not None:
            if guid in guids:
                report.record_fatal(f"{title}: Duplicate guid {guid}")
            guids.add(guid)

        episode = _identity(lookup(item, EPISODE_FIELD, ""))
        if episode is not None:
            if episode in episodes:
                report.record_fatal(f"{title}: Duplicate episode {episode}")
            episodes.add(episode)

        prefix = f"{title}: "
        _apply_required(rules.required, item, report, probe, prefix)
        _apply_optional(rules.optional, item, report, probe, prefix)

        additional = _unexpected_tags(item, expected)
        if additional:
            report.record_strict(f"{title}: Has additional tags: {','.join(additional)}")

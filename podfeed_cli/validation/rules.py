"""Rule tables for each section of a feed.

A rule pairs a dotted field path with a checker and its parameters.
Required rules are applied even when the field is absent (absence fails
the checker); optional rules are applied only when the field is present.

The item tables depend on the show type read from the channel, so they
are built per run by build_item_rules().
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from podfeed_cli.tree import lookup, top_level_segment
from podfeed_cli.validation.checkers import (
    check_audio_type,
    check_bool,
    check_cdata_string,
    check_date,
    check_default_string,
    check_description_string,
    check_email,
    check_episode_type,
    check_itunes_type,
    check_language,
    check_natural,
    check_number_string,
    check_url_format,
)
from podfeed_cli.validation.reachability import (
    IMAGE_CONTENT_TYPES,
    IMAGE_EXTENSIONS,
    UrlProbe,
    check_url_exists,
    offline_probe,
)
from podfeed_cli.validation.results import CheckResult

Checker = Callable[..., CheckResult]

AUDIO_EXTENSIONS: tuple[str, ...] = ("mp3", "m4a")

SERIAL_SHOW_TYPE = "serial"
EPISODE_FIELD = "itunes:episode"


@dataclass(frozen=True)
class CheckRule:
    """A field path, the checker that validates it, and checker parameters.

    Attributes:
        path: Dotted address of the field within its section.
        checker: Function called as ``checker(value, label, **params)``.
        params: Extra keyword arguments for the checker.
        remote: The checker needs a UrlProbe (passed as ``probe``).
    """

    path: str
    checker: Checker
    params: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    remote: bool = False

    def apply(self, value: Any, label: str, probe: UrlProbe | None = None) -> CheckResult:
        """Run the checker on ``value``.

        Remote rules run without network access when no probe is given.
        """
        kwargs = dict(self.params)
        if self.remote:
            kwargs["probe"] = probe if probe is not None else offline_probe()
        return self.checker(value, label, **kwargs)

    def read(self, node: Any, default: Any = None) -> Any:
        """Read this rule's field from ``node``."""
        return lookup(node, self.path, default)


def _image_rule(path: str) -> CheckRule:
    return CheckRule(
        path,
        check_url_exists,
        MappingProxyType({"extensions": IMAGE_EXTENSIONS, "content_types": IMAGE_CONTENT_TYPES}),
        remote=True,
    )


def _remote_url_rule(path: str) -> CheckRule:
    return CheckRule(path, check_url_exists, remote=True)


RuleTable = tuple[CheckRule, ...]

# Root attribute -> required literal value
ENVELOPE_ATTRS: Mapping[str, str] = MappingProxyType(
    {
        "@_version": "2.0",
        "@_xmlns:content": "http://purl.org/rss/1.0/modules/content/",
        "@_xmlns:googleplay": "http://www.google.com/schemas/play-podcasts/1.0",
        "@_xmlns:itunes": "http://www.itunes.com/dtds/podcast-1.0.dtd",
    }
)

CHANNEL_REQUIRED: RuleTable = (
    CheckRule("title", check_default_string),
    CheckRule("description", check_description_string),
    _image_rule("itunes:image.@_href"),
    CheckRule("language", check_language),
    CheckRule("itunes:explicit", check_bool),
    _remote_url_rule("atom:link.@_href"),
)

CHANNEL_OPTIONAL: RuleTable = (
    CheckRule("content:encoded", check_cdata_string),
    CheckRule("itunes:summary", check_description_string),
    CheckRule("itunes:author", check_default_string),
    _remote_url_rule("link"),
    CheckRule("itunes:owner.itunes:name", check_default_string),
    CheckRule("itunes:owner.itunes:email", check_email),
    CheckRule("lastBuildDate", check_date),
    CheckRule("itunes:title", check_default_string),
    CheckRule("itunes:type", check_itunes_type),
    CheckRule("copyright", check_default_string),
    _remote_url_rule("itunes:new-feed-url"),
    CheckRule("itunes:block", check_default_string),
    CheckRule("itunes:complete", check_default_string),
)

# Channel children handled outside the field tables
CHANNEL_STRUCTURAL_TAGS: tuple[str, ...] = (
    "itunes:image",
    "image",
    "itunes:category",
    "itunes:owner",
    "atom:link",
    "item",
)

CATEGORY_PATH = "itunes:category"
CATEGORY_TEXT_PATH = "@_text"
SUBCATEGORY_TEXT_PATH = "itunes:category.@_text"

ITEM_STRUCTURAL_TAGS: tuple[str, ...] = ("enclosure", "guid")

GUID_PATH = "guid.#text"

_EPISODE_RULE = CheckRule(EPISODE_FIELD, check_natural)

_ITEM_REQUIRED_BASE: RuleTable = (
    CheckRule("title", check_default_string),
    CheckRule(
        "enclosure.@_url",
        check_url_format,
        MappingProxyType({"extensions": AUDIO_EXTENSIONS}),
    ),
    CheckRule("enclosure.@_length", check_number_string),
    CheckRule("enclosure.@_type", check_audio_type),
)

_ITEM_OPTIONAL_HEAD: RuleTable = (
    CheckRule("itunes:title", check_default_string),
    CheckRule("itunes:author", check_default_string),
    CheckRule("itunes:summary", check_default_string),
    CheckRule("itunes:subtitle", check_default_string),
    CheckRule("itunes:episodeType", check_episode_type),
    CheckRule("content:encoded", check_cdata_string),
    CheckRule("category", check_default_string),
    CheckRule(GUID_PATH, check_default_string),
    CheckRule("guid.@_isPermaLink", check_bool),
    CheckRule("pubDate", check_date),
    CheckRule("description", check_description_string),
    CheckRule("itunes:duration", check_natural),
    CheckRule("link", check_url_format),
    _image_rule("itunes:image.@_href"),
    CheckRule("itunes:explicit", check_bool),
)

_ITEM_OPTIONAL_TAIL: RuleTable = (
    CheckRule("itunes:order", check_natural),
    CheckRule("itunes:season", check_natural),
)


@dataclass(frozen=True)
class ItemRules:
    """Required and optional rule tables for the items of one feed."""

    required: RuleTable
    optional: RuleTable

    @property
    def known_tags(self) -> frozenset[str]:
        return known_tags(self.required, self.optional)


def build_item_rules(show_type: Any) -> ItemRules:
    """Build the item rule tables for a show type.

    Serial shows require an episode number on every item; for any other
    show type, including a missing or invalid one, it is optional.

    Args:
        show_type: Value of the channel's ``itunes:type`` field.

    Returns:
        Immutable required/optional tables.
    """
    if show_type == SERIAL_SHOW_TYPE:
        return ItemRules(
            required=(*_ITEM_REQUIRED_BASE, _EPISODE_RULE),
            optional=(*_ITEM_OPTIONAL_HEAD, *_ITEM_OPTIONAL_TAIL),
        )
    return ItemRules(
        required=_ITEM_REQUIRED_BASE,
        optional=(*_ITEM_OPTIONAL_HEAD, _EPISODE_RULE, *_ITEM_OPTIONAL_TAIL),
    )


def known_tags(*tables: Iterable[CheckRule]) -> frozenset[str]:
    """Top-level tag names addressed by the rules in ``tables``."""
    return frozenset(top_level_segment(rule.path) for table in tables for rule in table)

"""Tests for rule tables in podfeed_cli.validation.rules."""

from __future__ import annotations

import pytest

from podfeed_cli.tree import ParsedNode
from podfeed_cli.validation.checkers import check_natural
from podfeed_cli.validation.rules import (
    CHANNEL_OPTIONAL,
    CHANNEL_REQUIRED,
    EPISODE_FIELD,
    CheckRule,
    build_item_rules,
    known_tags,
)


def _paths(rules: tuple[CheckRule, ...]) -> list[str]:
    return [rule.path for rule in rules]


class TestBuildItemRules:
    """Tests for build_item_rules()."""

    @pytest.mark.unit
    def test_serial_requires_episode_number(self) -> None:
        """Serial shows put itunes:episode in the required table."""
        rules = build_item_rules("serial")
        assert EPISODE_FIELD in _paths(rules.required)
        assert EPISODE_FIELD not in _paths(rules.optional)

    @pytest.mark.unit
    @pytest.mark.parametrize("show_type", ["episodic", "", None, "weekly", 3])
    def test_other_show_types_make_episode_optional(self, show_type: object) -> None:
        """Episodic, missing and invalid show types leave it optional."""
        rules = build_item_rules(show_type)
        assert EPISODE_FIELD not in _paths(rules.required)
        assert EPISODE_FIELD in _paths(rules.optional)

    @pytest.mark.unit
    def test_base_required_fields(self) -> None:
        rules = build_item_rules("episodic")
        assert _paths(rules.required) == [
            "title",
            "enclosure.@_url",
            "enclosure.@_length",
            "enclosure.@_type",
        ]

    @pytest.mark.unit
    def test_tables_are_immutable(self) -> None:
        rules = build_item_rules("serial")
        assert isinstance(rules.required, tuple)
        assert isinstance(rules.optional, tuple)
        with pytest.raises(AttributeError):
            rules.required = ()  # type: ignore[misc]

    @pytest.mark.unit
    def test_pure(self) -> None:
        """Same input, equal output."""
        assert build_item_rules("serial") == build_item_rules("serial")

    @pytest.mark.unit
    def test_episode_placement_does_not_change_known_tags(self) -> None:
        assert build_item_rules("serial").known_tags == build_item_rules("episodic").known_tags


class TestKnownTags:
    """Tests for known_tags()."""

    @pytest.mark.unit
    def test_uses_top_level_segments(self) -> None:
        tags = known_tags(CHANNEL_REQUIRED, CHANNEL_OPTIONAL)
        assert "itunes:owner" in tags
        assert "itunes:image" in tags
        assert "itunes:owner.itunes:name" not in tags

    @pytest.mark.unit
    def test_item_tags(self) -> None:
        tags = build_item_rules("episodic").known_tags
        assert {"title", "enclosure", "guid", "pubDate", "itunes:season"} <= tags


class TestCheckRule:
    """Tests for CheckRule."""

    @pytest.mark.unit
    def test_read_and_apply(self) -> None:
        rule = CheckRule("itunes:season", check_natural)
        node = ParsedNode({"itunes:season": 2})
        assert rule.read(node) == 2
        assert rule.apply(rule.read(node), "itunes:season").passed

    @pytest.mark.unit
    def test_params_are_passed_to_checker(self) -> None:
        seen: dict[str, object] = {}

        def checker(value: object, label: str, **params: object):
            seen.update(params, value=value, label=label)
            return check_natural(1, label)

        rule = CheckRule("x", checker, {"extensions": ("mp3",)})
        rule.apply("v", "label")
        assert seen == {"extensions": ("mp3",), "value": "v", "label": "label"}

    @pytest.mark.unit
    def test_remote_rule_receives_probe(self) -> None:
        seen: dict[str, object] = {}

        def checker(value: object, label: str, *, probe: object):
            seen["probe"] = probe
            return check_natural(1, label)

        sentinel = object()
        CheckRule("x", checker, remote=True).apply("v", "label", sentinel)  # type: ignore[arg-type]
        assert seen["probe"] is sentinel

"""Tests for validate_feed() and validate_file()."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from podfeed_cli.config import RunConfig
from podfeed_cli.errors import FeedNotFoundError, FeedParseError
from podfeed_cli.tree import ParsedNode
from podfeed_cli.validation import (
    Severity,
    ValidationReport,
    Violation,
    validate_feed,
    validate_file,
)

FeedFactory = Callable[..., ParsedNode]


def _messages(report: ValidationReport) -> list[str]:
    return [v.message for v in report.violations]


class TestValidateFeed:
    """Tests for validate_feed()."""

    @pytest.mark.unit
    def test_minimal_feed_is_valid(
        self, minimal_feed: ParsedNode, reachable_client: httpx.Client
    ) -> None:
        report = validate_feed(minimal_feed, client=reachable_client)
        assert report.violations == ()
        assert report.exit_code == 0

    @pytest.mark.unit
    def test_defaults_to_non_strict_online_config(
        self, feed_factory: FeedFactory, reachable_client: httpx.Client
    ) -> None:
        report = validate_feed(feed_factory(**{"podcast:locked": "no"}), client=reachable_client)
        assert report.strict is False
        assert report.passed
        assert report.notes == ()

    @pytest.mark.unit
    def test_strict_mode_fails_on_additional_tags(
        self, feed_factory: FeedFactory, reachable_client: httpx.Client
    ) -> None:
        tree = feed_factory(**{"podcast:locked": "no"})
        report = validate_feed(tree, RunConfig(strict=True), client=reachable_client)
        assert not report.passed
        assert report.exit_code == 1
        assert [v.severity for v in report.violations] == [Severity.STRICT]

    @pytest.mark.unit
    def test_all_sections_are_checked(self, reachable_client: httpx.Client) -> None:
        """Envelope, channel and item problems are all reported in one run."""
        tree = ParsedNode.from_mapping(
            {
                "rss": {
                    "@_version": "2.0",
                    "@_xmlns:content": "http://purl.org/rss/1.0/modules/content/",
                    "@_xmlns:itunes": "http://www.itunes.com/dtds/podcast-1.0.dtd",
                    "channel": {"title": "Show"},
                }
            }
        )
        messages = _messages(validate_feed(tree, client=reachable_client))
        assert messages[0] == (
            "RSS property @_xmlns:googleplay should be set to "
            "http://www.google.com/schemas/play-podcasts/1.0"
        )
        assert "description must be a string." in messages
        assert messages[-1] == "Episode count must be a positive number."

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "href", ["https://[::1/cover.png", "https://exa mple.com:abc/cover.png"]
    )
    def test_unrequestable_cover_url_is_a_violation(
        self, feed_factory: FeedFactory, reachable_client: httpx.Client, href: str
    ) -> None:
        """A malformed https URL is reported and the run goes on."""
        tree = feed_factory(**{"itunes:image": {"@_href": href}})
        report = validate_feed(tree, client=reachable_client)
        assert _messages(report) == [
            "itunes:image.@_href responded with no response when trying to connect."
        ]

    @pytest.mark.unit
    def test_notes_and_violations_keep_check_order(self, feed_factory: FeedFactory) -> None:
        """A skipped URL appears between the checks that ran around it."""
        report = validate_feed(feed_factory(title=None), RunConfig(offline=True))
        assert report.entries == (
            Violation("title must be a string."),
            "Skipping checking of URL https://cdn.example.com/cover.png (offline mode)",
            "Skipping checking of URL https://feeds.example.com/show.xml (offline mode)",
        )

    @pytest.mark.unit
    def test_empty_document(self) -> None:
        """A document without a channel reports violations and does not raise."""
        report = validate_feed(ParsedNode(), RunConfig(offline=True))
        assert not report.passed
        assert "Episode count must be a positive number." in _messages(report)

    @pytest.mark.unit
    def test_offline_run_makes_no_requests(self, minimal_feed: ParsedNode) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError(f"unexpected request to {request.url}")

        with httpx.Client(transport=httpx.MockTransport(handler)) as client:
            report = validate_feed(minimal_feed, RunConfig(offline=True), client=client)
        assert report.passed
        assert len(report.notes) == 2

    @pytest.mark.unit
    def test_reports_are_independent(
        self, minimal_feed: ParsedNode, feed_factory: FeedFactory, reachable_client: httpx.Client
    ) -> None:
        bad = validate_feed(feed_factory(title=None), client=reachable_client)
        good = validate_feed(minimal_feed, client=reachable_client)
        assert not bad.passed
        assert good.passed


class TestValidateFile:
    """Tests for validate_file() against fixture feeds."""

    @pytest.mark.integration
    def test_valid_minimal(self, valid_minimal_xml: Path, reachable_client: httpx.Client) -> None:
        assert validate_file(valid_minimal_xml, client=reachable_client).violations == ()

    @pytest.mark.integration
    def test_valid_full(self, valid_full_xml: Path, reachable_client: httpx.Client) -> None:
        report = validate_file(valid_full_xml, client=reachable_client)
        assert report.violations == ()

    @pytest.mark.integration
    def test_missing_title_and_duplicate_guid(
        self, invalid_feed_xml: Path, reachable_client: httpx.Client
    ) -> None:
        report = validate_file(invalid_feed_xml, client=reachable_client)
        assert _messages(report) == [
            "title must be a string.",
            "Episode 2: Duplicate guid episode-1",
        ]
        assert report.exit_code == 1

    @pytest.mark.integration
    def test_extra_tags(self, extra_tags_xml: Path, reachable_client: httpx.Client) -> None:
        report = validate_file(extra_tags_xml, client=reachable_client)
        assert _messages(report) == [
            "Channel has additional tags: podcast:locked",
            "Episode 1: Has additional tags: podcast:transcript",
        ]
        assert report.passed
        strict = validate_file(extra_tags_xml, RunConfig(strict=True), client=reachable_client)
        assert not strict.passed

    @pytest.mark.integration
    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FeedNotFoundError):
            validate_file(tmp_path / "missing.xml")

    @pytest.mark.integration
    def test_malformed_file(self, malformed_xml: Path) -> None:
        with pytest.raises(FeedParseError):
            validate_file(malformed_xml)

"""Shared pytest fixtures for podfeed tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import httpx
import pytest

from podfeed_cli.tree import ParsedNode
from tests.factories import make_channel, make_feed

# =============================================================================
# Fixture Directory Access
# =============================================================================


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def feeds_dir(fixtures_dir: Path) -> Path:
    """Return the directory holding the fixture feeds."""
    return fixtures_dir / "feeds"


@pytest.fixture
def valid_minimal_xml(feeds_dir: Path) -> Path:
    """Smallest feed that passes every check (one item, no extra tags)."""
    return feeds_dir / "valid_minimal.xml"


@pytest.fixture
def valid_full_xml(feeds_dir: Path) -> Path:
    """Serial show using most optional channel and item fields."""
    return feeds_dir / "valid_full.xml"


@pytest.fixture
def invalid_feed_xml(feeds_dir: Path) -> Path:
    """Feed without a channel title and with a repeated guid."""
    return feeds_dir / "missing_title_duplicate_guid.xml"


@pytest.fixture
def extra_tags_xml(feeds_dir: Path) -> Path:
    """Otherwise valid feed with unexpected channel and item tags."""
    return feeds_dir / "extra_tags.xml"


@pytest.fixture
def malformed_xml(feeds_dir: Path) -> Path:
    """Truncated document that is not well-formed XML."""
    return feeds_dir / "malformed.xml"


# =============================================================================
# In-memory feeds
# =============================================================================


@pytest.fixture
def feed_factory() -> Callable[..., ParsedNode]:
    """Build a ParsedNode feed from channel overrides.

    Pass a field value of ``None`` to remove that field from the channel.
    """

    def factory(**fields: Any) -> ParsedNode:
        channel = make_channel()
        for key, value in fields.items():
            if value is None:
                channel.pop(key, None)
            else:
                channel[key] = value
        return ParsedNode.from_mapping(make_feed(channel))

    return factory


@pytest.fixture
def minimal_feed(feed_factory: Callable[..., ParsedNode]) -> ParsedNode:
    """The in-memory equivalent of valid_minimal.xml."""
    return feed_factory()


# =============================================================================
# HTTP
# =============================================================================


def ok_response(request: httpx.Request) -> httpx.Response:
    """Response every reachability check accepts."""
    path = request.url.path
    if path.endswith(".png"):
        content_type = "image/png"
    elif path.endswith((".jpg", ".jpeg")):
        content_type = "image/jpeg"
    else:
        content_type = "application/rss+xml"
    return httpx.Response(
        200,
        headers={"accept-ranges": "bytes", "content-type": content_type},
    )


@pytest.fixture
def reachable_client() -> Iterator[httpx.Client]:
    """HTTP client whose every HEAD request succeeds."""
    with httpx.Client(transport=httpx.MockTransport(ok_response)) as client:
        yield client


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Remove config from the environment and run from an empty directory."""
    for name in (
        "CI",
        "PUBLIC_URL_BASE",
        "PODFEED_STRICT",
        "PODFEED_CI",
        "PODFEED_PUBLIC_URL_BASE",
        "PODFEED_OFFLINE",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path

"""Builders for in-memory feed documents used across the test suite."""

from __future__ import annotations

import copy
from typing import Any

ENVELOPE: dict[str, str] = {
    "@_version": "2.0",
    "@_xmlns:content": "http://purl.org/rss/1.0/modules/content/",
    "@_xmlns:googleplay": "http://www.google.com/schemas/play-podcasts/1.0",
    "@_xmlns:itunes": "http://www.itunes.com/dtds/podcast-1.0.dtd",
}


def make_item(title: str = "Episode 1", **fields: Any) -> dict[str, Any]:
    """Build a valid item dict; keyword arguments add or replace fields."""
    item: dict[str, Any] = {
        "title": title,
        "enclosure": {
            "@_url": "https://cdn.example.com/ep1.mp3",
            "@_length": "123456",
            "@_type": "audio/mpeg",
        },
    }
    item.update(fields)
    return item


def make_channel(**fields: Any) -> dict[str, Any]:
    """Build a valid channel dict with one item; keyword arguments add or replace fields."""
    channel: dict[str, Any] = {
        "title": "Example Show",
        "description": "A show about examples.",
        "itunes:image": {"@_href": "https://cdn.example.com/cover.png"},
        "language": "en-US",
        "itunes:explicit": False,
        "atom:link": {"@_href": "https://feeds.example.com/show.xml", "@_rel": "self"},
        "itunes:category": {"@_text": "Technology"},
        "item": make_item(),
    }
    channel.update(fields)
    return channel


def make_feed(channel: dict[str, Any] | None = None) -> dict[str, Any]:
    """Wrap a channel dict in a valid rss envelope."""
    return {"rss": {**copy.deepcopy(ENVELOPE), "channel": channel or make_channel()}}

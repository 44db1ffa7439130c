"""Reference data bundled with the package.

Both tables are read once per process and are immutable afterwards.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from functools import lru_cache
from importlib import resources
from types import MappingProxyType
from typing import Any

_DATA_PACKAGE = "podfeed_cli.data"


def _load_json(name: str) -> Any:
    return json.loads(resources.files(_DATA_PACKAGE).joinpath(name).read_text(encoding="utf-8"))


@lru_cache(maxsize=None)
def language_codes() -> frozenset[str]:
    """ISO 639-1 two-letter language codes."""
    return frozenset(_load_json("languages.json"))


@lru_cache(maxsize=None)
def categories() -> Mapping[str, tuple[str, ...]]:
    """Apple Podcasts categories mapped to their allowed subcategories."""
    raw: dict[str, list[str]] = _load_json("categories.json")
    return MappingProxyType({name: tuple(subs) for name, subs in raw.items()})

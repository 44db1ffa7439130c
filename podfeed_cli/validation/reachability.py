"""Best-effort reachability checks for URLs referenced by a feed.

A reachable URL answers a HEAD request with status 200, advertises
``accept-ranges: bytes`` and, when content types are given, serves one of
them. Transport failures and URLs that cannot be requested at all are
reported like any other failed check.

In a CI pipeline, URLs under the configured public base point at the
deployment that is being validated and may not exist yet; those are
skipped with an informational note. Offline mode skips every URL.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from podfeed_cli.config import RunConfig
from podfeed_cli.validation.checkers import DEFAULT_LABEL, check_url_format
from podfeed_cli.validation.results import CheckResult, fail, ok

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS: tuple[str, ...] = ("jpg", "jpeg", "png")
IMAGE_CONTENT_TYPES: tuple[str, ...] = ("image/jpg", "image/jpeg", "image/png")


class UrlProbe:
    """Issues HEAD requests for one validation run.

    Args:
        config: Run configuration (CI bypass and offline mode).
        client: HTTP client to use. When omitted, the probe creates one
            on first use and closes it in close().
    """

    def __init__(self, config: RunConfig, client: httpx.Client | None = None) -> None:
        self.config = config
        self._client = client
        self._owns_client = client is None

    def __enter__(self) -> UrlProbe:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client and self._client is not None:
            self._client.close()
            self._client = None

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(follow_redirects=True)
        return self._client

    def skip_reason(self, url: str) -> str | None:
        """Return why ``url`` is not probed, or None if it should be."""
        if self.config.offline:
            return f"Skipping checking of URL {url} (offline mode)"
        base = self.config.public_url_base
        if self.config.ci_mode and base and url.startswith(base):
            return f"Skipping checking of URL {url} in ci pipeline"
        return None

    def check(
        self,
        url: str,
        label: str = DEFAULT_LABEL,
        content_types: Sequence[str] = (),
    ) -> CheckResult:
        """Probe ``url`` and check status, accept-ranges and content type."""
        reason = self.skip_reason(url)
        if reason is not None:
            logger.debug(reason)
            return ok(reason)

        logger.debug("HEAD %s", url)
        try:
            response = self.client.head(url)
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as err:
            logger.debug("HEAD %s failed: %s", url, err)
            status = _status_of(err)
            return fail(f"{label} responded with {status} when trying to connect.")

        if response.status_code != 200:
            return fail(f"{label} responded with {response.status_code} when trying to connect.")

        if response.headers.get("accept-ranges") != "bytes":
            return fail(f"{label} has not field 'accept-ranges' in header set to 'bytes'.")

        if content_types:
            content_type = response.headers.get("content-type")
            if content_type not in content_types:
                return fail(f"{label} has an unexpected content type {content_type}.")

        return ok()


def offline_probe() -> UrlProbe:
    """A probe that skips every URL, for checks run without a network."""
    return UrlProbe(RunConfig(offline=True))


def _status_of(err: Exception) -> int | str:
    if isinstance(err, httpx.HTTPStatusError):
        return err.response.status_code
    return "no response"


def check_url_exists(
    value: Any,
    label: str = DEFAULT_LABEL,
    *,
    probe: UrlProbe,
    extensions: Sequence[str] = (),
    content_types: Sequence[str] = (),
) -> CheckResult:
    """An https URL (see check_url_format) that is also reachable."""
    shape = check_url_format(value, label, extensions)
    if not shape.passed:
        return shape
    return probe.check(value, label, content_types)

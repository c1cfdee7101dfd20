"""Synchronous HTTP client for downloading remote dependencies.

WHY: Builds are strictly sequential — nothing else can happen until every
remote dependency is on disk — so a blocking client is the simplest
correct tool. Wrapping httpx keeps timeouts, redirects and error mapping
in one place and lets tests inject a mock transport.

HOW: DependencyFetcher is a context manager around httpx.Client. fetch()
GETs the URL, checks the status, and writes the raw body bytes to the
destination under src/.

RULES:
- Use as: with DependencyFetcher() as fetcher: ...
- Redirects are followed
- Transport errors and non-2xx responses raise FetchError
- The destination is only written after a successful response
- The body is stored undecoded; read_lines reports bad UTF-8 on build
- Status callback (on_status) is optional
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

import httpx

from bargo.config import fetch_timeout
from bargo.errors import FetchError

logger = logging.getLogger(__name__)


class DependencyFetcher:
    """Downloads dependency source files over HTTP(S).

    Args:
        timeout: Seconds before a request is abandoned.
        transport: Optional httpx transport (tests pass a MockTransport).
    """

    def __init__(
        self,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._timeout = timeout if timeout is not None else fetch_timeout()
        self._transport = transport
        self._client: httpx.Client | None = None

    def __enter__(self) -> DependencyFetcher:
        self._client = httpx.Client(
            timeout=httpx.Timeout(self._timeout),
            follow_redirects=True,
            transport=self._transport,
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        if self._client:
            self._client.close()
            self._client = None

    def _ensure_client(self) -> httpx.Client:
        """Return the active httpx client, raising if not in context manager."""
        if self._client is None:
            raise RuntimeError(
                "DependencyFetcher must be used as a context manager: "
                "with DependencyFetcher() as fetcher: ..."
            )
        return self._client

    def fetch(
        self,
        url: str,
        dest: Path | str,
        on_status: Callable[[str], None] | None = None,
    ) -> Path:
        """Download ``url`` into ``dest``.

        Args:
            url: Remote location of the dependency source.
            dest: Local file to create or overwrite.
            on_status: Optional callback for status updates.

        Returns:
            The destination path.

        Raises:
            FetchError: The request failed or returned a non-2xx status.
        """
        client = self._ensure_client()
        dest = Path(dest)

        try:
            resp = client.get(url)
        except httpx.HTTPError as exc:
            raise FetchError(url, dest, str(exc)) from exc

        if resp.is_error:
            raise FetchError(url, dest, "HTTP {}".format(resp.status_code))

        try:
            dest.write_bytes(resp.content)
        except OSError as exc:
            raise FetchError(url, dest, "could not create {}".format(dest)) from exc

        logger.debug("Fetched %d bytes from %s", len(resp.content), url)
        if on_status:
            on_status("Fetched {} to {}".format(url, dest))
        return dest

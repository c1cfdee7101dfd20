"""Dependency download package — HTTP fetch of remote BASIC sources.

WHY: A dependency may name a URL instead of a file the user copied into
src/. The build downloads those files before assembly so the assembler
only ever reads local paths.

RULES:
- All HTTP calls go through DependencyFetcher (no direct httpx usage elsewhere)
- A failed download is reported as FetchError, a kind of MissingSourceError
"""

from bargo.fetch.client import DependencyFetcher

__all__ = ["DependencyFetcher"]

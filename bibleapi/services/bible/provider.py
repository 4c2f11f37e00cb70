# bibleapi/services/bible/provider.py
"""
Provider base class and shared result types.

A provider is one third-party site that publishes scripture as HTML.
Every provider exposes the same three operations:

    get_verse(book, chapter, verse, version) -> str
    search_words(query, version)             -> List[SearchResult]
    get_versions()                           -> List[ProviderVersion]

Each instance owns its base URL, HTTP session and timeout. None of them
hold per-request state, so one instance can serve concurrent callers.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

import requests
from bs4 import BeautifulSoup

from ... import config
from ...utils import http_fetch
from .errors import UnsupportedOperation

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass
class SearchResult:
    """One hit from a provider's word search."""
    verse: str   # Reference as shown by the site ("John 3:16")
    text: str    # Snippet (sanitized HTML for Bible Gateway, plain text elsewhere)
    url: str     # Absolute link to the passage


@dataclass
class ProviderVersion:
    """
    A version as listed by a provider's own version page.

    Used offline to build the version table, never at request time.
    """
    name: str
    value: str        # Provider-native id or slug ("111", "en/bible/king-james-version")
    code: str         # Best-guess unified code ("NIV")
    language: str = "English"


# ---------------------------------------------------------------------------
# Base class
# ---------------------------------------------------------------------------

class Provider(ABC):
    """
    Abstract base class for Bible content providers.

    Subclasses set `name` (the key used in the version table) and
    `default_base_url`, and implement the three operations. Providers
    without a search page keep the default search_words(), which raises
    UnsupportedOperation.

    Args:
        base_url: Site root, without trailing slash. Defaults per provider
                  from bibleapi.config.
        session: requests.Session (or anything with a compatible get()).
        timeout: Per-request timeout in seconds.
    """

    name: str = ""
    default_base_url: str = ""

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or self.default_base_url).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else config.HTTP_TIMEOUT

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(base_url={self.base_url!r})"

    def _fetch(self, url: str, params: Optional[dict] = None) -> BeautifulSoup:
        """GET and parse one page from this provider's site."""
        return http_fetch.fetch_document(
            self.session,
            url,
            params=params,
            headers=config.HEADERS,
            timeout=self.timeout,
        )

    def _absolute(self, href: str) -> str:
        if href.startswith("http://") or href.startswith("https://"):
            return href
        if not href.startswith("/"):
            href = "/" + href
        return self.base_url + href

    def _site_path(self, href: str) -> str:
        """Strip this provider's base URL from an href, leaving the path."""
        if href.startswith(self.base_url):
            return href[len(self.base_url):]
        return href

    @abstractmethod
    def get_verse(self, book: str, chapter: str, verse: str, version: str) -> str:
        """
        Fetch the text of a verse, a verse range, or a whole chapter.

        Args:
            book: Book name ("John", "1 Samuel")
            chapter: Chapter number as a string
            verse: "16", "16-18", or "" for the whole chapter
            version: Provider-specific version code

        Returns:
            Non-empty text (or sanitized HTML for Bible Gateway)

        Raises:
            VerseNotFound: If nothing was found for a valid request
            HTTPStatusError / FetchError: On upstream failures
        """
        pass

    def search_words(self, query: str, version: str) -> List[SearchResult]:
        raise UnsupportedOperation(self.name, "search")

    @abstractmethod
    def get_versions(self) -> List[ProviderVersion]:
        """Scrape the provider's listing of available versions."""
        pass

# bibleapi/services/bible/providers/biblegateway.py
"""
Bible Gateway provider.

Passages come back as sanitized HTML (headings, paragraphs, verse-number
superscripts, poetry line breaks) rather than plain text.

The reference is sent as-is in the search query, so Bible Gateway is the
only provider that handles chapter-only ("John 3") and cross-chapter
("John 1:12-2:4") references without going through the range parser.
"""

import logging
from typing import Iterable, List

from bs4 import Tag

from .... import config
from ..errors import VerseNotFound
from ..provider import Provider, ProviderVersion, SearchResult
from ..sanitizer import sanitize, sanitize_snippet

logger = logging.getLogger(__name__)

NO_RESULTS_SENTINEL = "No results found"

DEFAULT_LANGUAGE = "Unknown"


def _language_header(text: str):
    """Return the language for a "---Language---" option, else None."""
    if text.startswith("---") and text.endswith("---") and len(text) > 6:
        return text[3:-3].strip()
    return None


def fold_version_options(options: Iterable[Tag]) -> List[ProviderVersion]:
    """
    Turn the version dropdown into ProviderVersions.

    The dropdown groups versions under pseudo-options such as
    "---Spanish---". The current language is carried from each header to
    the options after it, starting from "Unknown".
    """
    versions = []
    current_language = DEFAULT_LANGUAGE

    for option in options:
        value = (option.get("value") or "").strip()
        # str.strip() also drops &nbsp; padding
        text = option.get_text().strip()

        language = _language_header(text)
        if language is not None:
            current_language = language
            continue

        if not value or not text:
            continue

        versions.append(ProviderVersion(
            name=text,
            value=value,
            code=value,
            language=current_language,
        ))

    return versions


class GatewayProvider(Provider):
    """
    Scraper for classic.biblegateway.com (print interface).

    Usage:
        provider = GatewayProvider()
        html = provider.get_verse("John", "3", "16", "ESV")
        # '<h3>For God So Loved the World</h3> <p><sup>16 </sup>...</p>'
    """

    name = "biblegateway"
    default_base_url = config.BIBLEGATEWAY_BASE_URL

    def get_verse(self, book: str, chapter: str, verse: str, version: str) -> str:
        if verse:
            reference = f"{book} {chapter}:{verse}"
        else:
            reference = f"{book} {chapter}"

        soup = self._fetch(
            f"{self.base_url}/passage/",
            params={"search": reference, "version": version, "interface": "print"},
        )

        passage = soup.select_one(".passage-text")
        if passage is None or NO_RESULTS_SENTINEL in passage.get_text():
            raise VerseNotFound(reference)

        html = sanitize(passage)
        if not html:
            raise VerseNotFound(reference)
        return html

    def search_words(self, query: str, version: str) -> List[SearchResult]:
        url = f"{self.base_url}/quicksearch/"
        logger.info(f"Searching {url} for '{query}' ({version})")

        soup = self._fetch(
            url,
            params={"quicksearch": query, "version": version, "interface": "print"},
        )

        items = soup.select(".search-result-list .bible-item")
        logger.info(f"Found {len(items)} search results for query '{query}'")

        results = []
        for item in items:
            title = item.select_one(".bible-item-title")
            if title is None:
                continue
            snippet = item.select_one(".bible-item-text")

            results.append(SearchResult(
                verse=title.get_text().strip(),
                text=sanitize_snippet(snippet) if snippet is not None else "",
                url=self._absolute(title.get("href", "")),
            ))

        return results

    def get_versions(self) -> List[ProviderVersion]:
        soup = self._fetch(f"{self.base_url}/versions/")
        options = soup.select("select.search-dropdown[name='version'] option")
        versions = fold_version_options(options)
        logger.info(f"Found {len(versions)} versions on Bible Gateway")
        return versions

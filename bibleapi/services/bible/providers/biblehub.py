# bibleapi/services/bible/providers/biblehub.py
"""
BibleHub provider.

Chapter pages list verses inline: a `.reftext` marker carrying the verse
number, then the verse text as sibling nodes up to the next marker.
"""

import logging
import re
from typing import List

from bs4 import NavigableString

from .... import config
from ..books import book_slug
from ..errors import VerseNotFound
from ..provider import Provider, ProviderVersion, SearchResult
from ..verse_range import VerseRange, parse_chapter, resolve_verse_range

logger = logging.getLogger(__name__)

DEFAULT_VERSION = "esv"

# /{code}/genesis/1.htm, relative or with the base URL stripped
VERSION_LINK_PATTERN = re.compile(r"^/?([^/]+)/genesis/1\.htm$")

# Site sections whose links share the version-link shape
NON_VERSION_SECTIONS = {"study", "commentaries", "text", "context", "audio"}

SKIPPED_CLASSES = {"reftext", "footnote"}


def _classes(node) -> List[str]:
    if isinstance(node, NavigableString):
        return []
    return node.get("class") or []


def _collapse(text: str) -> str:
    return " ".join(text.split())


class HubProvider(Provider):
    """
    Scraper for biblehub.com.

    Versions are lowercase slugs ("esv", "kjv"); books are lowercase with
    underscores ("1_john").
    """

    name = "biblehub"
    default_base_url = config.BIBLEHUB_BASE_URL

    def chapter_url(self, book: str, chapter: int, version: str) -> str:
        return f"{self.base_url}/{version}/{book_slug(book)}/{chapter}.htm"

    def get_verse(self, book: str, chapter: str, verse: str, version: str) -> str:
        version = (version or DEFAULT_VERSION).lower()
        chapter_num = parse_chapter(chapter)
        verses = resolve_verse_range(verse)

        soup = self._fetch(self.chapter_url(book, chapter_num, version))
        text = self._extract_range(soup.select("p.regular, p.text"), verses)

        if not text:
            raise VerseNotFound(f"{book} {chapter}:{verse}" if verse else f"{book} {chapter}")
        return text

    @staticmethod
    def _extract_range(paragraphs, verses: VerseRange) -> str:
        """
        Walk paragraph children in document order, keeping text while the
        last verse marker seen falls inside the range.

        The in-range flag carries over from one paragraph to the next, since
        a verse can continue into a new paragraph.
        """
        parts = []
        in_range = False

        for paragraph in paragraphs:
            for node in paragraph.children:
                classes = _classes(node)

                if "reftext" in classes:
                    number = node.get_text().strip().rstrip(".")
                    if number.isdecimal():
                        in_range = verses.contains(int(number))

                if not in_range:
                    continue
                if SKIPPED_CLASSES.intersection(classes) or getattr(node, "name", None) == "sup":
                    continue

                parts.append(node.get_text() if not isinstance(node, NavigableString) else str(node))

            # Paragraph boundary
            parts.append(" ")

        return _collapse("".join(parts))

    def search_words(self, query: str, version: str) -> List[SearchResult]:
        soup = self._fetch(f"{self.base_url}/search.php", params={"q": query})

        results = []
        for block in soup.select(".result_block, .result_altblock"):
            title = block.select_one(".result_title a")
            if title is None:
                continue

            reference = title.get_text().strip()
            if not reference:
                continue

            href = title.get("href", "")
            if href.startswith("/"):
                href = self.base_url + href

            description = block.select_one(".description")
            results.append(SearchResult(
                verse=reference,
                text=_collapse(description.get_text()) if description is not None else "",
                url=href,
            ))

        logger.info(f"Found {len(results)} BibleHub results for '{query}'")
        return results

    def get_versions(self) -> List[ProviderVersion]:
        # Genesis 1:1 lists every translation BibleHub carries
        soup = self._fetch(f"{self.base_url}/genesis/1-1.htm")

        versions = []
        seen = set()

        for link in soup.find_all("a", href=True):
            match = VERSION_LINK_PATTERN.match(self._site_path(link["href"]))
            if not match:
                continue

            slug = match.group(1)
            if slug in NON_VERSION_SECTIONS or slug in seen:
                continue

            name = link.get_text().strip()
            if not name:
                continue

            versions.append(ProviderVersion(
                name=name,
                value=slug,
                code=slug.upper(),
                language="English",
            ))
            seen.add(slug)

        logger.info(f"Found {len(versions)} versions on BibleHub")
        return versions

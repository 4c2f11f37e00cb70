# bibleapi/services/bible/providers/biblenow.py
"""
BibleNow provider.

BibleNow has no stable book slugs across languages, so a verse lookup
takes two requests:

    1. GET /{version_path}            -> list of testament/book links
    2. GET {book_link}/{chapter}      -> the chapter's verses

The book link is picked by position: the Nth link where N is the book's
index in the 66-book Protestant canon.
"""

import logging
import re
from dataclasses import dataclass
from typing import List

from bs4 import BeautifulSoup, NavigableString

from .... import config
from ..books import canonical_index
from ..errors import BibleError, BookIndexOutOfRange, VerseNotFound
from ..provider import Provider, ProviderVersion
from ..verse_range import parse_chapter, resolve_verse_range

logger = logging.getLogger(__name__)

DEFAULT_VERSION = "KJV"

VERSION_SLUGS = {
    "KJV": "king-james-version",
    "ESV": "english-standard-version",
    "NIV": "new-international-version",
    "NKJV": "new-king-james-version",
    "ASV": "american-standard-version",
    "NASB": "new-american-standard-bible",
    "NLT": "new-living-translation",
}

NON_BOOK_SLUGS = {"introduction", "preface", "index", "contents"}

# /{code} or /{code}-{Script}, e.g. /es, /zh-Hant
LANGUAGE_LINK_PATTERN = re.compile(r"^/([a-z]{2,3}(-[A-Za-z]+)?)$")

NON_LANGUAGE_PATHS = {"news", "books", "css", "js", "img", "build", "login", "register"}

TESTAMENT_SLUGS = {"antiguo-testamento", "nuevo-testamento", "old-testament", "new-testament"}

# "Reina-Valera 1909 (RV1909)"
VERSION_TEXT_PATTERN = re.compile(r"^(.*)\s+\(([^)]+)\)$")


@dataclass
class Language:
    code: str
    name: str


def version_slug(version: str) -> str:
    """Map a version code to its BibleNow slug; unknown codes are slugified."""
    slug = VERSION_SLUGS.get(version.upper())
    if slug:
        return slug
    return version.lower().replace(" ", "-")


def version_path(version: str) -> str:
    """
    Resolve a version to its path below the site root.

    Values that already contain a "/" are full paths as stored by
    get_versions() ("es/biblia/reina-valera-1909"); anything else is
    treated as an English version code.
    """
    if "/" in version:
        return version.lstrip("/")
    return "en/bible/" + version_slug(version)


class NowProvider(Provider):
    """
    Scraper for biblenow.net.

    Has no word search; search_words() raises UnsupportedOperation.
    """

    name = "biblenow"
    default_base_url = config.BIBLENOW_BASE_URL

    def get_verse(self, book: str, chapter: str, verse: str, version: str) -> str:
        path = version_path(version or DEFAULT_VERSION)
        index = canonical_index(book)
        chapter_num = parse_chapter(chapter)
        verses = resolve_verse_range(verse)

        links = self.book_links(path)
        if index >= len(links):
            raise BookIndexOutOfRange(index, len(links))

        soup = self._fetch(f"{self.base_url}{links[index]}/{chapter_num}")

        texts = []
        for p in soup.select("div.chapter-content a.list-group-item p.verse"):
            number_span = p.find("span")
            if number_span is None:
                continue
            number = number_span.get_text().strip()
            if not number.isdecimal() or not verses.contains(int(number)):
                continue

            text = "".join(
                str(node) if isinstance(node, NavigableString) else node.get_text()
                for node in p.children
                if getattr(node, "name", None) != "span"
            ).strip()
            if text:
                texts.append(text)

        result = " ".join(texts)
        if not result:
            raise VerseNotFound(f"{book} {chapter}:{verse}" if verse else f"{book} {chapter}")
        return result

    def book_links(self, path: str) -> List[str]:
        """
        Collect testament/book links from a version's index page.

        Returns:
            Site-relative hrefs ("/en/bible/king-james-version/old-testament/genesis"),
            deduplicated, in document order
        """
        soup = self._fetch(f"{self.base_url}/{path}")
        prefix = f"/{path}/"

        links = []
        seen = set()
        for a in soup.find_all("a", href=True):
            href = self._site_path(a["href"])
            if not href.startswith(prefix):
                continue

            parts = href[len(prefix):].split("/")
            # {testament}/{book}
            if len(parts) != 2 or not parts[0] or not parts[1]:
                continue
            if parts[1] in NON_BOOK_SLUGS or href in seen:
                continue

            links.append(href)
            seen.add(href)

        logger.debug(f"Found {len(links)} book links under /{path}")
        return links

    # ---------------------------------------------------------------------
    # Versions
    # ---------------------------------------------------------------------

    def get_versions(self) -> List[ProviderVersion]:
        """
        List versions across every language BibleNow offers.

        Languages are discovered from the English Bible page, then each
        language page is scraped in turn. A language page that fails is
        logged and skipped.
        """
        soup = self._fetch(f"{self.base_url}/en/bible")
        languages = self._extract_languages(soup)

        if not any(lang.code == "en" for lang in languages):
            languages.append(Language(code="en", name="English"))

        versions = []
        for lang in languages:
            try:
                versions.extend(self._versions_for_language(lang))
            except BibleError as e:
                logger.warning(f"Skipping BibleNow language {lang.code}: {e}")

        logger.info(f"Found {len(versions)} versions on BibleNow across {len(languages)} languages")
        return versions

    def _extract_languages(self, soup: BeautifulSoup) -> List[Language]:
        languages = []
        seen = set()

        for a in soup.find_all("a", href=True):
            match = LANGUAGE_LINK_PATTERN.match(self._site_path(a["href"]))
            if not match:
                continue

            code = match.group(1)
            if code in NON_LANGUAGE_PATHS or code in seen:
                continue

            # "Afrikaans (AF)" -> "Afrikaans"
            name = a.get_text().split("(")[0].strip() or code
            languages.append(Language(code=code, name=name))
            seen.add(code)

        return languages

    def _versions_for_language(self, lang: Language) -> List[ProviderVersion]:
        if lang.code == "en":
            url = f"{self.base_url}/en/bible"
        else:
            url = f"{self.base_url}/{lang.code}"

        soup = self._fetch(url)
        prefix = f"/{lang.code}/"

        versions = []
        seen = set()
        for a in soup.find_all("a", href=True):
            href = self._site_path(a["href"])
            if not href.startswith(prefix):
                continue

            # {word}/{slug}, e.g. biblia/reina-valera-1909
            parts = href[len(prefix):].split("/")
            if len(parts) != 2:
                continue

            slug = parts[1]
            if not slug or slug in TESTAMENT_SLUGS:
                continue

            full_path = href.lstrip("/")
            text = a.get_text().strip()
            if full_path in seen or not text:
                continue

            match = VERSION_TEXT_PATTERN.match(text)
            if match:
                name, code = match.group(1).strip(), match.group(2)
            else:
                name, code = text, slug

            versions.append(ProviderVersion(
                name=name,
                value=full_path,
                code=code,
                language=lang.name,
            ))
            seen.add(full_path)

        return versions

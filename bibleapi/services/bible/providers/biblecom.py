# bibleapi/services/bible/providers/biblecom.py
"""
Bible.com (YouVersion) provider.

Versions are numeric ids ("111" is NIV, "1" is KJV) and books use USFM
codes. Each verse on a chapter page is a span tagged with its full USFM
reference, e.g. <span data-usfm="JHN.3.16">.
"""

import logging
import re
from typing import List

from .... import config
from ..books import to_usfm
from ..errors import VerseNotFound
from ..provider import Provider, ProviderVersion
from ..verse_range import parse_chapter, resolve_verse_range

logger = logging.getLogger(__name__)

DEFAULT_VERSION = "111"  # NIV

# Longest chapter is Psalm 119 (176 verses)
MAX_VERSE_SCAN = 200

# /versions/111-niv-new-international-version
VERSION_LINK_PATTERN = re.compile(r"^/versions/(\d+)-([a-zA-Z0-9]+)-(.*)$")


class ComProvider(Provider):
    """
    Scraper for www.bible.com.

    Has no word search; search_words() raises UnsupportedOperation.
    """

    name = "biblecom"
    default_base_url = config.BIBLECOM_BASE_URL

    def get_verse(self, book: str, chapter: str, verse: str, version: str) -> str:
        version = version or DEFAULT_VERSION
        usfm = to_usfm(book)
        chapter_num = parse_chapter(chapter)
        verses = resolve_verse_range(verse)

        soup = self._fetch(f"{self.base_url}/bible/{version}/{usfm}.{chapter_num}")

        texts = []
        for number in verses:
            spans = soup.select(f"span[data-usfm='{usfm}.{chapter_num}.{number}']")
            if not spans:
                if texts:
                    # Past the last verse of the chapter
                    break
                if number > MAX_VERSE_SCAN:
                    break
                continue
            texts.append("".join(span.get_text() for span in spans).strip())

        result = " ".join(t for t in texts if t)
        if not result:
            raise VerseNotFound(f"{book} {chapter}:{verse}" if verse else f"{book} {chapter}")
        return result

    def get_versions(self) -> List[ProviderVersion]:
        soup = self._fetch(f"{self.base_url}/versions")

        versions = []
        for link in soup.select("a[href^='/versions/']"):
            match = VERSION_LINK_PATTERN.match(link.get("href", ""))
            if not match:
                continue

            version_id, abbreviation, _ = match.groups()
            code = abbreviation.upper()

            name = link.get_text().strip()
            suffix = f" ({code})"
            if name.endswith(suffix):
                name = name[:-len(suffix)]

            versions.append(ProviderVersion(
                name=name,
                value=version_id,
                code=code,
                language="English",
            ))

        logger.info(f"Found {len(versions)} versions on Bible.com")
        return versions

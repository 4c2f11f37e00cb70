# tests/test_biblenow.py
"""
Tests for the BibleNow provider against canned pages.
"""

import pytest

from bibleapi.services.bible.errors import BookIndexOutOfRange, UnsupportedOperation, VerseNotFound
from bibleapi.services.bible.provider import ProviderVersion
from bibleapi.services.bible.providers.biblenow import NowProvider, version_path, version_slug

from conftest import BASE_URL, FakeSession


KJV_INDEX_PAGE = """
<html><body>
<a href="/en/bible/king-james-version/old-testament">Old Testament</a>
<a href="/en/bible/king-james-version/old-testament/genesis">Genesis</a>
<a href="/en/bible/king-james-version/old-testament/introduction">Introduction</a>
<a href="https://bible.test/en/bible/king-james-version/old-testament/exodus">Exodus</a>
<a href="/en/bible/king-james-version/old-testament/genesis">Genesis (again)</a>
<a href="/en/bible">All versions</a>
</body></html>
"""

GENESIS_1_PAGE = """
<html><body>
<div class="chapter-content">
<a class="list-group-item" href="#1"><p class="verse"><span>1</span>In the beginning God created the heaven and the earth.</p></a>
<a class="list-group-item" href="#2"><p class="verse"><span>2</span> And the earth was without form, and void.</p></a>
<a class="list-group-item" href="#3"><p class="verse"><span>3</span>And God said, Let there be light: and there was light.</p></a>
</div>
<p class="verse"><span>4</span>Outside the chapter content.</p>
</body></html>
"""

EXODUS_2_PAGE = """
<div class="chapter-content">
<a class="list-group-item"><p class="verse"><span>1</span>And there went a man of the house of Levi.</p></a>
</div>
"""

ENGLISH_PAGE = """
<html><body>
<a href="/es">Español (ES)</a>
<a href="/fr">Français (FR)</a>
<a href="/news">News</a>
<a href="/en/bible/king-james-version">King James Version (KJV)</a>
<a href="/en/bible/old-testament">Old Testament</a>
</body></html>
"""

SPANISH_PAGE = """
<html><body>
<a href="/es/biblia/reina-valera-1909">Reina-Valera 1909 (RV1909)</a>
<a href="/es/biblia/antiguo-testamento">Antiguo Testamento</a>
<a href="/es/biblia/reina-valera-1909">Reina-Valera 1909 (RV1909)</a>
</body></html>
"""

KJV = "/en/bible/king-james-version"


def _provider(pages):
    session = FakeSession(pages)
    return NowProvider(base_url=BASE_URL, session=session), session


def test_version_slugs_and_paths():
    assert version_slug("kjv") == "king-james-version"
    assert version_slug("Good News") == "good-news"
    assert version_path("KJV") == "en/bible/king-james-version"
    assert version_path("/es/biblia/reina-valera-1909") == "es/biblia/reina-valera-1909"


def test_book_links_skip_testaments_and_duplicates():
    provider, _ = _provider({KJV: KJV_INDEX_PAGE})

    assert provider.book_links("en/bible/king-james-version") == [
        f"{KJV}/old-testament/genesis",
        f"{KJV}/old-testament/exodus",
    ]


def test_get_verse_range():
    provider, session = _provider({
        KJV: KJV_INDEX_PAGE,
        f"{KJV}/old-testament/genesis/1": GENESIS_1_PAGE,
    })

    text = provider.get_verse("Genesis", "1", "1-2", "KJV")

    assert text == (
        "In the beginning God created the heaven and the earth. "
        "And the earth was without form, and void."
    )
    assert session.paths == [KJV, f"{KJV}/old-testament/genesis/1"]


def test_whole_chapter_only_reads_chapter_content():
    provider, _ = _provider({
        KJV: KJV_INDEX_PAGE,
        f"{KJV}/old-testament/genesis/1": GENESIS_1_PAGE,
    })

    text = provider.get_verse("Genesis", "1", "", "KJV")

    assert text.endswith("Let there be light: and there was light.")
    assert "Outside" not in text


def test_book_picked_by_canonical_position():
    provider, session = _provider({
        KJV: KJV_INDEX_PAGE,
        f"{KJV}/old-testament/exodus/2": EXODUS_2_PAGE,
    })

    assert provider.get_verse("Exodus", "2", "1", "KJV") == "And there went a man of the house of Levi."
    assert session.paths[-1] == f"{KJV}/old-testament/exodus/2"


def test_book_beyond_index_raises():
    provider, _ = _provider({KJV: KJV_INDEX_PAGE})

    with pytest.raises(BookIndexOutOfRange) as exc:
        provider.get_verse("Revelation", "1", "1", "KJV")
    assert (exc.value.index, exc.value.found) == (65, 2)


def test_missing_verse_raises_not_found():
    provider, _ = _provider({
        KJV: KJV_INDEX_PAGE,
        f"{KJV}/old-testament/genesis/1": GENESIS_1_PAGE,
    })

    with pytest.raises(VerseNotFound):
        provider.get_verse("Genesis", "1", "31", "KJV")


def test_search_is_unsupported():
    provider, _ = _provider({})

    with pytest.raises(UnsupportedOperation):
        provider.search_words("light", "KJV")


def test_get_versions_across_languages():
    """A language page that fails is skipped; English is always included."""
    provider, session = _provider({
        "/en/bible": ENGLISH_PAGE,
        "/es": SPANISH_PAGE,
    })

    versions = provider.get_versions()

    assert versions == [
        ProviderVersion(name="Reina-Valera 1909", value="es/biblia/reina-valera-1909", code="RV1909", language="Español"),
        ProviderVersion(name="King James Version", value="en/bible/king-james-version", code="KJV", language="English"),
    ]
    assert "/fr" in session.paths

# tests/test_biblehub.py
"""
Tests for the BibleHub provider against canned pages.
"""

import pytest

from bibleapi.services.bible.errors import InvalidChapter, InvalidRangeSpecifier, VerseNotFound
from bibleapi.services.bible.provider import ProviderVersion, SearchResult
from bibleapi.services.bible.providers.biblehub import HubProvider

from conftest import BASE_URL, FakeSession


JOHN_3_PAGE = """
<html><body>
<div class="chap">
<p class="regular"><span class="reftext"><a href="/john/3-16.htm"><b>16</b></a></span>For God so loved the world<span class="footnote">[a]</span> that he gave his one and only Son. <span class="reftext"><a href="/john/3-17.htm"><b>17</b></a></span>For God did not send his Son into the world<sup>b</sup> to condemn the world,</p>
<p class="regular">but to save the world through him. <span class="reftext"><a href="/john/3-18.htm"><b>18</b></a></span>Whoever believes in him is not condemned.</p>
<p class="hdg">Jesus and John the Baptist</p>
</div>
</body></html>
"""

SEARCH_PAGE = """
<html><body>
<div class="result_block"><div class="result_title"><a href="/john/3-16.htm">John 3:16</a></div><div class="description">For God so
    loved the world</div></div>
<div class="result_altblock"><div class="result_title"><a href="https://biblehub.com/romans/5-8.htm">Romans 5:8</a></div><div class="description">But God proves His love</div></div>
<div class="result_block"><div class="result_title"><a href="/blank.htm">  </a></div></div>
<div class="result_block"><p>no title</p></div>
</body></html>
"""

VERSIONS_PAGE = """
<html><body>
<a href="/niv/genesis/1.htm">New International Version</a>
<a href="https://bible.test/esv/genesis/1.htm">English Standard Version</a>
<a href="/study/genesis/1.htm">Study Bible</a>
<a href="/niv/genesis/1.htm">NIV (again)</a>
<a href="/kjv/genesis/1.htm"></a>
<a href="/genesis/2.htm">Next chapter</a>
</body></html>
"""


def _provider(pages):
    session = FakeSession(pages)
    return HubProvider(base_url=BASE_URL, session=session), session


def test_single_verse():
    provider, session = _provider({"/esv/john/3.htm": JOHN_3_PAGE})

    text = provider.get_verse("John", "3", "16", "ESV")

    assert text == "For God so loved the world that he gave his one and only Son."
    assert session.paths == ["/esv/john/3.htm"]


def test_verse_continues_into_next_paragraph():
    provider, _ = _provider({"/esv/john/3.htm": JOHN_3_PAGE})

    text = provider.get_verse("John", "3", "17", "esv")

    assert text == "For God did not send his Son into the world to condemn the world, but to save the world through him."


def test_verse_range():
    provider, _ = _provider({"/esv/john/3.htm": JOHN_3_PAGE})

    text = provider.get_verse("John", "3", "16-18", "ESV")

    assert text.startswith("For God so loved the world")
    assert text.endswith("Whoever believes in him is not condemned.")
    assert "[a]" not in text
    assert "Jesus and John the Baptist" not in text


def test_book_slug_and_default_version():
    provider, session = _provider({"/esv/1_john/4.htm": JOHN_3_PAGE})

    provider.get_verse("1 John", "4", "16", "")

    assert session.requests[0]["url"] == f"{BASE_URL}/esv/1_john/4.htm"


def test_verse_outside_chapter_raises_not_found():
    provider, _ = _provider({"/esv/john/3.htm": JOHN_3_PAGE})

    with pytest.raises(VerseNotFound):
        provider.get_verse("John", "3", "40", "ESV")


def test_invalid_input_fails_before_any_request():
    provider, session = _provider({"/esv/john/3.htm": JOHN_3_PAGE})

    with pytest.raises(InvalidRangeSpecifier):
        provider.get_verse("John", "1", "12-2:4", "ESV")
    with pytest.raises(InvalidChapter):
        provider.get_verse("John", "three", "1", "ESV")
    assert session.requests == []


def test_search_words():
    provider, session = _provider({"/search.php": SEARCH_PAGE})

    results = provider.search_words("loved", "ESV")

    assert results == [
        SearchResult(verse="John 3:16", text="For God so loved the world", url=f"{BASE_URL}/john/3-16.htm"),
        SearchResult(verse="Romans 5:8", text="But God proves His love", url="https://biblehub.com/romans/5-8.htm"),
    ]
    assert session.requests[0]["params"] == {"q": "loved"}


def test_get_versions():
    provider, session = _provider({"/genesis/1-1.htm": VERSIONS_PAGE})

    versions = provider.get_versions()

    assert versions == [
        ProviderVersion(name="New International Version", value="niv", code="NIV", language="English"),
        ProviderVersion(name="English Standard Version", value="esv", code="ESV", language="English"),
    ]
    assert session.paths == ["/genesis/1-1.htm"]

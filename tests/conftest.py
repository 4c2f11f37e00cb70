# tests/conftest.py
"""
Shared fixtures: a fake HTTP session serving canned pages, and version
table files.
"""

from urllib.parse import urlsplit

import pytest

BASE_URL = "https://bible.test"


class FakeResponse:
    def __init__(self, text: str = "", status_code: int = 200):
        self.text = text
        self.status_code = status_code


class FakeSession:
    """
    Stand-in for requests.Session.

    Pages are keyed by URL path ("/esv/john/3.htm"). A value is either the
    HTML body or a (status_code, body) tuple. Unknown paths return 404.
    Every call is recorded in .requests.
    """

    def __init__(self, pages=None):
        self.pages = dict(pages or {})
        self.requests = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.requests.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        page = self.pages.get(urlsplit(url).path)
        if page is None:
            return FakeResponse("not found", 404)
        if isinstance(page, tuple):
            status, body = page
            return FakeResponse(body, status)
        return FakeResponse(page)

    @property
    def paths(self):
        return [urlsplit(r["url"]).path for r in self.requests]


@pytest.fixture
def session():
    return FakeSession()


VERSIONS_YAML = """\
- code: KJV
  name: King James Version
  language: English
  providers:
    biblegateway: KJV
    biblehub: kjv
    biblenow: en/bible/king-james-version
    biblecom: "1"
- code: esv
  name: English Standard Version
  language: English
  providers:
    biblegateway: ESV
    biblehub: esv
- code: TEST
  name: Test Version
  language: English
  providers:
    biblegateway: BG-TEST
    biblehub:
"""


@pytest.fixture
def versions_file(tmp_path):
    path = tmp_path / "versions.yml"
    path.write_text(VERSIONS_YAML, encoding="utf-8")
    return str(path)

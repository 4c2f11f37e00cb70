# bibleapi/utils/http_fetch.py
"""
HTTP GET of a provider page, parsed into a BeautifulSoup document.

Shared utility for all Bible providers. Each call makes exactly one
request; failures are raised to the caller and never retried here.

Usage:
    from bibleapi.utils.http_fetch import fetch_document

    soup = fetch_document(
        session,
        "https://biblehub.com/esv/john/3.htm",
        headers=HEADERS,
        timeout=15,
    )
    for p in soup.select("p.regular"):
        ...
"""

import logging
from typing import Optional

import requests
from bs4 import BeautifulSoup

from ..services.bible.errors import DocumentParseError, FetchError, HTTPStatusError

logger = logging.getLogger(__name__)


def fetch_document(
    session: requests.Session,
    url: str,
    params: Optional[dict] = None,
    headers: Optional[dict] = None,
    timeout: float = 15,
) -> BeautifulSoup:
    """
    GET a page and parse it as HTML.

    Behavior:
    - 200: body parsed with html.parser and returned
    - Any other status: HTTPStatusError (no retry)
    - Connection errors and timeouts: FetchError (no retry)

    Args:
        session: requests.Session (or anything with a compatible get())
        url: Page URL
        params: Query string parameters, encoded by requests
        headers: HTTP headers
        timeout: Request timeout in seconds

    Returns:
        Parsed BeautifulSoup document

    Raises:
        HTTPStatusError: On non-200 responses
        FetchError: On transport failures
        DocumentParseError: If the body cannot be parsed
    """
    logger.debug(f"Fetching {url} params={params}")

    try:
        response = session.get(url, params=params, headers=headers, timeout=timeout)
    except requests.Timeout:
        raise FetchError(url, f"timed out after {timeout}s")
    except requests.RequestException as e:
        raise FetchError(url, str(e))

    if response.status_code != 200:
        logger.warning(f"Failed to fetch {url}, status code: {response.status_code}")
        raise HTTPStatusError(response.status_code, url)

    try:
        return BeautifulSoup(response.text, "html.parser")
    except Exception as e:
        raise DocumentParseError(f"could not parse document from {url}: {e}")

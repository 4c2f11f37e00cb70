# bibleapi/services/bible/sanitizer.py
"""
HTML sanitizer for passage markup scraped from Bible Gateway.

Reduces an arbitrary fragment of third-party markup to a small, stable
tag subset suitable for API responses:

    h1, h2, h3, h4, p, span, i, br, sup

No attributes survive. Verse-number superscripts, paragraph/line structure,
headings and italics are kept; footnotes, cross-references and page chrome
are dropped.

The pipeline is idempotent: sanitize(sanitize(x)) == sanitize(x).

Usage:
    html = sanitize(passage_tag)            # mutates passage_tag in place
    html = sanitize("<div>...</div>")       # parses the string first
    html = sanitize(fragment, is_poetry=True)
"""

import logging
import re
from typing import Optional, Union

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from .errors import DocumentParseError

logger = logging.getLogger(__name__)


ALLOWED_TAGS = {"h1", "h2", "h3", "h4", "p", "span", "i", "br", "sup"}

# Removed entirely, subtree and all
DROPPED_TAGS = {"script", "style"}

UNWANTED_SELECTORS = ", ".join([
    ".footnote",
    ".footnotes",
    ".chapternum",
    ".crossreference",
    ".crossrefs",
    ".publisher-info-bottom",
    ".dropdown-version-switcher",
    ".passage-scroller",
    ".full-chap-link",
    ".other-translations",
])

OTHER_TRANSLATIONS_TEXT = "in all English translations"

POETRY_WRAPPERS = "div.poetry, p.line, span.indent-1"

# Styling spans flattened to their text (small caps LORD, words of Jesus)
TEXT_ONLY_SPANS = ".small-caps, .woj"

# Upper bound on redundant-span passes; each pass strips at least one level
MAX_UNWRAP_PASSES = 50

# "16", or a combined number such as "1-2" (hyphen or en dash)
VERSE_NUMBER_PATTERN = re.compile("^[0-9]+(?:[-\u2013][0-9]+)?$")

# Whitespace html.parser collapses when a string contains nothing else
PARSER_WHITESPACE = " \n\t\f\r"

Fragment = Union[str, bytes, BeautifulSoup, Tag]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _parse(fragment: Fragment) -> Tag:
    if isinstance(fragment, Tag):
        return fragment
    if isinstance(fragment, (str, bytes)):
        try:
            return BeautifulSoup(fragment, "html.parser")
        except Exception as e:
            raise DocumentParseError(f"could not parse fragment: {e}")
    raise DocumentParseError(f"cannot parse {type(fragment).__name__} as a document fragment")


def _new_br(root: Tag) -> Tag:
    top = root
    while top.parent is not None:
        top = top.parent
    if not isinstance(top, BeautifulSoup):
        top = BeautifulSoup("", "html.parser")
    return top.new_tag("br")


def _is_verse_number(sup: Tag) -> bool:
    # Class survives only on first pass; the number itself marks an already-clean one
    if "versenum" in (sup.get("class") or []):
        return True
    text = sup.get_text().replace("\u00a0", " ").strip()
    return VERSE_NUMBER_PATTERN.match(text) is not None


def detect_poetry(fragment: Tag) -> bool:
    """True when the passage is laid out as poetry (div.poetry blocks)."""
    return fragment.select_one("div.poetry") is not None


# ---------------------------------------------------------------------------
# Pipeline steps
# ---------------------------------------------------------------------------

def remove_unwanted_elements(root: Tag):
    """Drop footnotes, cross-references, navigation and non-verse superscripts."""
    for el in root.select(UNWANTED_SELECTORS):
        el.extract()

    for sup in root.find_all("sup"):
        if not _is_verse_number(sup):
            sup.extract()

    for a in root.find_all("a"):
        if OTHER_TRANSLATIONS_TEXT in a.get_text():
            a.extract()


def unwrap_poetry(root: Tag):
    """
    Turn stanza padding into <br/> and flatten poetry wrappers.

    Only the outermost wrapper is unwrapped. A line nested in a poetry
    block keeps its paragraph, so stanzas come out as <p> elements with
    <br/> between lines.
    """
    for p in root.select("p.top-1"):
        p.replace_with(_new_br(root))

    wrappers = root.select(POETRY_WRAPPERS)
    wrapper_ids = {id(el) for el in wrappers}
    outermost = [
        el for el in wrappers
        if not any(id(parent) in wrapper_ids for parent in el.parents)
    ]
    for el in outermost:
        el.unwrap()


def _strip_node(node):
    if isinstance(node, PreformattedString):
        # Comments, CDATA, doctypes, processing instructions
        node.extract()
        return
    if isinstance(node, NavigableString):
        return

    if node.name in DROPPED_TAGS:
        node.extract()
        return

    for child in list(node.contents):
        _strip_node(child)

    if node.name not in ALLOWED_TAGS:
        node.unwrap()


def strict_sanitize(root: Tag):
    """
    Reduce every descendant of root to the allow-list.

    Disallowed elements are unwrapped (children hoisted into the parent) so
    their text survives. script/style and comments are removed outright.
    """
    for child in list(root.contents):
        _strip_node(child)


def unwrap_text_only_spans(root: Tag):
    """Replace small-caps and words-of-Jesus spans with their plain text."""
    for el in root.select(TEXT_ONLY_SPANS):
        if el.parent is None:
            continue
        el.replace_with(el.get_text())


def _is_redundant_span(span: Tag) -> bool:
    has_child_span = False
    for child in span.contents:
        if isinstance(child, NavigableString):
            if child.strip():
                return False
        elif child.name == "span":
            has_child_span = True
        else:
            return False
    return has_child_span


def unwrap_redundant_spans(root: Tag) -> int:
    """
    Unwrap spans that only group other spans, until nothing changes.

    Returns:
        Number of passes that unwrapped something
    """
    passes = 0
    for _ in range(MAX_UNWRAP_PASSES):
        unwrapped = False
        for span in root.find_all("span"):
            if _is_redundant_span(span):
                span.unwrap()
                unwrapped = True
        if not unwrapped:
            break
        passes += 1
    else:
        logger.warning(f"Redundant span unwrap stopped after {MAX_UNWRAP_PASSES} passes")
    return passes


def remove_all_attributes(root: Tag):
    for tag in root.find_all(True):
        tag.attrs = {}


def remove_empty_paragraphs(root: Tag) -> bool:
    """Remove <p> elements with no text and no line break. Returns True if any were removed."""
    removed = False
    for p in root.find_all("p"):
        if p.parent is None:
            continue
        if not p.get_text().strip() and p.find("br") is None:
            p.extract()
            removed = True
    return removed


def normalize_whitespace(root: Tag):
    """
    Bring text nodes into the shape html.parser gives them on a re-parse.

    Adjacent strings are merged, non-breaking spaces become plain spaces,
    and a string holding only whitespace shrinks to "\\n" (if it has a
    newline) or a single space.
    """
    root.smooth()
    for node in list(root.descendants):
        if not isinstance(node, NavigableString) or isinstance(node, PreformattedString):
            continue

        text = str(node).replace("\u00a0", " ")
        if text and not text.strip(PARSER_WHITESPACE):
            text = "\n" if "\n" in text else " "
        if text != str(node):
            node.replace_with(text)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def sanitize(fragment: Fragment, is_poetry: Optional[bool] = None) -> str:
    """
    Sanitize a passage fragment.

    Args:
        fragment: Markup string/bytes, a BeautifulSoup document, or a Tag.
                  A Tag is rewritten in place and only its contents are
                  returned (the container itself is not part of the output).
        is_poetry: Force poetry handling on/off. None auto-detects
                   from div.poetry blocks.

    Returns:
        Clean markup, trimmed, with non-breaking spaces as plain spaces

    Raises:
        DocumentParseError: If the fragment cannot be parsed at all
    """
    root = _parse(fragment)

    if is_poetry is None:
        is_poetry = detect_poetry(root)

    remove_unwanted_elements(root)
    if is_poetry:
        unwrap_poetry(root)
    strict_sanitize(root)
    unwrap_text_only_spans(root)
    unwrap_redundant_spans(root)
    remove_all_attributes(root)
    if remove_empty_paragraphs(root):
        # A dropped <p> can leave its parent span holding only spans
        unwrap_redundant_spans(root)
    normalize_whitespace(root)

    return root.decode_contents().strip()


def sanitize_snippet(fragment: Fragment) -> str:
    """Sanitize a search-result snippet: no result extras, no headings."""
    root = _parse(fragment)
    for el in root.select(".bible-item-extras, h1, h2, h3, h4, h5, h6"):
        el.extract()
    return sanitize(root)

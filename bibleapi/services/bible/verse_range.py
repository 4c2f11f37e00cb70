# bibleapi/services/bible/verse_range.py
"""
Verse range and reference parsing.

Handles the verse part of a reference:
- Single verse: "16" -> (16, 16)
- Range within a chapter: "19-20" -> (19, 20)

Cross-chapter forms ("12-2:4") are rejected here. Bible Gateway is the only
provider that understands them, and it passes the raw reference straight
into its search query instead of parsing it.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .errors import InvalidChapter, InvalidRangeSpecifier, InvalidReference

# Sentinel end verse meaning "rest of chapter"
END_OF_CHAPTER = 999


@dataclass(frozen=True)
class VerseRange:
    """
    Inclusive range of verse numbers within one chapter.

    Attributes:
        start: First verse (>= 1)
        end: Last verse (>= start)
    """
    start: int
    end: int

    def __post_init__(self):
        if self.start < 1:
            raise InvalidRangeSpecifier(str(self.start), "verse numbers start at 1")
        if self.end < self.start:
            raise InvalidRangeSpecifier(f"{self.start}-{self.end}", "end before start")

    @classmethod
    def whole_chapter(cls) -> "VerseRange":
        return cls(1, END_OF_CHAPTER)

    @property
    def is_single(self) -> bool:
        return self.start == self.end

    def contains(self, verse: int) -> bool:
        return self.start <= verse <= self.end

    def __iter__(self):
        return iter(range(self.start, self.end + 1))

    def __str__(self) -> str:
        if self.is_single:
            return str(self.start)
        return f"{self.start}-{self.end}"


@dataclass
class VerseQuery:
    """
    A verse lookup request as received from a caller.

    Attributes:
        book: Book name as given ("John", "1 Samuel")
        chapter: Chapter as given ("3")
        verse_range: Verse specifier ("16", "16-18"), empty for whole chapter
        version: Unified version code ("ESV")
    """
    book: str
    chapter: str
    verse_range: Optional[str] = None
    version: str = ""

    @property
    def reference(self) -> str:
        """Human-readable reference: "John 3:16" or "John 3"."""
        if self.verse_range:
            return f"{self.book} {self.chapter}:{self.verse_range}"
        return f"{self.book} {self.chapter}"


def _parse_verse_number(token: str) -> int:
    token = token.strip()
    # ASCII digits only; int() would also take signs and other scripts' digits
    if not token.isascii() or not token.isdigit():
        raise InvalidRangeSpecifier(token, "not a base-10 integer")
    return int(token)


def parse_verse_range(spec: str) -> VerseRange:
    """
    Parse a verse specifier into an inclusive range.

    Args:
        spec: "N" or "A-B"

    Returns:
        VerseRange

    Raises:
        InvalidRangeSpecifier: If any token is not an integer, or A > B
    """
    if "-" in spec:
        parts = spec.split("-")
        if len(parts) != 2:
            raise InvalidRangeSpecifier(spec, "invalid range format")
        start = _parse_verse_number(parts[0])
        end = _parse_verse_number(parts[1])
        return VerseRange(start, end)

    verse = _parse_verse_number(spec)
    return VerseRange(verse, verse)


def resolve_verse_range(spec: Optional[str]) -> VerseRange:
    """Parse a verse specifier, defaulting to the whole chapter when empty."""
    if not spec or not spec.strip():
        return VerseRange.whole_chapter()
    return parse_verse_range(spec)


def parse_chapter(chapter: str) -> int:
    """
    Parse a chapter number.

    Raises:
        InvalidChapter: If the chapter is not a positive integer
    """
    value = str(chapter).strip()
    if not value.isascii() or not value.isdigit() or int(value) < 1:
        raise InvalidChapter(chapter)
    return int(value)


def split_reference(ref: str) -> Tuple[str, str, str]:
    """
    Split a reference string into book, chapter and verse parts.

    Book names may contain spaces ("1 John 3:16"), so the split happens at
    the last space.

    Examples:
        "John 3:16"      -> ("John", "3", "16")
        "1 John 3:16-18" -> ("1 John", "3", "16-18")
        "Psalm 23"       -> ("Psalm", "23", "")

    Raises:
        InvalidReference: If there is no space or the chapter is empty
    """
    ref = ref.strip()
    last_space = ref.rfind(" ")
    if last_space == -1:
        raise InvalidReference(ref, "missing space between book and chapter")

    book = ref[:last_space].strip()
    chapter, _, verse = ref[last_space + 1:].partition(":")

    if not chapter:
        raise InvalidReference(ref, "missing chapter")

    return book, chapter, verse

# bibleapi/services/bible/books.py
"""
Book name tables shared by the providers.

- USFM three-letter codes (Bible.com)
- Canonical 66-book Protestant order (BibleNow book index lookup)
- URL slugs (BibleHub)

Keys are lowercase full English names as users type them ("1 john",
"song of solomon").
"""

from .errors import UnknownBook


# Full book name to USFM code
BOOK_TO_USFM = {
    "genesis": "GEN",
    "exodus": "EXO",
    "leviticus": "LEV",
    "numbers": "NUM",
    "deuteronomy": "DEU",
    "joshua": "JOS",
    "judges": "JDG",
    "ruth": "RUT",
    "1 samuel": "1SA",
    "2 samuel": "2SA",
    "1 kings": "1KI",
    "2 kings": "2KI",
    "1 chronicles": "1CH",
    "2 chronicles": "2CH",
    "ezra": "EZR",
    "nehemiah": "NEH",
    "esther": "EST",
    "job": "JOB",
    "psalms": "PSA",
    "psalm": "PSA",
    "proverbs": "PRO",
    "ecclesiastes": "ECC",
    "song of solomon": "SNG",
    "song of songs": "SNG",
    "isaiah": "ISA",
    "jeremiah": "JER",
    "lamentations": "LAM",
    "ezekiel": "EZK",
    "daniel": "DAN",
    "hosea": "HOS",
    "joel": "JOL",
    "amos": "AMO",
    "obadiah": "OBA",
    "jonah": "JON",
    "micah": "MIC",
    "nahum": "NAM",
    "habakkuk": "HAB",
    "zephaniah": "ZEP",
    "haggai": "HAG",
    "zechariah": "ZEC",
    "malachi": "MAL",

    "matthew": "MAT",
    "mark": "MRK",
    "luke": "LUK",
    "john": "JHN",
    "acts": "ACT",
    "romans": "ROM",
    "1 corinthians": "1CO",
    "2 corinthians": "2CO",
    "galatians": "GAL",
    "ephesians": "EPH",
    "philippians": "PHP",
    "colossians": "COL",
    "1 thessalonians": "1TH",
    "2 thessalonians": "2TH",
    "1 timothy": "1TI",
    "2 timothy": "2TI",
    "titus": "TIT",
    "philemon": "PHM",
    "hebrews": "HEB",
    "james": "JAS",
    "1 peter": "1PE",
    "2 peter": "2PE",
    "1 john": "1JN",
    "2 john": "2JN",
    "3 john": "3JN",
    "jude": "JUD",
    "revelation": "REV",
}

# Standard order of books in Protestant bibles
STANDARD_BOOK_ORDER = [
    "genesis", "exodus", "leviticus", "numbers", "deuteronomy",
    "joshua", "judges", "ruth", "1 samuel", "2 samuel",
    "1 kings", "2 kings", "1 chronicles", "2 chronicles", "ezra",
    "nehemiah", "esther", "job", "psalms", "proverbs",
    "ecclesiastes", "song of solomon", "isaiah", "jeremiah",
    "lamentations", "ezekiel", "daniel", "hosea", "joel",
    "amos", "obadiah", "jonah", "micah", "nahum",
    "habakkuk", "zephaniah", "haggai", "zechariah", "malachi",
    "matthew", "mark", "luke", "john", "acts",
    "romans", "1 corinthians", "2 corinthians", "galatians", "ephesians",
    "philippians", "colossians", "1 thessalonians", "2 thessalonians",
    "1 timothy", "2 timothy", "titus", "philemon", "hebrews",
    "james", "1 peter", "2 peter", "1 john", "2 john",
    "3 john", "jude", "revelation",
]

# Alternate spellings accepted for the canonical index
BOOK_ALIASES = {
    "psalm": "psalms",
    "song of songs": "song of solomon",
}


def _key(book: str) -> str:
    return " ".join(book.lower().split())


def to_usfm(book: str) -> str:
    """
    Map a book name to its USFM code.

    "John" -> "JHN", "1 Samuel" -> "1SA"

    Raises:
        UnknownBook: If the name is not in the table
    """
    code = BOOK_TO_USFM.get(_key(book))
    if code is None:
        raise UnknownBook(book)
    return code


def canonical_index(book: str) -> int:
    """
    Return the 0-based position of a book in the Protestant canon.

    Raises:
        UnknownBook: If the name is not one of the 66 books
    """
    key = _key(book)
    key = BOOK_ALIASES.get(key, key)
    try:
        return STANDARD_BOOK_ORDER.index(key)
    except ValueError:
        raise UnknownBook(book) from None


def book_slug(book: str) -> str:
    """Lowercase slug with underscores: "1 John" -> "1_john"."""
    return book.strip().lower().replace(" ", "_")

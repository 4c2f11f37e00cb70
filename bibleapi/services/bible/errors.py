# bibleapi/services/bible/errors.py
"""
Exceptions raised by the Bible providers, sanitizer and version registry.

Every failure is returned to the immediate caller with enough context to
build a user-facing message. Nothing here is retried or swallowed; the
error_code and http_status class attributes are hints for the HTTP layer.
"""

from typing import Optional


class BibleError(Exception):
    """Base exception for Bible lookup errors."""
    error_code = "bible_error"
    http_status = 500


# ---------------------------------------------------------------------------
# Upstream / transport
# ---------------------------------------------------------------------------


class HTTPStatusError(BibleError):
    """Raised when a provider site answers with a non-200 status."""
    error_code = "upstream_status"
    http_status = 502

    def __init__(self, status_code: int, url: str = ""):
        self.status_code = status_code
        self.url = url
        super().__init__(f"failed to fetch {url or 'document'}, status code: {status_code}")


class FetchError(BibleError):
    """Raised when the request itself fails (connection error, timeout)."""
    error_code = "upstream_unreachable"
    http_status = 502

    def __init__(self, url: str, detail: str = ""):
        self.url = url
        super().__init__(f"request to {url} failed: {detail}" if detail else f"request to {url} failed")


class DocumentParseError(BibleError):
    """Raised when markup cannot be parsed as a document fragment."""
    error_code = "document_parse_error"
    http_status = 502


# ---------------------------------------------------------------------------
# Caller input
# ---------------------------------------------------------------------------


class InvalidInputError(BibleError):
    """Base class for errors caused by the caller's input."""
    error_code = "invalid_input"
    http_status = 400


class InvalidRangeSpecifier(InvalidInputError):
    """Raised when a verse range token is not a base-10 integer."""
    error_code = "invalid_verse_range"

    def __init__(self, token: str, detail: str = ""):
        self.token = token
        message = f"invalid verse range: {token!r}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


InvalidRange = InvalidRangeSpecifier


class InvalidReference(InvalidInputError):
    """Raised when a 'Book Chapter:Verse' reference cannot be split."""
    error_code = "invalid_reference"

    def __init__(self, value: str, detail: str = ""):
        self.value = value
        super().__init__(f"invalid verse reference format ({value}): {detail}" if detail
                         else f"invalid verse reference format: {value}")


class InvalidChapter(InvalidInputError):
    """Raised when a chapter is not an integer."""
    error_code = "invalid_chapter"

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"invalid chapter format: {value!r}")


class UnknownBook(InvalidInputError):
    """Raised when a book name has no mapping in a provider's book table."""
    error_code = "unknown_book"

    def __init__(self, book: str):
        self.book = book
        super().__init__(f"unknown book: {book}")


# ---------------------------------------------------------------------------
# Lookup results
# ---------------------------------------------------------------------------


class BookIndexOutOfRange(BibleError):
    """Raised when a version index lists fewer books than the canon index needs."""
    error_code = "book_index_out_of_range"
    http_status = 404

    def __init__(self, index: int, found: int):
        self.index = index
        self.found = found
        super().__init__(f"book index {index} out of range (found {found} books)")


class VerseNotFound(BibleError):
    """Raised when a valid request produced no verse text."""
    error_code = "verse_not_found"
    http_status = 404

    def __init__(self, reference: str = ""):
        self.reference = reference
        super().__init__(f"verse not found: {reference}" if reference else "verse not found")


class UnsupportedOperation(BibleError):
    """Raised when a provider has no surface for an operation."""
    error_code = "unsupported_operation"
    http_status = 501

    def __init__(self, provider: str, operation: str):
        self.provider = provider
        self.operation = operation
        super().__init__(f"{operation} not supported on {provider}")


# ---------------------------------------------------------------------------
# Registry / manager
# ---------------------------------------------------------------------------


class VersionLoadError(BibleError):
    """Raised when the version table cannot be read or has a bad shape."""
    error_code = "version_config_error"

    def __init__(self, path: str, detail: str):
        self.path = path
        super().__init__(f"failed to load versions config {path}: {detail}")


class VersionNotFound(BibleError):
    """Raised when a unified version code is absent from the table."""
    error_code = "version_not_found"
    http_status = 404

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"version not found: {code}")


class NoSuitableProvider(BibleError):
    """Raised when no preferred provider maps a version."""
    error_code = "no_suitable_provider"
    http_status = 404

    def __init__(self, code: str, preferred: Optional[list] = None):
        self.code = code
        self.preferred = list(preferred or [])
        super().__init__(
            f"no suitable provider for version {code} (tried: {', '.join(self.preferred)})"
        )


class ProviderNotFound(BibleError):
    """Raised when a provider name is not registered with the manager."""
    error_code = "provider_not_found"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"provider not found: {name}")


class NoPrimaryProvider(BibleError):
    """Raised when the manager has no primary provider configured."""
    error_code = "no_primary_provider"

    def __init__(self):
        super().__init__("no primary provider configured")


class AllProvidersFailed(BibleError):
    """Raised when every prioritized provider failed for a batch."""
    error_code = "all_providers_failed"
    http_status = 502

    def __init__(self, operation: str, attempted: Optional[list] = None):
        self.operation = operation
        self.attempted = list(attempted or [])
        super().__init__(
            f"failed to {operation} from any provider (tried: {', '.join(self.attempted) or 'none'})"
        )

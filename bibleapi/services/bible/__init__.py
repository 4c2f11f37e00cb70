# bibleapi/services/bible/__init__.py
"""
Scripture lookup engine.

This package provides:
- ProviderManager: Single and batch verse lookup / word search with fallback
- VersionRegistry: Unified version codes mapped to provider codes
- Provider: Base class for the four scraping providers
- GatewayProvider, HubProvider, ComProvider, NowProvider: Site scrapers
- sanitize: Reduce passage HTML to a small allow-listed tag set
- parse_verse_range / split_reference: Reference parsing
- BibleError and subclasses: Failure taxonomy
"""

from .errors import (
    BibleError,
    HTTPStatusError,
    FetchError,
    DocumentParseError,
    InvalidInputError,
    InvalidRangeSpecifier,
    InvalidRange,
    InvalidReference,
    InvalidChapter,
    UnknownBook,
    BookIndexOutOfRange,
    VerseNotFound,
    UnsupportedOperation,
    VersionLoadError,
    VersionNotFound,
    NoSuitableProvider,
    ProviderNotFound,
    NoPrimaryProvider,
    AllProvidersFailed,
)
from .verse_range import (
    END_OF_CHAPTER,
    VerseRange,
    VerseQuery,
    parse_verse_range,
    resolve_verse_range,
    parse_chapter,
    split_reference,
)
from .books import to_usfm, canonical_index, book_slug
from .sanitizer import sanitize, sanitize_snippet
from .provider import Provider, ProviderVersion, SearchResult
from .providers import (
    GatewayProvider,
    HubProvider,
    ComProvider,
    NowProvider,
    PROVIDER_CLASSES,
)
from .version_registry import (
    UnifiedVersion,
    ProviderSelection,
    VersionRegistry,
    DEFAULT_PROVIDER_ORDER,
    DEFAULT_PRIORITY_ORDER,
    load_registry,
    reload_registry,
)
from .provider_manager import ProviderManager, default_manager

__all__ = [
    # Manager (primary interface)
    "ProviderManager",
    "default_manager",
    # Registry
    "UnifiedVersion",
    "ProviderSelection",
    "VersionRegistry",
    "DEFAULT_PROVIDER_ORDER",
    "DEFAULT_PRIORITY_ORDER",
    "load_registry",
    "reload_registry",
    # Providers
    "Provider",
    "ProviderVersion",
    "SearchResult",
    "GatewayProvider",
    "HubProvider",
    "ComProvider",
    "NowProvider",
    "PROVIDER_CLASSES",
    # Sanitizer
    "sanitize",
    "sanitize_snippet",
    # Parsing
    "END_OF_CHAPTER",
    "VerseRange",
    "VerseQuery",
    "parse_verse_range",
    "resolve_verse_range",
    "parse_chapter",
    "split_reference",
    "to_usfm",
    "canonical_index",
    "book_slug",
    # Errors
    "BibleError",
    "HTTPStatusError",
    "FetchError",
    "DocumentParseError",
    "InvalidInputError",
    "InvalidRangeSpecifier",
    "InvalidRange",
    "InvalidReference",
    "InvalidChapter",
    "UnknownBook",
    "BookIndexOutOfRange",
    "VerseNotFound",
    "UnsupportedOperation",
    "VersionLoadError",
    "VersionNotFound",
    "NoSuitableProvider",
    "ProviderNotFound",
    "NoPrimaryProvider",
    "AllProvidersFailed",
]

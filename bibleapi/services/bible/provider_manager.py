# bibleapi/services/bible/provider_manager.py
"""
Provider manager: the entry point for verse lookup and word search.

Holds the registered providers by name and a primary provider for
single lookups. Batch lookups walk the registry's prioritized provider
list and fall back to the next provider when one fails.

Usage:
    manager = default_manager()

    # Single lookup on the primary provider (Bible Gateway)
    html = manager.get_verse("John", "3", "16", "ESV")

    # Batch with fallback across providers
    for ref, content in manager.get_verses(["John 3:16", "Psalm 23"], "KJV"):
        print(ref, content)
"""

import logging
from typing import Dict, List, Optional, Tuple

from .errors import AllProvidersFailed, BibleError, NoPrimaryProvider, ProviderNotFound
from .provider import Provider, SearchResult
from .providers import ComProvider, GatewayProvider, HubProvider, NowProvider
from .verse_range import split_reference
from .version_registry import ProviderSelection, VersionRegistry, load_registry

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER_NAME = "biblegateway"


class ProviderManager:
    """
    Registry of named providers plus a primary one.

    Args:
        primary: Provider used by get_verse() and search_words()
        registry: Version registry for batch lookups; the process-wide
                  registry is loaded on first use when omitted
    """

    def __init__(self, primary: Optional[Provider] = None, registry: Optional[VersionRegistry] = None):
        self.primary = primary
        self._registry = registry
        self._providers: Dict[str, Provider] = {}

    @property
    def registry(self) -> VersionRegistry:
        if self._registry is None:
            self._registry = load_registry()
        return self._registry

    def register_provider(self, name: str, provider: Provider):
        self._providers[name] = provider

    def get_provider(self, name: str) -> Provider:
        provider = self._providers.get(name)
        if provider is None:
            raise ProviderNotFound(name)
        return provider

    @property
    def provider_names(self) -> List[str]:
        return list(self._providers)

    # ---------------------------------------------------------------------
    # Primary provider
    # ---------------------------------------------------------------------

    def get_verse(self, book: str, chapter: str, verse: str, version: str) -> str:
        if self.primary is None:
            raise NoPrimaryProvider()
        return self.primary.get_verse(book, chapter, verse, version)

    def search_words(self, query: str, version: str) -> List[SearchResult]:
        if self.primary is None:
            raise NoPrimaryProvider()
        return self.primary.search_words(query, version)

    # ---------------------------------------------------------------------
    # Batch lookups with fallback
    # ---------------------------------------------------------------------

    def _selections(self, version: str, preferred: Optional[List[str]]) -> List[ProviderSelection]:
        selections = self.registry.get_prioritized_providers(version, preferred)
        logger.debug(f"Provider order for {version}: {[s.name for s in selections]}")
        return selections

    def get_verses(
        self,
        refs: List[str],
        version: str,
        preferred: Optional[List[str]] = None,
    ) -> List[Tuple[str, str]]:
        """
        Look up several references, falling back across providers.

        Every reference must come from the same provider. If a provider
        fails on any reference, the whole batch is retried on the next
        provider in priority order.

        Args:
            refs: References such as "John 3:16" or "Psalm 23"
            version: Unified version code
            preferred: Provider names in priority order (registry default if None)

        Returns:
            List of (reference, content) in input order

        Raises:
            InvalidReference: If a reference cannot be split; not retried
            VersionNotFound / NoSuitableProvider: From the registry
            AllProvidersFailed: If every provider failed; the last
                                provider error is chained as __cause__
        """
        if not refs:
            return []

        parsed = [(ref, split_reference(ref)) for ref in refs]
        selections = self._selections(version, preferred)

        last_error: Optional[BibleError] = None
        for selection in selections:
            provider = self._providers.get(selection.name)
            if provider is None:
                last_error = ProviderNotFound(selection.name)
                logger.warning(f"Provider {selection.name} is not registered, skipping")
                continue

            try:
                results = [
                    (ref, provider.get_verse(book, chapter, verse, selection.version_code))
                    for ref, (book, chapter, verse) in parsed
                ]
            except BibleError as e:
                last_error = e
                logger.warning(f"Provider {selection.name} failed for {version}: {e}")
                continue

            logger.info(f"Fetched {len(results)} references from {selection.name} ({selection.version_code})")
            return results

        raise AllProvidersFailed("retrieve verses", [s.name for s in selections]) from last_error

    def search_words_all(
        self,
        words: List[str],
        version: str,
        preferred: Optional[List[str]] = None,
    ) -> List[SearchResult]:
        """
        Search several words or phrases, falling back across providers.

        Same policy as get_verses(): a provider that fails (including one
        with no search page) hands the whole batch to the next one.

        Returns:
            Results for all words, flattened, in input order
        """
        if not words:
            return []

        selections = self._selections(version, preferred)

        last_error: Optional[BibleError] = None
        for selection in selections:
            provider = self._providers.get(selection.name)
            if provider is None:
                last_error = ProviderNotFound(selection.name)
                continue

            try:
                results = []
                for word in words:
                    results.extend(provider.search_words(word, selection.version_code))
            except BibleError as e:
                last_error = e
                logger.warning(f"Search on {selection.name} failed: {e}")
                continue

            return results

        raise AllProvidersFailed("search words", [s.name for s in selections]) from last_error


def default_manager(registry: Optional[VersionRegistry] = None) -> ProviderManager:
    """
    Manager with all four providers registered, Bible Gateway as primary.

    Providers take their base URLs and timeout from bibleapi.config.
    """
    gateway = GatewayProvider()
    manager = ProviderManager(primary=gateway, registry=registry)
    manager.register_provider(DEFAULT_PROVIDER_NAME, gateway)

    for provider in (HubProvider(), NowProvider(), ComProvider()):
        manager.register_provider(provider.name, provider)

    return manager

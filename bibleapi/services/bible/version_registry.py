# bibleapi/services/bible/version_registry.py
"""
Version registry: unified version codes mapped to provider-specific codes.

The table is a YAML list loaded once and never modified afterwards:

    - code: ESV
      name: English Standard Version
      language: English
      providers:
        biblegateway: ESV
        biblehub: esv
        biblenow: en/bible/english-standard-version

Lookups are case-insensitive on the unified code. The registry also
decides which provider to ask, and in what order, for a given version.

Usage:
    registry = load_registry()
    selection = registry.select_provider("ESV")
    # ProviderSelection(name="biblegateway", version_code="ESV")
"""

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

import yaml

from ... import config
from .errors import NoSuitableProvider, VersionLoadError, VersionNotFound

logger = logging.getLogger(__name__)


# Order used by select_provider() when the caller has no preference
DEFAULT_PROVIDER_ORDER = ["biblegateway", "biblehub", "biblenow"]

# Order used by get_prioritized_providers(); Bible.com is last resort
DEFAULT_PRIORITY_ORDER = ["biblegateway", "biblehub", "biblenow", "biblecom"]


@dataclass(frozen=True)
class UnifiedVersion:
    """A Bible version and its code on each provider."""
    code: str
    name: str = ""
    language: str = ""
    providers: Mapping[str, str] = field(default_factory=dict)

    def provider_code(self, provider: str) -> str:
        """Provider-specific code, or "" when the provider has no mapping."""
        return self.providers.get(provider) or ""


@dataclass(frozen=True)
class ProviderSelection:
    """A provider to query and the version code to send it."""
    name: str
    version_code: str


class ReadWriteLock:
    """
    Many readers or one writer.

    Writers wait for active readers to drain; readers wait while a writer
    holds the lock.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writing = False

    @contextmanager
    def read_locked(self):
        with self._cond:
            while self._writing:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write_locked(self):
        with self._cond:
            while self._writing or self._readers:
                self._cond.wait()
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def _scalar(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _parse_entry(entry, position: int, path: str) -> UnifiedVersion:
    if not isinstance(entry, dict):
        raise VersionLoadError(path, f"entry {position} is not a mapping")

    code = _scalar(entry.get("code"))
    if not code:
        raise VersionLoadError(path, f"entry {position} has no code")

    providers = entry.get("providers") or {}
    if not isinstance(providers, dict):
        raise VersionLoadError(path, f"providers for {code} is not a mapping")

    return UnifiedVersion(
        code=code,
        name=_scalar(entry.get("name")),
        language=_scalar(entry.get("language")),
        providers=MappingProxyType({
            str(name): _scalar(value) for name, value in providers.items()
        }),
    )


def parse_versions(data, path: str = "<memory>") -> List[UnifiedVersion]:
    """
    Validate parsed YAML and build the version list.

    Raises:
        VersionLoadError: If the top level is not a list or any entry is malformed
    """
    if not isinstance(data, list):
        raise VersionLoadError(path, "top level must be a list of versions")
    return [_parse_entry(entry, i, path) for i, entry in enumerate(data)]


def read_versions_file(path: str) -> List[UnifiedVersion]:
    """
    Read and validate a version table.

    Raises:
        VersionLoadError: On a missing file, invalid YAML, or a bad shape
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise VersionLoadError(path, f"failed to read versions config: {e}")
    except yaml.YAMLError as e:
        raise VersionLoadError(path, f"failed to parse versions config: {e}")

    return parse_versions(data, path)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

class VersionRegistry:
    """
    Read-only table of unified versions.

    Construction either fully succeeds or raises VersionLoadError; a
    partially loaded registry is never returned. When two entries share a
    code, the later one wins.

    Args:
        path: YAML file with the version table
    """

    def __init__(self, path: str):
        self.path = path
        self._lock = ReadWriteLock()
        self._versions: List[UnifiedVersion] = []
        self._by_code: Dict[str, UnifiedVersion] = {}

        versions = read_versions_file(path)

        with self._lock.write_locked():
            self._versions = versions
            for version in versions:
                key = version.code.upper()
                if key in self._by_code:
                    logger.warning(f"Duplicate version code {version.code} in {path}; using the last entry")
                self._by_code[key] = version

        logger.info(f"Loaded {len(self._versions)} versions from {path}")

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._versions)

    def get_all(self) -> List[UnifiedVersion]:
        """All versions in file order."""
        with self._lock.read_locked():
            return list(self._versions)

    def get(self, code: str) -> Optional[UnifiedVersion]:
        with self._lock.read_locked():
            return self._by_code.get((code or "").upper())

    def get_provider_code(self, unified_code: str, provider: str) -> str:
        """
        Translate a unified code for one provider.

        Never fails: an unknown version, or a version with no mapping for
        this provider, passes the unified code through unchanged.
        """
        if not unified_code:
            return ""

        with self._lock.read_locked():
            version = self._by_code.get(unified_code.upper())

        if version is None:
            return unified_code
        return version.provider_code(provider) or unified_code

    def _matching(self, unified_code: str, order: List[str]) -> List[ProviderSelection]:
        with self._lock.read_locked():
            version = self._by_code.get((unified_code or "").upper())

        if version is None:
            raise VersionNotFound(unified_code)

        return [
            ProviderSelection(name=name, version_code=version.provider_code(name))
            for name in order
            if version.provider_code(name)
        ]

    def select_provider(
        self,
        unified_code: str,
        preferred: Optional[List[str]] = None,
    ) -> ProviderSelection:
        """
        Pick the first provider, in preference order, that carries this version.

        Args:
            unified_code: Unified version code (case-insensitive)
            preferred: Provider names in priority order; defaults to
                       biblegateway, biblehub, biblenow

        Raises:
            VersionNotFound: If the version is not in the table
            NoSuitableProvider: If no preferred provider maps the version
        """
        order = preferred or DEFAULT_PROVIDER_ORDER
        matches = self._matching(unified_code, order)
        if not matches:
            raise NoSuitableProvider(unified_code, order)
        return matches[0]

    def get_prioritized_providers(
        self,
        unified_code: str,
        preferred: Optional[List[str]] = None,
    ) -> List[ProviderSelection]:
        """
        Every provider that carries this version, in preference order.

        Same failures as select_provider(). The default order adds biblecom
        after the other three.
        """
        order = preferred or DEFAULT_PRIORITY_ORDER
        matches = self._matching(unified_code, order)
        if not matches:
            raise NoSuitableProvider(unified_code, order)
        return matches


@lru_cache(maxsize=None)
def _cached_registry(path: str) -> VersionRegistry:
    return VersionRegistry(path)


def load_registry(path: Optional[str] = None) -> VersionRegistry:
    """Process-wide registry, loaded once per path (default: BIBLE_VERSIONS_FILE)."""
    return _cached_registry(path or config.VERSIONS_FILE)


def reload_registry(path: Optional[str] = None) -> VersionRegistry:
    """Clear the cached registries and load this one again."""
    _cached_registry.cache_clear()
    return load_registry(path)

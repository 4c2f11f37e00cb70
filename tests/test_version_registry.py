# tests/test_version_registry.py
"""
Tests for version_registry.py - loading, code translation and provider
selection.
"""

import threading

import pytest

from bibleapi import config
from bibleapi.services.bible.errors import NoSuitableProvider, VersionLoadError, VersionNotFound
from bibleapi.services.bible.version_registry import (
    ProviderSelection,
    ReadWriteLock,
    VersionRegistry,
    load_registry,
    parse_versions,
    reload_registry,
)


@pytest.fixture
def registry(versions_file):
    return VersionRegistry(versions_file)


def _write(tmp_path, text):
    path = tmp_path / "versions.yml"
    path.write_text(text, encoding="utf-8")
    return str(path)


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def test_loads_all_entries_in_file_order(registry):
    assert len(registry) == 3
    assert [v.code for v in registry.get_all()] == ["KJV", "esv", "TEST"]

    kjv = registry.get("kjv")
    assert kjv.name == "King James Version"
    assert kjv.providers["biblecom"] == "1"


def test_get_all_returns_a_copy(registry):
    versions = registry.get_all()
    versions.clear()
    assert len(registry.get_all()) == 3


def test_provider_mapping_is_read_only(registry):
    with pytest.raises(TypeError):
        registry.get("KJV").providers["biblehub"] = "changed"


def test_missing_file(tmp_path):
    with pytest.raises(VersionLoadError) as exc:
        VersionRegistry(str(tmp_path / "nope.yml"))
    assert "failed to read" in str(exc.value)


def test_malformed_yaml(tmp_path):
    path = _write(tmp_path, "- code: KJV\n  providers: [unclosed\n")
    with pytest.raises(VersionLoadError) as exc:
        VersionRegistry(path)
    assert "failed to parse" in str(exc.value)


def test_top_level_must_be_a_list(tmp_path):
    with pytest.raises(VersionLoadError):
        VersionRegistry(_write(tmp_path, "code: KJV\n"))
    with pytest.raises(VersionLoadError):
        VersionRegistry(_write(tmp_path, ""))


def test_entries_need_a_code():
    with pytest.raises(VersionLoadError):
        parse_versions([{"name": "Nameless"}])
    with pytest.raises(VersionLoadError):
        parse_versions(["KJV"])
    with pytest.raises(VersionLoadError):
        parse_versions([{"code": "KJV", "providers": ["biblehub"]}])


def test_numeric_provider_codes_become_strings():
    versions = parse_versions([{"code": "NIV", "providers": {"biblecom": 111}}])
    assert versions[0].provider_code("biblecom") == "111"


def test_duplicate_codes_last_entry_wins(tmp_path):
    path = _write(tmp_path, (
        "- code: KJV\n  providers:\n    biblehub: old\n"
        "- code: kjv\n  providers:\n    biblehub: new\n"
    ))
    registry = VersionRegistry(path)

    assert len(registry) == 2
    assert registry.get_provider_code("KJV", "biblehub") == "new"


# ---------------------------------------------------------------------------
# get_provider_code
# ---------------------------------------------------------------------------

def test_provider_code_lookup(registry):
    assert registry.get_provider_code("KJV", "biblehub") == "kjv"
    assert registry.get_provider_code("kjv", "biblenow") == "en/bible/king-james-version"


def test_lookup_is_case_insensitive(registry):
    assert registry.get_provider_code("ESV", "biblehub") == "esv"
    assert registry.get("Esv").code == "esv"


def test_unknown_version_passes_through(registry):
    assert registry.get_provider_code("UNKNOWN", "biblehub") == "UNKNOWN"
    assert registry.get("UNKNOWN") is None


def test_missing_or_empty_mapping_passes_through(registry):
    assert registry.get_provider_code("TEST", "biblehub") == "TEST"
    assert registry.get_provider_code("ESV", "biblecom") == "ESV"


def test_empty_code_gives_empty_string(registry):
    assert registry.get_provider_code("", "biblehub") == ""


# ---------------------------------------------------------------------------
# Provider selection
# ---------------------------------------------------------------------------

def test_select_provider_default_order(registry):
    assert registry.select_provider("KJV") == ProviderSelection("biblegateway", "KJV")
    assert registry.select_provider("test") == ProviderSelection("biblegateway", "BG-TEST")


def test_select_provider_honors_preference(registry):
    selection = registry.select_provider("KJV", ["biblehub", "biblegateway"])
    assert selection == ProviderSelection("biblehub", "kjv")


def test_select_provider_skips_empty_mappings(registry):
    selection = registry.select_provider("TEST", ["biblehub", "biblegateway"])
    assert selection.name == "biblegateway"


def test_select_provider_default_order_excludes_biblecom(tmp_path):
    registry = VersionRegistry(_write(tmp_path, "- code: ONLYCOM\n  providers:\n    biblecom: '42'\n"))

    with pytest.raises(NoSuitableProvider):
        registry.select_provider("ONLYCOM")
    assert registry.get_prioritized_providers("ONLYCOM") == [ProviderSelection("biblecom", "42")]


def test_unknown_version_fails_selection(registry):
    with pytest.raises(VersionNotFound):
        registry.select_provider("NOPE")
    with pytest.raises(VersionNotFound):
        registry.get_prioritized_providers("NOPE")


def test_no_suitable_provider(registry):
    with pytest.raises(NoSuitableProvider) as exc:
        registry.select_provider("ESV", ["biblecom"])
    assert exc.value.preferred == ["biblecom"]


def test_prioritized_providers(registry):
    assert registry.get_prioritized_providers("KJV") == [
        ProviderSelection("biblegateway", "KJV"),
        ProviderSelection("biblehub", "kjv"),
        ProviderSelection("biblenow", "en/bible/king-james-version"),
        ProviderSelection("biblecom", "1"),
    ]
    assert registry.get_prioritized_providers("KJV", ["biblecom", "biblehub"]) == [
        ProviderSelection("biblecom", "1"),
        ProviderSelection("biblehub", "kjv"),
    ]


# ---------------------------------------------------------------------------
# Process-wide registry
# ---------------------------------------------------------------------------

def test_load_registry_is_cached(versions_file):
    first = reload_registry(versions_file)
    assert load_registry(versions_file) is first

    reloaded = reload_registry(versions_file)
    assert reloaded is not first
    assert len(reloaded) == 3


def test_default_path_shares_the_cached_registry():
    """load_registry() and load_registry(VERSIONS_FILE) are the same registry."""
    registry = reload_registry()

    assert load_registry(config.VERSIONS_FILE) is registry
    assert load_registry() is registry
    assert registry.select_provider("ESV").name == "biblegateway"
    assert registry.get_provider_code("NIV", "biblecom") == "111"


# ---------------------------------------------------------------------------
# Concurrency
# ---------------------------------------------------------------------------

def test_concurrent_reads(registry):
    errors = []

    def reader():
        try:
            for _ in range(200):
                assert registry.get_provider_code("KJV", "biblehub") == "kjv"
                assert registry.select_provider("ESV").version_code == "ESV"
        except AssertionError as e:
            errors.append(e)

    threads = [threading.Thread(target=reader) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []


def test_write_lock_excludes_readers():
    lock = ReadWriteLock()
    events = []

    with lock.write_locked():
        t = threading.Thread(target=lambda: _read(lock, events))
        t.start()
        t.join(timeout=0.1)
        events.append("writer done")
    t.join()

    assert events == ["writer done", "read"]


def _read(lock, events):
    with lock.read_locked():
        events.append("read")

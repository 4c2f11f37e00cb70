#!/usr/bin/env python3
"""
Refresh the version table from the providers' own version listings.

Scrapes each provider's version page, merges the results into the
existing table by unified code, and writes the table back sorted by code.
Existing entries and mappings are kept; providers that fail are logged
and skipped.

Usage:
    bible-update-versions
    bible-update-versions --output bibleapi/data/versions.yml
    bible-update-versions --providers biblegateway biblehub
    python -m bibleapi.scripts.update_versions
"""

import argparse
import copy
import logging
import os
import sys
from typing import Dict, List

import yaml

from bibleapi import config
from bibleapi.services.bible.errors import BibleError
from bibleapi.services.bible.provider import Provider, ProviderVersion
from bibleapi.services.bible.providers import PROVIDER_CLASSES

logger = logging.getLogger(__name__)

# Bible Gateway's names and languages are trusted over the other sites'
AUTHORITATIVE_PROVIDER = "biblegateway"

PLACEHOLDER_LANGUAGES = {"", "English", "Unknown"}


def load_existing(path: str) -> List[dict]:
    """
    Read the current table, tolerating a missing or malformed file.

    Returns:
        Entries that have a code, or [] if the file can't be used
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        logger.warning(f"Could not read existing config {path}: {e}")
        return []
    except yaml.YAMLError as e:
        logger.warning(f"Failed to parse existing config {path}: {e}")
        return []

    if not isinstance(data, list):
        logger.warning(f"Existing config {path} is not a list, starting fresh")
        return []

    entries = [e for e in data if isinstance(e, dict) and e.get("code")]
    logger.info(f"Loaded {len(entries)} existing versions from {path}")
    return entries


def _apply(entry: dict, provider_name: str, version: ProviderVersion):
    entry["providers"][provider_name] = version.value

    if provider_name == AUTHORITATIVE_PROVIDER:
        if version.name:
            entry["name"] = version.name
        if version.language and version.language != "Unknown":
            entry["language"] = version.language
        return

    if (entry.get("language") or "") in PLACEHOLDER_LANGUAGES:
        if version.language and version.language != "English":
            entry["language"] = version.language
    if not entry.get("name"):
        entry["name"] = version.name


def merge_versions(
    existing: List[dict],
    provider_versions: Dict[str, List[ProviderVersion]],
) -> List[dict]:
    """
    Merge scraped versions into the existing table.

    Rules:
    - Entries are keyed by upper-cased code; a new code keeps the casing
      the provider gave it
    - providers[<provider>] is set to the provider-native value
    - biblegateway overrides name, and language unless it is "Unknown"
    - Other providers only fill a missing name, and only replace an
      empty/English/Unknown language with a more specific one

    Args:
        existing: Entries as read from the YAML file (not modified)
        provider_versions: Provider name -> its scraped versions, applied
                           in dict order

    Returns:
        Merged entries sorted by upper-cased code
    """
    merged: Dict[str, dict] = {}

    for entry in existing:
        entry = copy.deepcopy(entry)
        entry["code"] = str(entry["code"])
        if not isinstance(entry.get("providers"), dict):
            entry["providers"] = {}
        merged[entry["code"].upper()] = entry

    for provider_name, versions in provider_versions.items():
        for version in versions:
            key = version.code.upper()
            if not key:
                continue

            if key not in merged:
                merged[key] = {
                    "code": version.code,
                    "name": version.name,
                    "language": version.language,
                    "providers": {},
                }
            _apply(merged[key], provider_name, version)

    return [merged[key] for key in sorted(merged)]


def _ordered(entry: dict) -> dict:
    out = {
        "code": entry["code"],
        "name": entry.get("name") or "",
        "language": entry.get("language") or "",
        "providers": dict(sorted((entry.get("providers") or {}).items())),
    }
    for key, value in entry.items():
        if key not in out:
            out[key] = value
    return out


def write_versions(entries: List[dict], path: str):
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(
            [_ordered(e) for e in entries],
            f,
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )


def run(providers: Dict[str, Provider], output_path: str) -> List[dict]:
    """
    Scrape every provider and rewrite the version table.

    Returns:
        The entries written
    """
    logger.info("Fetching Bible versions from all providers...")
    existing = load_existing(output_path)

    scraped: Dict[str, List[ProviderVersion]] = {}
    for name, provider in providers.items():
        logger.info(f"Fetching versions from {name}...")
        try:
            scraped[name] = provider.get_versions()
        except BibleError as e:
            logger.error(f"Error fetching versions from {name}: {e}")
            continue
        logger.info(f"Found {len(scraped[name])} versions from {name}")

    merged = merge_versions(existing, scraped)
    write_versions(merged, output_path)

    logger.info(f"Updated {output_path} with {len(merged)} versions")
    return merged


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Refresh the Bible version table from provider sites",
    )
    parser.add_argument(
        "--output",
        default=config.VERSIONS_FILE,
        help=f"Version table to update (default: {config.VERSIONS_FILE})",
    )
    parser.add_argument(
        "--providers",
        nargs="+",
        choices=list(PROVIDER_CLASSES),
        default=list(PROVIDER_CLASSES),
        metavar="PROVIDER",
        help=f"Providers to scrape (default: all of {', '.join(PROVIDER_CLASSES)})",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )

    providers = {name: PROVIDER_CLASSES[name]() for name in args.providers}

    try:
        run(providers, args.output)
    except OSError as e:
        logger.error(f"Failed to write {args.output}: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

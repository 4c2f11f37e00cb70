# bibleapi/utils/__init__.py
"""Shared helpers with no knowledge of any one provider."""

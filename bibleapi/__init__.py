# bibleapi/__init__.py
"""
Bible API service: scripture lookup across scraped provider sites.

See bibleapi.services.bible for the lookup engine.
"""

__version__ = "1.0.0"

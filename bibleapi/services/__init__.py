# bibleapi/services/__init__.py

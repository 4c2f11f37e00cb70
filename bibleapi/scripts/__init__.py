# bibleapi/scripts/__init__.py

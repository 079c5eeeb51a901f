"""Common literal values used across docs_pages.

These constants keep delimiters, suffixes and artifact names centralized so
the extractor, renderer, publisher and tests can import the same values
without drifting. Intended for internal use within the docs_pages package.

Examples
--------
>>> from docs_pages import _constants
>>> _constants.NAV_INDEX_FILENAME
'navigation.json'
>>> "guides/setup" + _constants.OUTPUT_SUFFIX
'guides/setup.html'
"""

FRONT_MATTER_DELIMITER = "---"
FRONT_MATTER_CLOSERS = ("---", "...")
PAGE_SUFFIXES = (".md", ".markdown")
LINKABLE_SUFFIXES = (*PAGE_SUFFIXES, ".html")
OUTPUT_SUFFIX = ".html"
INDEX_PAGE = "index"
DEFAULT_LAYOUT = "default"
NAV_INDEX_FILENAME = "navigation.json"

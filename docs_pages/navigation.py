"""Build the ordered Navigation Index shared by every rendered page.

The index is a read-only view recomputed on each build: pages declaring
``nav_order`` come first in ascending order, followed by pages without one.
Python's sort is stable, so pages with equal ``nav_order`` and all unordered
pages keep the order in which they were supplied. Site builds supply pages
sorted by source path, which makes that order lexical and the index fully
deterministic.

Example
-------
>>> from docs_pages.frontmatter import Page, PageMetadata
>>> pages = [
...     Page("a", PageMetadata("A", nav_order=2), ""),
...     Page("b", PageMetadata("B", nav_order=1), ""),
...     Page("c", PageMetadata("C"), ""),
... ]
>>> [entry.path for entry in build_navigation_index(pages)]
['b', 'a', 'c']
"""

from __future__ import annotations

import dataclasses as dc
import posixpath
import typing as typ

from docs_pages.errors import DuplicatePathError

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from docs_pages.frontmatter import Page


class _Identified(typ.Protocol):
    """Anything carrying a page path and the source it came from."""

    @property
    def path(self) -> str: ...

    @property
    def source(self) -> Path | None: ...


@dc.dataclass(frozen=True, slots=True)
class NavEntry:
    """One Navigation Index entry.

    Attributes
    ----------
    title : str
        Label shown in menus.
    path : str
        Page identifier.
    output_path : str
        Site-relative path of the rendered document.
    nav_order : int or None
        Declared order value, kept for consumers of the JSON artifact.
    """

    title: str
    path: str
    output_path: str
    nav_order: int | None = None


def _nav_sort_key(page: Page) -> tuple[bool, int]:
    return (page.nav_order is None, page.nav_order or 0)


def build_navigation_index(pages: cabc.Iterable[Page]) -> list[NavEntry]:
    """Return the Navigation Index for ``pages``.

    Parameters
    ----------
    pages : Iterable[Page]
        Successfully parsed pages in discovery order.

    Returns
    -------
    list[NavEntry]
        Entries sorted by ``nav_order``; unordered pages trail in input order.
        An empty input yields an empty list.
    """
    return [
        NavEntry(
            title=page.title,
            path=page.path,
            output_path=page.output_path,
            nav_order=page.nav_order,
        )
        for page in sorted(pages, key=_nav_sort_key)
    ]


def check_unique_paths(items: cabc.Iterable[_Identified]) -> None:
    """Raise if two items share a page path.

    Raises
    ------
    DuplicatePathError
        For the lexically first duplicated path, listing every source that
        claims it.
    """
    claims: dict[str, list[Path | None]] = {}
    for item in items:
        claims.setdefault(item.path, []).append(item.source)
    duplicates = sorted(path for path, sources in claims.items() if len(sources) > 1)
    if duplicates:
        first = duplicates[0]
        raise DuplicatePathError(first, claims[first])


def relative_href(from_output_path: str, to_output_path: str) -> str:
    """Return the URL leading from one rendered document to another.

    >>> relative_href("guides/setup.html", "index.html")
    '../index.html'
    >>> relative_href("index.html", "guides/setup.html")
    'guides/setup.html'
    """
    start = posixpath.dirname(from_output_path) or "."
    return posixpath.relpath(to_output_path, start=start)


def sidebar_items(
    navigation: cabc.Sequence[NavEntry], current: Page
) -> list[dict[str, typ.Any]]:
    """Return sidebar entries with hrefs relative to ``current``."""
    return [
        {
            "label": entry.title,
            "href": relative_href(current.output_path, entry.output_path),
            "path": entry.path,
            "is_active": entry.path == current.path,
        }
        for entry in navigation
    ]


__all__ = [
    "NavEntry",
    "build_navigation_index",
    "check_unique_paths",
    "relative_href",
    "sidebar_items",
]

"""Helpers for resolving internal markdown links to rendered page paths."""

from __future__ import annotations

import dataclasses as dc
import posixpath
import typing as typ
from urllib.parse import urlsplit

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from docs_pages._constants import INDEX_PAGE, LINKABLE_SUFFIXES, OUTPUT_SUFFIX
from docs_pages.errors import DanglingLinkWarning
from docs_pages.navigation import relative_href

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from xml.etree.ElementTree import Element

    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any

EXTERNAL_PREFIXES = ("http://", "https://", "mailto:", "tel:", "data:", "javascript:")


@dc.dataclass(frozen=True, slots=True)
class LinkTarget:
    """An internal link split into page path, query and fragment."""

    path: str
    query: str = ""
    fragment: str = ""


def resolve_link(source_path: str, href: str | None) -> LinkTarget | None:
    """Resolve ``href`` found on ``source_path`` to a page path.

    Parameters
    ----------
    source_path : str
        Identifier of the page containing the link.
    href : str or None
        Raw link target.

    Returns
    -------
    LinkTarget or None
        The resolved target, or ``None`` when the link is external,
        fragment-only or points at a non-page asset (PDF, image, ...).
        Targets escaping the site root keep their leading ``..`` so they never
        match a known page.

    Examples
    --------
    >>> resolve_link("guides/setup", "../index.md#top")
    LinkTarget(path='index', query='', fragment='top')
    >>> resolve_link("guides/setup", "https://example.com") is None
    True
    """
    if not href:
        return None
    lower = href.strip().lower()
    if lower.startswith(EXTERNAL_PREFIXES) or lower.startswith(("#", "//")):
        return None
    if "://" in lower:
        return None

    parsed = urlsplit(href.strip())
    if parsed.scheme or parsed.netloc or not parsed.path:
        return None

    raw_path = parsed.path
    suffix = posixpath.splitext(raw_path)[1].lower()
    if suffix and suffix not in LINKABLE_SUFFIXES:
        return None

    if raw_path.startswith("/"):
        joined = posixpath.normpath(raw_path.lstrip("/") or ".")
    else:
        base_dir = posixpath.dirname(source_path)
        joined = posixpath.normpath(posixpath.join(base_dir, raw_path))
    if raw_path.endswith("/") or joined == ".":
        joined = INDEX_PAGE if joined == "." else f"{joined}/{INDEX_PAGE}"
    elif suffix:
        joined = joined[: -len(suffix)]
    return LinkTarget(path=joined, query=parsed.query, fragment=parsed.fragment)


def build_href(source_path: str, target: LinkTarget) -> str:
    """Return the relative URL from ``source_path``'s document to ``target``."""
    href = relative_href(
        f"{source_path}{OUTPUT_SUFFIX}", f"{target.path}{OUTPUT_SUFFIX}"
    )
    if target.query:
        href = f"{href}?{target.query}"
    if target.fragment:
        href = f"{href}#{target.fragment}"
    return href


class InternalLinkExtension(Extension):
    """Rewrite links between pages to the rendered ``.html`` documents.

    One instance is created per page render. Links that resolve to a known
    page are rewritten in place; unresolved ones are left untouched and
    collected in :attr:`dangling`.
    """

    def __init__(self, source_path: str, known_paths: cabc.Set[str]) -> None:
        super().__init__()
        self.source_path = source_path
        self.known_paths = known_paths
        self.dangling: list[DanglingLinkWarning] = []

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the internal-link treeprocessor on the Markdown instance."""
        processor = InternalLinkTreeprocessor(md, self)
        md.treeprocessors.register(processor, "docs_pages_internal_links", 15)


class InternalLinkTreeprocessor(Treeprocessor):
    """Rewrite anchors in the parsed tree that point at other pages."""

    def __init__(self, md: Markdown, extension: InternalLinkExtension) -> None:
        super().__init__(md)
        self.extension = extension

    def run(self, root: Element) -> Element:
        """Rewrite internal anchors and record those with no matching page."""
        seen: set[str] = {warning.target for warning in self.extension.dangling}
        for element in root.iter("a"):
            href = element.get("href")
            target = resolve_link(self.extension.source_path, href)
            if target is None:
                continue
            if target.path in self.extension.known_paths:
                element.set("href", build_href(self.extension.source_path, target))
                continue
            if target.path in seen:
                continue
            seen.add(target.path)
            self.extension.dangling.append(
                DanglingLinkWarning(
                    path=self.extension.source_path,
                    target=target.path,
                    href=href or "",
                )
            )
        return root


__all__ = [
    "InternalLinkExtension",
    "InternalLinkTreeprocessor",
    "LinkTarget",
    "build_href",
    "resolve_link",
]

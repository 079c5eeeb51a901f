"""Shared dataclasses used by the site build pipeline."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    from docs_pages.errors import BuildWarning, DanglingLinkWarning, MetadataError
    from docs_pages.frontmatter import Page
    from docs_pages.navigation import NavEntry


@dc.dataclass(slots=True)
class RenderedBody:
    """HTML produced from one page body.

    Attributes
    ----------
    html : str
        Rendered body markup.
    toc : list[dict[str, str]]
        Outline entries with ``label``, ``anchor`` and ``level`` keys.
    dangling_links : list[DanglingLinkWarning]
        One warning per distinct internal target with no matching page.
    has_title : bool
        Whether the body contains its own level-one heading.
    """

    html: str
    toc: list[dict[str, str]] = dc.field(default_factory=list)
    dangling_links: list[DanglingLinkWarning] = dc.field(default_factory=list)
    has_title: bool = False


@dc.dataclass(slots=True)
class RenderedPage:
    """A complete HTML document ready for the publisher."""

    path: str
    output_path: str
    title: str
    layout: str
    html: str


@dc.dataclass(slots=True)
class BuildReport:
    """Everything one build pass produced, including collected problems.

    Attributes
    ----------
    pages : list[Page]
        Pages whose front matter parsed successfully, in discovery order.
    navigation : list[NavEntry]
        The Navigation Index computed from ``pages``.
    documents : list[RenderedPage]
        Rendered documents in ``pages`` order.
    errors : list[MetadataError]
        Per-page failures; those pages are absent from every other field.
    warnings : list[BuildWarning]
        Non-fatal problems such as dangling links or unknown layouts.
    """

    pages: list[Page] = dc.field(default_factory=list)
    navigation: list[NavEntry] = dc.field(default_factory=list)
    documents: list[RenderedPage] = dc.field(default_factory=list)
    errors: list[MetadataError] = dc.field(default_factory=list)
    warnings: list[BuildWarning] = dc.field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Return ``True`` when no page failed to parse."""
        return not self.errors


__all__ = ["BuildReport", "RenderedBody", "RenderedPage"]

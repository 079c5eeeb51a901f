"""High-level orchestration for a documentation site build.

This module coordinates one build pass: discovering page sources under the
configured roots, parsing their front matter, computing the Navigation Index
and rendering every page into a themed HTML document. It exposes
:class:`SiteBuilder`, which consumes a :class:`~docs_pages.config.SiteConfig`
and returns a :class:`~docs_pages.generator.models.BuildReport`. Writing the
report to disk is left to :class:`~docs_pages.publisher.SitePublisher`.

Parsing and rendering run on a thread pool. The Navigation Index is built
only once every parse has finished, and results keep discovery order so the
build is deterministic regardless of the worker count.

Example
-------
>>> from pathlib import Path
>>> from docs_pages.config import load_site_config
>>> from docs_pages.generator import SiteBuilder
>>> config = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> report = SiteBuilder(config).run()  # doctest: +SKIP
>>> [entry.path for entry in report.navigation]  # doctest: +SKIP
['index', 'getting-started', ...]
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import fnmatch
import logging
import typing as typ
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from docs_pages._constants import PAGE_SUFFIXES
from docs_pages.errors import BuildWarning, MetadataError
from docs_pages.frontmatter import Page, page_path_for, parse_page
from docs_pages.generator.models import BuildReport, RenderedPage
from docs_pages.generator.renderer import HtmlContentRenderer
from docs_pages.generator.templating import LayoutRenderer
from docs_pages.navigation import build_navigation_index, check_unique_paths

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from docs_pages.config import SiteConfig
    from docs_pages.navigation import NavEntry

logger = logging.getLogger(__name__)


@dc.dataclass(frozen=True, slots=True)
class SourceFile:
    """A page source discovered on disk."""

    root: Path
    source: Path
    path: str


class SiteBuilder:
    """Parse, index and render every page of a documentation site."""

    def __init__(self, site_config: SiteConfig) -> None:
        """Initialize the builder with configuration and template context.

        Parameters
        ----------
        site_config : SiteConfig
            Resolved build settings, templates directory and theme.
        """
        self.config = site_config
        self.renderer = HtmlContentRenderer(site_config.pygments_style)
        self.layouts = LayoutRenderer(
            site_config.theme,
            default_layout=site_config.default_layout,
            templates_dir=site_config.templates_dir,
            stylesheet=self.renderer.stylesheet,
        )

    def run(self) -> BuildReport:
        """Discover, parse and render every page under the source roots.

        Returns
        -------
        BuildReport
            Parsed pages, Navigation Index, rendered documents and every
            collected error and warning.

        Raises
        ------
        DuplicatePathError
            If two source files map to the same page path. No Navigation Index
            is produced in that case.
        """
        sources = self.discover_sources()
        check_unique_paths(sources)
        with ThreadPoolExecutor(max_workers=self.config.workers) as executor:
            results = list(executor.map(self._load_source, sources))
        pages = [result for result in results if isinstance(result, Page)]
        errors = [result for result in results if isinstance(result, MetadataError)]
        logger.debug("parsed %d pages, %d failed", len(pages), len(errors))
        return self.build(pages, errors=errors)

    def build(
        self,
        pages: cabc.Sequence[Page],
        *,
        errors: cabc.Iterable[MetadataError] = (),
    ) -> BuildReport:
        """Index and render already parsed ``pages``.

        Parameters
        ----------
        pages : Sequence[Page]
            Successfully parsed pages in discovery order.
        errors : Iterable[MetadataError], optional
            Parse failures to carry into the report.

        Returns
        -------
        BuildReport
            The complete result of the build pass.

        Raises
        ------
        DuplicatePathError
            If two pages share a path.
        """
        check_unique_paths(pages)
        navigation = build_navigation_index(pages)
        known_paths = frozenset(page.path for page in pages)
        generated_at = dt.datetime.now(dt.UTC)

        def _render(page: Page) -> tuple[RenderedPage, list[BuildWarning]]:
            return self.render_page(
                page,
                navigation=navigation,
                known_paths=known_paths,
                generated_at=generated_at,
            )

        with ThreadPoolExecutor(max_workers=self.config.workers) as executor:
            rendered = list(executor.map(_render, pages))

        warnings: list[BuildWarning] = []
        for _document, page_warnings in rendered:
            warnings.extend(page_warnings)
        return BuildReport(
            pages=list(pages),
            navigation=navigation,
            documents=[document for document, _ in rendered],
            errors=list(errors),
            warnings=warnings,
        )

    def render_page(
        self,
        page: Page,
        *,
        navigation: cabc.Sequence[NavEntry],
        known_paths: cabc.Set[str],
        generated_at: dt.datetime,
    ) -> tuple[RenderedPage, list[BuildWarning]]:
        """Render one page into a complete document and its warnings."""
        body = self.renderer.render_body(page, known_paths)
        warnings: list[BuildWarning] = list(body.dangling_links)
        layout, layout_warning = self.layouts.resolve(page)
        if layout_warning is not None:
            warnings.append(layout_warning)
        html = self.layouts.render(
            layout,
            page=page,
            body=body,
            navigation=navigation,
            generated_at=generated_at,
        )
        document = RenderedPage(
            path=page.path,
            output_path=page.output_path,
            title=page.title,
            layout=layout,
            html=html,
        )
        return document, warnings

    def discover_sources(self) -> list[SourceFile]:
        """Return page sources from every root, each root sorted by path.

        Files or directories whose name starts with ``_`` or ``.`` are skipped,
        as are paths matching the configured ``exclude`` globs. Missing roots
        are logged and ignored.
        """
        sources: list[SourceFile] = []
        for root in self.config.source_dirs:
            if not root.is_dir():
                logger.warning("source directory %s does not exist", root)
                continue
            candidates = sorted(
                (
                    file
                    for file in root.rglob("*")
                    if file.is_file() and file.suffix.lower() in PAGE_SUFFIXES
                ),
                key=lambda file: file.relative_to(root).as_posix(),
            )
            for file in candidates:
                relative = file.relative_to(root)
                if self._is_excluded(relative.as_posix()):
                    logger.debug("skipping excluded source %s", file)
                    continue
                sources.append(
                    SourceFile(root=root, source=file, path=page_path_for(relative))
                )
        return sources

    def _is_excluded(self, relative: str) -> bool:
        parts = relative.split("/")
        if any(part.startswith(("_", ".")) for part in parts):
            return True
        return any(fnmatch.fnmatch(relative, pattern) for pattern in self.config.exclude)

    @staticmethod
    def _load_source(source: SourceFile) -> Page | MetadataError:
        """Read and parse one source, returning the error instead of raising."""
        try:
            text = source.source.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("cannot read %s: %s", source.source, exc)
            return MetadataError(
                source.path, f"cannot read source: {exc}", source=source.source
            )
        try:
            return parse_page(text, path=source.path, source=source.source)
        except MetadataError as exc:
            logger.debug("front matter rejected for %s: %s", source.source, exc.reason)
            return exc


__all__ = ["SiteBuilder", "SourceFile"]

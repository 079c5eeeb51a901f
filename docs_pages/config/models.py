"""Typed dataclasses describing docs_pages site configuration structures."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from docs_pages._constants import DEFAULT_LAYOUT, NAV_INDEX_FILENAME


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class ThemeConfig:
    """Visual theming applied to generated documentation."""

    site_name: str = "Documentation"
    tagline: str = ""
    doc_label: str = "Docs"
    footer_note: str = ""


@dc.dataclass(slots=True)
class SiteConfig:
    """Resolved build settings and theme for one documentation site.

    Attributes
    ----------
    source_dirs : list[Path]
        Roots scanned for page sources, in priority order.
    output_dir : Path
        Directory receiving rendered documents.
    nav_index_output : Path
        Location of the Navigation Index JSON artifact.
    default_layout : str
        Layout used when a page names none (or an unknown one).
    templates_dir : Path or None
        Extra template directory searched before the packaged templates.
    pygments_style : str
        Pygments style for highlighted code blocks.
    workers : int
        Thread pool size for per-page parsing and rendering.
    exclude : list[str]
        Glob patterns, relative to a source root, of files to skip.
    theme : ThemeConfig
        Site name and copy used by the layouts.
    """

    source_dirs: list[Path]
    output_dir: Path = Path("public")
    nav_index_output: Path = Path("public") / NAV_INDEX_FILENAME
    default_layout: str = DEFAULT_LAYOUT
    templates_dir: Path | None = None
    pygments_style: str = "monokai"
    workers: int = 4
    exclude: list[str] = dc.field(default_factory=list)
    theme: ThemeConfig = dc.field(default_factory=ThemeConfig)

    def with_overrides(
        self,
        *,
        source_dirs: list[Path] | None = None,
        output_dir: Path | None = None,
        workers: int | None = None,
    ) -> SiteConfig:
        """Return a copy with CLI overrides applied.

        Overriding ``output_dir`` moves the Navigation Index artifact into the
        new directory as well.
        """
        nav_index_output = self.nav_index_output
        if output_dir is not None:
            nav_index_output = output_dir / self.nav_index_output.name
        return dc.replace(
            self,
            source_dirs=source_dirs or self.source_dirs,
            output_dir=output_dir or self.output_dir,
            nav_index_output=nav_index_output,
            workers=workers or self.workers,
        )


__all__ = ["SiteConfig", "SiteConfigError", "ThemeConfig"]

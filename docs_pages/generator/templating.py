"""Wrap rendered page bodies in Jinja layouts.

Layouts are templates named ``<layout>.jinja``. A site may ship its own
templates directory, which is searched before the packaged templates so it can
override or add layouts. Every render receives the page and all derived data
as explicit arguments; templates never reach for global state.

Templates whose name starts with ``_`` (such as the ``_base.jinja`` shell)
are building blocks for other layouts and cannot be selected by a page.
"""

from __future__ import annotations

import datetime as dt
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from docs_pages.config import SiteConfigError
from docs_pages.errors import UnknownLayoutWarning
from docs_pages.navigation import relative_href, sidebar_items

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from docs_pages.config import ThemeConfig
    from docs_pages.frontmatter import Page
    from docs_pages.generator.models import RenderedBody
    from docs_pages.navigation import NavEntry

PACKAGE_TEMPLATES = Path(__file__).resolve().parents[1] / "templates"
TEMPLATE_SUFFIX = ".jinja"
PARTIAL_PREFIX = "_"


class LayoutRenderer:
    """Render complete HTML documents from page bodies and layouts."""

    def __init__(
        self,
        theme: ThemeConfig,
        *,
        default_layout: str,
        templates_dir: Path | None = None,
        stylesheet: str = "",
    ) -> None:
        """Initialize the Jinja environment and validate the default layout.

        Parameters
        ----------
        theme : ThemeConfig
            Site name and copy exposed to every layout.
        default_layout : str
            Layout used when a page names none or names an unknown one.
        templates_dir : Path, optional
            Site-specific templates searched before the packaged ones.
        stylesheet : str, optional
            Pygments CSS embedded by layouts.

        Raises
        ------
        SiteConfigError
            If no selectable template exists for ``default_layout``.
        """
        search_path = [str(PACKAGE_TEMPLATES)]
        if templates_dir is not None:
            search_path.insert(0, str(templates_dir))
        self.theme = theme
        self.default_layout = default_layout
        self.stylesheet = stylesheet
        self.env = Environment(
            loader=FileSystemLoader(search_path),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._available = {
            name.removesuffix(TEMPLATE_SUFFIX)
            for name in self.env.list_templates(extensions=[TEMPLATE_SUFFIX[1:]])
            if not any(part.startswith(PARTIAL_PREFIX) for part in name.split("/"))
        }
        if default_layout not in self._available:
            msg = f"Default layout '{default_layout}' has no template."
            raise SiteConfigError(msg)

    def resolve(self, page: Page) -> tuple[str, UnknownLayoutWarning | None]:
        """Return the layout to use for ``page`` and a warning on fallback."""
        requested = page.layout or self.default_layout
        if requested in self._available:
            return requested, None
        warning = UnknownLayoutWarning(
            path=page.path, layout=requested, fallback=self.default_layout
        )
        return self.default_layout, warning

    def render(
        self,
        layout: str,
        *,
        page: Page,
        body: RenderedBody,
        navigation: cabc.Sequence[NavEntry],
        generated_at: dt.datetime,
    ) -> str:
        """Render ``page`` inside ``layout``.

        Parameters
        ----------
        layout : str
            Resolved layout name (see :meth:`resolve`).
        page : Page
            Page being rendered.
        body : RenderedBody
            Rendered body and outline for ``page``.
        navigation : Sequence[NavEntry]
            Complete Navigation Index for the site.
        generated_at : datetime
            Build timestamp shown in the footer.

        Returns
        -------
        str
            Complete HTML document.
        """
        template = self.env.get_template(f"{layout}{TEMPLATE_SUFFIX}")
        context = {
            "page": page,
            "content": body.html,
            "toc_items": body.toc,
            "body_has_title": body.has_title,
            "nav_items": sidebar_items(navigation, page),
            "root_href": relative_href(page.output_path, "index.html").removesuffix(
                "index.html"
            ),
            "theme": self.theme,
            "pygments_css": self.stylesheet,
            "html_title": self._format_page_title(page),
            "generated_at": generated_at,
        }
        return template.render(**context)

    def _format_page_title(self, page: Page) -> str:
        """Compose the HTML title from the page title and site name."""
        site_name = self.theme.site_name
        if page.title == site_name:
            return site_name
        return f"{page.title} | {site_name}"


__all__ = ["LayoutRenderer", "PACKAGE_TEMPLATES"]

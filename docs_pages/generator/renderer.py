"""Utilities for rendering page bodies with syntax-highlighted code blocks."""

from __future__ import annotations

import re
import typing as typ
from html import escape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

from docs_pages.generator.link_rewriter import InternalLinkExtension
from docs_pages.generator.models import RenderedBody

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from markdown.extensions import Extension

    from docs_pages.frontmatter import Page
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_LABEL_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]+)?(,[^\r\n]+)$", re.MULTILINE
)
LANGUAGE_PREFIX = "language-"
TOC_LEVELS = (2, 3)


class LanguageHtmlFormatter(HtmlFormatter):
    """Pygments formatter tagging each highlighted block with its language.

    ``codehilite`` passes the lexer name of every block as ``lang_str``, so
    fenced blocks of any style and indented blocks are labelled alike.
    """

    def __init__(self, lang_str: str = "", **options: typ.Any) -> None:
        super().__init__(**options)
        self.language = lang_str.removeprefix(LANGUAGE_PREFIX) or "text"

    def _wrap_div(
        self, inner: cabc.Iterable[tuple[int, str]]
    ) -> cabc.Iterator[tuple[int, str]]:
        wrapped = super()._wrap_div(inner)
        kind, open_tag = next(wrapped)
        attribute = f' data-language="{escape(self.language, quote=True)}"'
        yield kind, f"{open_tag[:-1]}{attribute}>"
        yield from wrapped


class HtmlContentRenderer:
    """Render page bodies into HTML with consistent code styling."""

    def __init__(self, pygments_style: str = "monokai") -> None:
        """Initialize a renderer with the Pygments style used for code blocks.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for syntax highlighting. Defaults to
            ``"monokai"``.
        """
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def render_body(self, page: Page, known_paths: cabc.Set[str]) -> RenderedBody:
        """Render ``page``'s body, resolving links against ``known_paths``.

        Parameters
        ----------
        page : Page
            Page whose Markdown body is converted.
        known_paths : Set[str]
            Identifiers of every page in the site.

        Returns
        -------
        RenderedBody
            HTML, the level two and three headings for the page outline,
            whether the body carries its own level-one heading, and a warning
            for each distinct internal link with no matching page.
        """
        links = InternalLinkExtension(page.path, known_paths)
        html, toc_tokens = self._convert(page.body, [links])
        return RenderedBody(
            html=html,
            toc=_flatten_toc(toc_tokens),
            dangling_links=list(links.dangling),
            has_title=any(token.get("level") == 1 for token in toc_tokens),
        )

    def _convert(
        self, text: str, extra_extensions: list[Extension]
    ) -> tuple[str, list[dict[str, typ.Any]]]:
        normalized = self._normalize_fenced_blocks(text)
        if not normalized.strip():
            return "", []
        extensions: list[Extension | str] = [
            "fenced_code",
            "codehilite",
            "tables",
            "sane_lists",
            "toc",
            *extra_extensions,
        ]
        md = Markdown(
            extensions=extensions,
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                    "pygments_formatter": LanguageHtmlFormatter,
                },
                "toc": {"permalink": False},
            },
        )
        html = md.convert(normalized)
        return html, list(getattr(md, "toc_tokens", []))

    @staticmethod
    def _normalize_fenced_blocks(text: str) -> str:
        without_indent = FENCED_INDENT_PATTERN.sub(r"\1", text)

        def _strip_labels(match: re.Match[str]) -> str:
            fence, language, _extras = match.groups()
            label = language or ""
            return f"{fence}{label}"

        return FENCE_LABEL_PATTERN.sub(_strip_labels, without_indent)


def _flatten_toc(tokens: cabc.Iterable[dict[str, typ.Any]]) -> list[dict[str, str]]:
    """Return ``toc`` extension tokens at levels two and three, in document order."""
    items: list[dict[str, str]] = []
    for token in tokens:
        if token.get("level") in TOC_LEVELS:
            items.append(
                {
                    "label": str(token.get("name", "")),
                    "anchor": str(token.get("id", "")),
                    "level": str(token.get("level")),
                }
            )
        items.extend(_flatten_toc(token.get("children", [])))
    return items


__all__ = ["HtmlContentRenderer", "LanguageHtmlFormatter"]

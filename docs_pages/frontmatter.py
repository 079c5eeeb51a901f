r"""Split documentation pages into typed front matter and a Markdown body.

Every page source starts with a YAML block fenced by ``---`` lines. This
module separates that block from the body, parses it with ``ruamel.yaml`` and
returns :class:`Page` records whose well-known keys (``title``, ``layout``,
``nav_order``) are typed while every other key is preserved untouched in
``PageMetadata.extensions`` for templates to use.

Example
-------
>>> from docs_pages.frontmatter import parse_page
>>> page = parse_page("---\ntitle: Setup\nnav_order: 2\n---\n# Setup\n", path="setup")
>>> (page.title, page.nav_order)
('Setup', 2)
"""

from __future__ import annotations

import dataclasses as dc
import posixpath
import re
import typing as typ
from pathlib import Path, PurePosixPath

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from docs_pages._constants import (
    FRONT_MATTER_CLOSERS,
    FRONT_MATTER_DELIMITER,
    OUTPUT_SUFFIX,
    PAGE_SUFFIXES,
)
from docs_pages.errors import MetadataError

TITLE_HEADING_PATTERN = re.compile(r"^#\s+(.+?)\s*#*\s*$", re.MULTILINE)
FENCED_BLOCK_PATTERN = re.compile(
    r"^[ ]{0,3}([`~]{3,})[^\n]*\n.*?(?:^[ ]{0,3}\1[`~]*[ \t]*$|\Z)",
    re.MULTILINE | re.DOTALL,
)
KNOWN_KEYS = frozenset({"title", "layout", "nav_order"})


@dc.dataclass(slots=True)
class PageMetadata:
    """Typed front matter for a single page.

    Attributes
    ----------
    title : str
        Human-readable page title.
    layout : str or None
        Name of the layout template; ``None`` selects the site default.
    nav_order : int or None
        Position in the Navigation Index; ``None`` sorts after ordered pages.
    extensions : dict[str, Any]
        Unrecognised front-matter keys, passed through unchanged.
    """

    title: str
    layout: str | None = None
    nav_order: int | None = None
    extensions: dict[str, typ.Any] = dc.field(default_factory=dict)


@dc.dataclass(slots=True)
class Page:
    """A parsed documentation page.

    Attributes
    ----------
    path : str
        Site-relative identifier without a file suffix (``guides/setup``).
    metadata : PageMetadata
        Parsed front matter.
    body : str
        Markdown following the front-matter block.
    source : Path or None
        File the page was read from, when it came from disk.
    """

    path: str
    metadata: PageMetadata
    body: str
    source: Path | None = None

    @property
    def title(self) -> str:
        return self.metadata.title

    @property
    def layout(self) -> str | None:
        return self.metadata.layout

    @property
    def nav_order(self) -> int | None:
        return self.metadata.nav_order

    @property
    def output_path(self) -> str:
        """Return the site-relative path of the rendered HTML document."""
        return f"{self.path}{OUTPUT_SUFFIX}"


def page_path_for(relative_file: PurePosixPath | Path | str) -> str:
    """Return the page identifier for a file path relative to its source root.

    >>> page_path_for("guides/setup.md")
    'guides/setup'
    """
    posix = PurePosixPath(*Path(relative_file).parts)
    if posix.suffix.lower() in PAGE_SUFFIXES:
        posix = posix.with_suffix("")
    return posixpath.normpath(posix.as_posix())


def split_front_matter(text: str, *, path: str) -> tuple[str, str]:
    """Return the raw metadata block and the body of a page source.

    Parameters
    ----------
    text : str
        Complete page source.
    path : str
        Page identifier used in error messages.

    Returns
    -------
    tuple[str, str]
        The YAML text between the delimiters and the remaining body.

    Raises
    ------
    MetadataError
        If the opening ``---`` line or the closing ``---``/``...`` line is
        missing.
    """
    lines = text.removeprefix("\ufeff").splitlines(keepends=True)
    if not lines or lines[0].strip() != FRONT_MATTER_DELIMITER:
        msg = f"missing opening '{FRONT_MATTER_DELIMITER}' front-matter delimiter"
        raise MetadataError(path, msg)
    for idx in range(1, len(lines)):
        if lines[idx].rstrip() in FRONT_MATTER_CLOSERS:
            return "".join(lines[1:idx]), "".join(lines[idx + 1 :])
    msg = f"missing closing '{FRONT_MATTER_DELIMITER}' front-matter delimiter"
    raise MetadataError(path, msg)


def _load_yaml(metadata_text: str, *, path: str) -> dict[str, typ.Any]:
    """Parse the metadata block into a mapping."""
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        loaded = loader.load(metadata_text)
    except YAMLError as exc:
        msg = f"invalid front-matter YAML ({exc})"
        raise MetadataError(path, msg) from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        msg = "front matter must be a mapping of keys to values"
        raise MetadataError(path, msg)
    return {str(key): value for key, value in loaded.items()}


def _coerce_nav_order(value: object, *, path: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    msg = f"'nav_order' must be an integer, got {value!r}"
    raise MetadataError(path, msg)


def _coerce_layout(value: object, *, path: str) -> str | None:
    if value is None:
        return None
    if isinstance(value, str) and value.strip():
        return value.strip()
    msg = f"'layout' must be a non-empty string, got {value!r}"
    raise MetadataError(path, msg)


def _fallback_title(body: str, path: str) -> str:
    """Return the first ``#`` heading outside code, else a title from ``path``."""
    match = TITLE_HEADING_PATTERN.search(FENCED_BLOCK_PATTERN.sub("", body))
    if match:
        return match.group(1).replace("\\", "").strip()
    stem = PurePosixPath(path).name
    return stem.replace("-", " ").replace("_", " ").title() or path


def parse_metadata(metadata_text: str, *, path: str, body: str = "") -> PageMetadata:
    """Parse a front-matter block into a :class:`PageMetadata` record.

    Parameters
    ----------
    metadata_text : str
        YAML text between the front-matter delimiters.
    path : str
        Page identifier used for error messages and title fallback.
    body : str, optional
        Page body searched for a ``# Heading`` when ``title`` is absent.

    Returns
    -------
    PageMetadata
        Typed metadata with unknown keys kept in ``extensions``.

    Raises
    ------
    MetadataError
        If the YAML is invalid, is not a mapping, or a well-known key has the
        wrong type.
    """
    raw = _load_yaml(metadata_text, path=path)
    title_value = raw.get("title")
    if title_value is None or not str(title_value).strip():
        title = _fallback_title(body, path)
    else:
        title = str(title_value).strip()
    return PageMetadata(
        title=title,
        layout=_coerce_layout(raw.get("layout"), path=path),
        nav_order=_coerce_nav_order(raw.get("nav_order"), path=path),
        extensions={key: value for key, value in raw.items() if key not in KNOWN_KEYS},
    )


def parse_page(text: str, *, path: str, source: Path | None = None) -> Page:
    """Parse raw page source into a :class:`Page`.

    Raises
    ------
    MetadataError
        If the front matter is missing or malformed. ``source`` is attached to
        the error so build reports can name the offending file.
    """
    try:
        metadata_text, body = split_front_matter(text, path=path)
        metadata = parse_metadata(metadata_text, path=path, body=body)
    except MetadataError as exc:
        if exc.source is None:
            exc.source = source
        raise
    return Page(path=path, metadata=metadata, body=body, source=source)


__all__ = [
    "Page",
    "PageMetadata",
    "page_path_for",
    "parse_metadata",
    "parse_page",
    "split_front_matter",
]

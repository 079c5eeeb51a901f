"""Error and warning types collected while building a documentation site.

Per-page problems never abort a build: :class:`MetadataError` instances are
collected into the build report and the offending page is left out of the
Navigation Index. Warnings (:class:`BuildWarning` subclasses) describe content
problems that still allow the page to render. Only :class:`DuplicatePathError`
propagates, because two pages sharing one identity make both the Navigation
Index and link resolution ambiguous.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path


class MetadataError(ValueError):
    """Raised when a page's front-matter block is missing or malformed."""

    def __init__(self, path: str, reason: str, *, source: Path | None = None) -> None:
        self.path = path
        self.reason = reason
        self.source = source
        super().__init__(f"{path}: {reason}")


class DuplicatePathError(RuntimeError):
    """Raised when two or more source files map to the same page path."""

    def __init__(self, path: str, sources: typ.Sequence[Path | str | None]) -> None:
        self.path = path
        self.sources = list(sources)
        listed = ", ".join(str(source) for source in self.sources)
        super().__init__(f"Duplicate page path '{path}' defined by: {listed}")


@dc.dataclass(frozen=True, slots=True)
class BuildWarning:
    """Non-fatal problem attached to the page at ``path``."""

    path: str

    @property
    def message(self) -> str:
        """Return a human-readable description of the warning."""
        return f"{self.path}: warning"


@dc.dataclass(frozen=True, slots=True)
class DanglingLinkWarning(BuildWarning):
    """Internal link whose resolved target matches no known page."""

    target: str
    href: str

    @property
    def message(self) -> str:
        """Describe the unresolved link and the page that contains it."""
        return f"{self.path}: link '{self.href}' points to unknown page '{self.target}'"


@dc.dataclass(frozen=True, slots=True)
class UnknownLayoutWarning(BuildWarning):
    """Front matter named a layout with no matching template."""

    layout: str
    fallback: str

    @property
    def message(self) -> str:
        """Describe the missing layout and the template used instead."""
        return (
            f"{self.path}: layout '{self.layout}' not found; "
            f"rendered with '{self.fallback}'"
        )


__all__ = [
    "BuildWarning",
    "DanglingLinkWarning",
    "DuplicatePathError",
    "MetadataError",
    "UnknownLayoutWarning",
]

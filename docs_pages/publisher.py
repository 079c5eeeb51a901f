"""Persist a build report as a static site on disk.

:class:`SitePublisher` is the only component that writes files. It mirrors
each rendered document's site-relative path under the output directory and
emits the Navigation Index as a JSON artifact so menus outside the generated
HTML (search widgets, external site shells) can reuse the same ordering.

Example
-------
>>> from pathlib import Path
>>> from docs_pages.publisher import SitePublisher
>>> publisher = SitePublisher(Path("public"))  # doctest: +SKIP
>>> publisher.publish(report)  # doctest: +SKIP
[PosixPath('public/index.html'), ..., PosixPath('public/navigation.json')]
"""

from __future__ import annotations

import datetime as dt  # noqa: TC003 - used for runtime type metadata
import logging
import typing as typ

import msgspec
import msgspec.json as msgspec_json

from docs_pages._constants import NAV_INDEX_FILENAME
from docs_pages.navigation import NavEntry  # noqa: TC001 - used for runtime type metadata

if typ.TYPE_CHECKING:
    from pathlib import Path

    from docs_pages.config import SiteConfig
    from docs_pages.generator.models import BuildReport

logger = logging.getLogger(__name__)


class NavigationArtifact(msgspec.Struct, kw_only=True):
    """JSON payload describing the Navigation Index."""

    generated_at: dt.datetime
    pages: list[NavEntry]


class SitePublisher:
    """Write rendered documents and the Navigation Index to disk."""

    def __init__(self, output_dir: Path, *, nav_index_output: Path | None = None) -> None:
        """Initialize the publisher.

        Parameters
        ----------
        output_dir : Path
            Directory receiving rendered documents.
        nav_index_output : Path, optional
            Location of the Navigation Index JSON; defaults to
            ``output_dir / "navigation.json"``.
        """
        self.output_dir = output_dir
        self.nav_index_output = nav_index_output or output_dir / NAV_INDEX_FILENAME

    @classmethod
    def from_config(cls, site_config: SiteConfig) -> SitePublisher:
        """Build a publisher using the output locations of ``site_config``."""
        return cls(
            site_config.output_dir, nav_index_output=site_config.nav_index_output
        )

    def publish(self, report: BuildReport) -> list[Path]:
        """Write every document of ``report`` plus the Navigation Index.

        Returns
        -------
        list[Path]
            Written documents in report order, followed by the index artifact.
        """
        written: list[Path] = []
        for document in report.documents:
            target = self.output_dir / document.output_path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(document.html, encoding="utf-8")
            written.append(target)
        written.append(self.write_navigation(report.navigation))
        logger.debug("published %d files to %s", len(written), self.output_dir)
        return written

    def write_navigation(self, navigation: list[NavEntry]) -> Path:
        """Encode ``navigation`` as indented JSON at :attr:`nav_index_output`."""
        artifact = NavigationArtifact(
            generated_at=dt.datetime.now(dt.UTC), pages=list(navigation)
        )
        payload = msgspec_json.format(msgspec_json.encode(artifact), indent=2)
        self.nav_index_output.parent.mkdir(parents=True, exist_ok=True)
        self.nav_index_output.write_bytes(payload + b"\n")
        return self.nav_index_output


__all__ = ["NavigationArtifact", "SitePublisher"]

"""Cyclopts CLI entrypoint for building docs_pages documentation sites.

The ``pages`` console script defined here renders a tree of Markdown pages
into static HTML, writes the Navigation Index artifact, validates internal
links without writing anything, and prints the navigation order. Typical
usage involves running ``pages build`` locally or in CI and ``pages check``
as a pre-merge gate.

Examples
--------
Build the site described by the default configuration:

>>> from docs_pages.cli import main
>>> main()  # doctest: +SKIP

Build into a custom directory, failing on warnings:

>>> from docs_pages.cli import app
>>> app(["build", "--output-dir", "dist", "--strict"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import load_site_config
from .errors import DuplicatePathError
from .generator import SiteBuilder
from .publisher import SitePublisher

if typ.TYPE_CHECKING:
    from .config import SiteConfig
    from .generator import BuildReport

DEFAULT_CONFIG = Path("config/site.yaml")

app = App(name="pages", config=cyclopts.config.Env("DOCS_PAGES_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_config(
    config: Path,
    *,
    source_dir: list[Path] | None,
    output_dir: Path | None,
    workers: int | None,
) -> SiteConfig:
    site_config = load_site_config(config)
    return site_config.with_overrides(
        source_dirs=source_dir, output_dir=output_dir, workers=workers
    )


def _build_report(site_config: SiteConfig) -> BuildReport:
    """Run the builder, turning a duplicate page path into a clean exit."""
    try:
        return SiteBuilder(site_config).run()
    except DuplicatePathError as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


def _print_report(report: BuildReport) -> None:
    """Print collected errors and warnings to stderr."""
    for error in report.errors:
        source = _format_path(error.source) if error.source else error.path
        print(f"error: {source}: {error.reason}", file=sys.stderr)
    for warning in report.warnings:
        print(f"warning: {warning.message}", file=sys.stderr)


def _exit_status(report: BuildReport, *, strict: bool) -> int:
    if report.errors:
        return 1
    if strict and report.warnings:
        return 1
    return 0


@app.command(help="Render Markdown pages into static HTML and a navigation index.")
def build(
    *,
    config: typ.Annotated[Path, Parameter(help="Path to site config")] = DEFAULT_CONFIG,
    source_dir: typ.Annotated[
        list[Path] | None, Parameter(help="Override the page source directories")
    ] = None,
    output_dir: typ.Annotated[
        Path | None, Parameter(help="Override the output folder")
    ] = None,
    workers: typ.Annotated[
        int | None, Parameter(help="Threads used to parse and render pages")
    ] = None,
    strict: typ.Annotated[
        bool, Parameter(help="Exit non-zero when warnings are reported")
    ] = False,
    verbose: typ.Annotated[bool, Parameter(help="Enable debug logging")] = False,
) -> None:
    """Build and publish the documentation site.

    Parameters
    ----------
    config : Path, optional
        Path to the ``site.yaml`` configuration file (overridable via
        ``DOCS_PAGES_CONFIG``).
    source_dir : list[Path] or None, optional
        Source roots replacing the configured ``source_dirs``.
    output_dir : Path or None, optional
        Output directory replacing the configured one; the Navigation Index
        artifact moves with it.
    workers : int or None, optional
        Thread pool size for parsing and rendering.
    strict : bool, optional
        Treat warnings (dangling links, unknown layouts) as failures.
    verbose : bool, optional
        Emit debug logging for discovery and publishing.

    Raises
    ------
    SystemExit
        With status 1 when pages fail to parse, when ``strict`` is set and
        warnings were collected, or when two sources share a page path.
        Successfully rendered pages are still written in the first two cases.
    """
    _configure_logging(verbose)
    site_config = _load_config(
        config, source_dir=source_dir, output_dir=output_dir, workers=workers
    )
    report = _build_report(site_config)
    written = SitePublisher.from_config(site_config).publish(report)
    for path in written:
        print(f"wrote {_format_path(path)}")
    _print_report(report)
    status = _exit_status(report, strict=strict)
    if status:
        raise SystemExit(status)


@app.command(help="Validate front matter and internal links without writing files.")
def check(
    *,
    config: typ.Annotated[Path, Parameter(help="Path to site config")] = DEFAULT_CONFIG,
    source_dir: typ.Annotated[
        list[Path] | None, Parameter(help="Override the page source directories")
    ] = None,
    strict: typ.Annotated[
        bool, Parameter(help="Exit non-zero when warnings are reported")
    ] = False,
) -> None:
    """Build the site in memory and report problems.

    Raises
    ------
    SystemExit
        With status 1 under the same conditions as :func:`build`.
    """
    site_config = _load_config(
        config, source_dir=source_dir, output_dir=None, workers=None
    )
    report = _build_report(site_config)
    _print_report(report)
    print(
        f"checked {len(report.pages) + len(report.errors)} pages: "
        f"{len(report.errors)} errors, {len(report.warnings)} warnings"
    )
    status = _exit_status(report, strict=strict)
    if status:
        raise SystemExit(status)


@app.command(help="Print the navigation order of every page.")
def nav(
    *,
    config: typ.Annotated[Path, Parameter(help="Path to site config")] = DEFAULT_CONFIG,
    source_dir: typ.Annotated[
        list[Path] | None, Parameter(help="Override the page source directories")
    ] = None,
) -> None:
    """Print one ``order<TAB>title<TAB>path`` line per Navigation Index entry.

    Raises
    ------
    SystemExit
        With status 1 when any page failed to parse.
    """
    site_config = _load_config(
        config, source_dir=source_dir, output_dir=None, workers=None
    )
    report = _build_report(site_config)
    for entry in report.navigation:
        order = "-" if entry.nav_order is None else str(entry.nav_order)
        print(f"{order}\t{entry.title}\t{entry.path}")
    _print_report(report)
    status = _exit_status(report, strict=False)
    if status:
        raise SystemExit(status)


def main() -> None:
    """Invoke the Cyclopts application that powers the `pages` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()

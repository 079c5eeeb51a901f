"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from docs_pages._constants import DEFAULT_LAYOUT, NAV_INDEX_FILENAME

from .helpers import (
    _build_theme_config,
    _optional_str,
    _positive_int,
    _resolve_path,
    _string_list,
)
from .models import SiteConfig, SiteConfigError


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing sources, output and theme.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``config/site.yaml``). Relative paths inside the file are resolved
        against the file's parent directory.

    Returns
    -------
    SiteConfig
        Parsed site configuration with defaults applied.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If required fields are missing or invalid (for example, no source
        directories are configured).
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from docs_pages.config import load_site_config
    >>> config = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
    >>> config.default_layout  # doctest: +SKIP
    'default'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):  # pragma: no cover - config error guard
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    base_dir = path.resolve().parent

    site_raw = raw.get("site") or {}
    build_raw = raw.get("build") or {}
    if not isinstance(site_raw, dict) or not isinstance(build_raw, dict):
        msg = "'site' and 'build' sections must be mappings."
        raise SiteConfigError(msg)

    source_dirs = [
        _resolve_path(entry, base_dir=base_dir)
        for entry in _string_list(build_raw.get("source_dirs"), field="source_dirs")
    ]
    if not source_dirs:
        msg = "No source_dirs defined in site configuration."
        raise SiteConfigError(msg)

    output_dir = _resolve_path(build_raw.get("output_dir", "public"), base_dir=base_dir)
    nav_index_raw = build_raw.get("nav_index_output")
    nav_index_output = (
        _resolve_path(nav_index_raw, base_dir=base_dir)
        if nav_index_raw
        else output_dir / NAV_INDEX_FILENAME
    )
    templates_raw = _optional_str(build_raw.get("templates_dir"))
    templates_dir = (
        _resolve_path(templates_raw, base_dir=base_dir) if templates_raw else None
    )

    return SiteConfig(
        source_dirs=source_dirs,
        output_dir=output_dir,
        nav_index_output=nav_index_output,
        default_layout=_optional_str(build_raw.get("default_layout")) or DEFAULT_LAYOUT,
        templates_dir=templates_dir,
        pygments_style=_optional_str(build_raw.get("pygments_style")) or "monokai",
        workers=_positive_int(build_raw.get("workers"), field="workers", default=4),
        exclude=_string_list(build_raw.get("exclude"), field="exclude"),
        theme=_build_theme_config(site_raw),
    )


__all__ = ["load_site_config"]

"""Load and validate site configuration YAML for docs_pages builds.

This subpackage parses the project's ``site.yaml`` file, applies defaults,
resolves source and output paths relative to the file, and produces strongly
typed dataclasses (:class:`SiteConfig`, :class:`ThemeConfig`) that the site
builder and publisher consume. The primary entry point is
:func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from docs_pages.config import load_site_config
>>> site = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> [path.name for path in site.source_dirs]  # doctest: +SKIP
['docs']
"""

from .loader import load_site_config
from .models import SiteConfig, SiteConfigError, ThemeConfig

__all__ = [
    "SiteConfig",
    "SiteConfigError",
    "ThemeConfig",
    "load_site_config",
]

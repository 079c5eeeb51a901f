"""Utilities for parsing, rendering, and building documentation sites."""

from .link_rewriter import InternalLinkExtension, LinkTarget, resolve_link
from .models import BuildReport, RenderedBody, RenderedPage
from .renderer import HtmlContentRenderer
from .site_builder import SiteBuilder, SourceFile
from .templating import LayoutRenderer

__all__ = [
    "BuildReport",
    "HtmlContentRenderer",
    "InternalLinkExtension",
    "LayoutRenderer",
    "LinkTarget",
    "RenderedBody",
    "RenderedPage",
    "SiteBuilder",
    "SourceFile",
    "resolve_link",
]

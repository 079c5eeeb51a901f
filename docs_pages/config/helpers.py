"""Utility helpers shared by the docs_pages configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from .models import SiteConfigError, ThemeConfig


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _resolve_path(value: object, *, base_dir: Path) -> Path:
    """Return ``value`` as a path, anchoring relative paths at ``base_dir``."""
    path = Path(str(value)).expanduser()
    if path.is_absolute():
        return path
    return base_dir / path


def _string_list(value: object, *, field: str) -> list[str]:
    """Normalise a string or list of strings into a list of non-empty strings."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, list):
        return [str(item).strip() for item in value if str(item).strip()]
    msg = f"'{field}' must be a string or a list of strings."
    raise SiteConfigError(msg)


def _positive_int(value: object, *, field: str, default: int) -> int:
    """Return ``value`` as a positive integer, falling back to ``default``."""
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        msg = f"'{field}' must be a positive integer, got {value!r}."
        raise SiteConfigError(msg)
    return value


def _build_theme_config(payload: typ.Mapping[str, typ.Any]) -> ThemeConfig:
    """Build a ThemeConfig instance from the provided mapping payload."""
    base = ThemeConfig()
    return ThemeConfig(
        site_name=_optional_str(payload.get("name")) or base.site_name,
        tagline=payload.get("tagline", base.tagline) or "",
        doc_label=payload.get("doc_label", base.doc_label) or base.doc_label,
        footer_note=payload.get("footer_note", base.footer_note) or "",
    )


__all__ = [
    "_build_theme_config",
    "_optional_str",
    "_positive_int",
    "_resolve_path",
    "_string_list",
]

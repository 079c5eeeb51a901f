"""Unit tests for site configuration loading.

These tests cover :func:`docs_pages.config.load_site_config`: defaults,
path resolution relative to the config file, theme settings and the
validation errors raised for incomplete configuration.

Usage
-----
Run ``pytest tests/test_config.py -v``.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from docs_pages.config import SiteConfigError, load_site_config


def _write_config(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "config" / "site.yaml"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text.strip() + "\n", encoding="utf-8")
    return path


def test_defaults_resolve_relative_to_config(tmp_path: Path) -> None:
    path = _write_config(tmp_path, "build:\n  source_dirs: ../docs\n")
    config = load_site_config(path)
    config_dir = path.resolve().parent
    assert config.source_dirs == [config_dir / "../docs"]
    assert config.output_dir == config_dir / "public"
    assert config.nav_index_output == config_dir / "public" / "navigation.json"
    assert config.default_layout == "default"
    assert config.pygments_style == "monokai"
    assert config.workers == 4
    assert config.exclude == []
    assert config.templates_dir is None
    assert config.theme.site_name == "Documentation"


def test_explicit_settings_are_applied(tmp_path: Path) -> None:
    absolute_out = tmp_path / "dist"
    path = _write_config(
        tmp_path,
        f"""
site:
  name: Workflow Docs
  tagline: Build flows
  footer_note: Copy the examples.
build:
  source_dirs: [docs, more-docs]
  output_dir: {absolute_out}
  nav_index_output: meta/nav.json
  default_layout: home
  templates_dir: layouts
  pygments_style: friendly
  workers: 2
  exclude: "drafts/*"
""",
    )
    config = load_site_config(path)
    config_dir = path.resolve().parent
    assert [p.name for p in config.source_dirs] == ["docs", "more-docs"]
    assert config.output_dir == absolute_out
    assert config.nav_index_output == config_dir / "meta" / "nav.json"
    assert config.default_layout == "home"
    assert config.templates_dir == config_dir / "layouts"
    assert config.pygments_style == "friendly"
    assert config.workers == 2
    assert config.exclude == ["drafts/*"]
    assert config.theme.site_name == "Workflow Docs"
    assert config.theme.tagline == "Build flows"
    assert config.theme.footer_note == "Copy the examples."


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_site_config(tmp_path / "absent.yaml")


def test_source_dirs_are_required(tmp_path: Path) -> None:
    path = _write_config(tmp_path, "site:\n  name: Empty\n")
    with pytest.raises(SiteConfigError, match="source_dirs"):
        load_site_config(path)


@pytest.mark.parametrize("workers", ["0", "-2", "many", "true"])
def test_workers_must_be_positive(tmp_path: Path, workers: str) -> None:
    path = _write_config(
        tmp_path, f"build:\n  source_dirs: [docs]\n  workers: {workers}\n"
    )
    with pytest.raises(SiteConfigError, match="workers"):
        load_site_config(path)


def test_overrides_move_the_navigation_index(tmp_path: Path) -> None:
    path = _write_config(tmp_path, "build:\n  source_dirs: [docs]\n")
    config = load_site_config(path).with_overrides(
        source_dirs=[tmp_path / "other"], output_dir=tmp_path / "out", workers=1
    )
    assert config.source_dirs == [tmp_path / "other"]
    assert config.output_dir == tmp_path / "out"
    assert config.nav_index_output == tmp_path / "out" / "navigation.json"
    assert config.workers == 1


def test_repository_config_loads() -> None:
    """The sample configuration shipped with the repository stays valid."""
    repo_root = Path(__file__).resolve().parents[1]
    config = load_site_config(repo_root / "config" / "site.yaml")
    assert [p.resolve() for p in config.source_dirs] == [(repo_root / "docs").resolve()]
    assert config.theme.site_name == "Workflow Builder Docs"

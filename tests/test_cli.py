"""Tests for the ``pages`` command-line interface.

The command functions in :mod:`docs_pages.cli` are called directly with a
temporary config so no subprocess is needed. Output is captured with
``capsys`` and exit codes are asserted through ``SystemExit``.

Usage
-----
Run ``pytest tests/test_cli.py -v``.
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import msgspec.json as msgspec_json
import pytest

from docs_pages import cli

if typ.TYPE_CHECKING:
    from pytest_mock import MockerFixture


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    """Write a two-page site and its config, returning the config path."""
    docs = tmp_path / "docs"
    _write(docs / "index.md", "---\ntitle: Home\nnav_order: 1\n---\nSee [setup](setup.md).\n")
    _write(docs / "setup.md", "---\ntitle: Setup\nnav_order: 2\n---\nSteps.\n")
    return _write(
        tmp_path / "site.yaml",
        "build:\n  source_dirs: [docs]\n  output_dir: public\n  workers: 1\n",
    )


def test_build_writes_site_and_reports_paths(
    config_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.build(config=config_path)
    out = capsys.readouterr().out
    public = config_path.parent / "public"
    assert (public / "index.html").exists()
    assert (public / "setup.html").exists()
    assert out.count("wrote ") == 3, f"unexpected output {out!r}"
    payload = msgspec_json.decode((public / "navigation.json").read_bytes())
    assert [entry["path"] for entry in payload["pages"]] == ["index", "setup"]


def test_build_output_dir_override(config_path: Path, tmp_path: Path) -> None:
    cli.build(config=config_path, output_dir=tmp_path / "dist")
    assert (tmp_path / "dist" / "index.html").exists()
    assert (tmp_path / "dist" / "navigation.json").exists()


def test_build_exits_non_zero_on_metadata_errors(
    config_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    _write(config_path.parent / "docs" / "broken.md", "no front matter\n")
    with pytest.raises(SystemExit) as excinfo:
        cli.build(config=config_path)
    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert "broken.md" in captured.err
    assert (config_path.parent / "public" / "index.html").exists(), (
        "valid pages are still published"
    )


def test_warnings_fail_only_in_strict_mode(
    config_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    _write(
        config_path.parent / "docs" / "setup.md",
        "---\ntitle: Setup\n---\nSee [gone](gone.md).\n",
    )
    cli.check(config=config_path)
    assert "link 'gone.md' points to unknown page 'gone'" in capsys.readouterr().err
    with pytest.raises(SystemExit) as excinfo:
        cli.check(config=config_path, strict=True)
    assert excinfo.value.code == 1


def test_duplicate_paths_exit_with_both_sources(
    config_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    _write(config_path.parent / "docs" / "setup.markdown", "---\ntitle: Again\n---\n")
    with pytest.raises(SystemExit) as excinfo:
        cli.check(config=config_path)
    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert "setup.md" in err
    assert "setup.markdown" in err


def test_check_does_not_write(config_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cli.check(config=config_path)
    assert not (config_path.parent / "public").exists()
    assert "checked 2 pages: 0 errors, 0 warnings" in capsys.readouterr().out


def test_nav_prints_navigation_order(
    config_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    _write(config_path.parent / "docs" / "extra.md", "---\ntitle: Extra\n---\n")
    cli.nav(config=config_path)
    lines = capsys.readouterr().out.splitlines()
    assert lines == ["1\tHome\tindex", "2\tSetup\tsetup", "-\tExtra\textra"]


def test_nav_exits_non_zero_on_metadata_errors(
    config_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    _write(config_path.parent / "docs" / "broken.md", "no front matter\n")
    with pytest.raises(SystemExit) as excinfo:
        cli.nav(config=config_path)
    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert captured.out.splitlines() == ["1\tHome\tindex", "2\tSetup\tsetup"]
    assert "broken.md" in captured.err


def test_verbose_enables_debug_logging(config_path: Path, mocker: MockerFixture) -> None:
    basic_config = mocker.patch.object(cli.logging, "basicConfig")
    cli.build(config=config_path, verbose=True)
    basic_config.assert_called_once()
    assert basic_config.call_args.kwargs["level"] == logging.DEBUG

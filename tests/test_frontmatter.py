"""Unit tests for front-matter extraction.

These tests cover :mod:`docs_pages.frontmatter`: splitting the ``---`` block
from the body, typing the well-known keys, preserving unknown keys and the
``MetadataError`` cases that exclude a page from the build.

Usage
-----
Run ``pytest tests/test_frontmatter.py -v``. No fixtures beyond pytest's
built-ins are required.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from docs_pages.errors import MetadataError
from docs_pages.frontmatter import (
    page_path_for,
    parse_metadata,
    parse_page,
    split_front_matter,
)


def test_parse_page_types_known_keys() -> None:
    """Title, layout and nav_order are exposed as typed fields."""
    text = "---\ntitle: Setup\nlayout: home\nnav_order: 3\n---\nBody text.\n"
    page = parse_page(text, path="guides/setup")
    assert page.title == "Setup"
    assert page.layout == "home"
    assert page.nav_order == 3
    assert page.body == "Body text.\n", f"unexpected body {page.body!r}"
    assert page.output_path == "guides/setup.html"


def test_unknown_keys_are_passed_through() -> None:
    """Keys outside the well-known set land untouched in ``extensions``."""
    text = (
        "---\n"
        "title: Credentials\n"
        "description: API keys\n"
        "has_children: true\n"
        "tags: [setup, keys]\n"
        "---\n"
    )
    page = parse_page(text, path="credentials")
    assert page.metadata.extensions == {
        "description": "API keys",
        "has_children": True,
        "tags": ["setup", "keys"],
    }


def test_missing_title_falls_back_to_first_heading() -> None:
    """Without ``title`` the first level-one heading names the page."""
    page = parse_page("---\nnav_order: 1\n---\n# Remote tool server\n", path="tools")
    assert page.title == "Remote tool server"


def test_fallback_title_ignores_comments_in_code_fences() -> None:
    body = "```bash\n# install the CLI\npip install tool\n```\n\n# Installing\n"
    page = parse_page(f"---\n---\n{body}", path="install")
    assert page.title == "Installing"


def test_unclosed_fence_hides_its_comments_from_the_title() -> None:
    page = parse_page("---\n---\n~~~sh\n# not a title\n", path="guides/shell-notes")
    assert page.title == "Shell Notes"


def test_missing_title_and_heading_falls_back_to_path() -> None:
    """Without a title or heading the file stem is humanised."""
    page = parse_page("---\n---\nJust text.\n", path="guides/api-keys")
    assert page.title == "Api Keys"
    assert page.nav_order is None
    assert page.layout is None


def test_missing_opening_delimiter_raises() -> None:
    """A page that does not start with ``---`` is rejected."""
    source = Path("docs/plain.md")
    with pytest.raises(MetadataError) as excinfo:
        parse_page("# No front matter\n", path="plain", source=source)
    assert excinfo.value.path == "plain"
    assert excinfo.value.source == source
    assert "opening" in excinfo.value.reason


def test_missing_closing_delimiter_raises() -> None:
    """An unterminated metadata block is rejected with the page path."""
    with pytest.raises(MetadataError) as excinfo:
        split_front_matter("---\ntitle: Broken\n\nBody\n", path="broken")
    assert "closing" in excinfo.value.reason
    assert str(excinfo.value).startswith("broken: ")


def test_dots_close_the_metadata_block() -> None:
    """The YAML document end marker also closes front matter."""
    metadata, body = split_front_matter("---\ntitle: A\n...\nBody\n", path="a")
    assert metadata == "title: A\n"
    assert body == "Body\n"


def test_byte_order_mark_is_ignored() -> None:
    page = parse_page("\ufeff---\ntitle: BOM\n---\n", path="bom")
    assert page.title == "BOM"


def test_body_horizontal_rule_is_preserved() -> None:
    """Only the first closing delimiter ends the metadata block."""
    _, body = split_front_matter("---\ntitle: A\n---\nOne\n\n---\n\nTwo\n", path="a")
    assert body == "One\n\n---\n\nTwo\n"


@pytest.mark.parametrize(
    ("metadata", "fragment"),
    [
        ("title: [unclosed\n", "invalid front-matter YAML"),
        ("- just\n- a list\n", "must be a mapping"),
        ("nav_order: first\n", "'nav_order' must be an integer"),
        ("nav_order: 2.5\n", "'nav_order' must be an integer"),
        ("nav_order: true\n", "'nav_order' must be an integer"),
        ("layout: 7\n", "'layout' must be a non-empty string"),
    ],
)
def test_malformed_metadata_raises(metadata: str, fragment: str) -> None:
    """Invalid YAML or badly typed well-known keys raise MetadataError."""
    with pytest.raises(MetadataError) as excinfo:
        parse_metadata(metadata, path="bad")
    assert fragment in excinfo.value.reason, (
        f"expected {fragment!r} in {excinfo.value.reason!r}"
    )


def test_numeric_title_is_coerced_to_string() -> None:
    metadata = parse_metadata("title: 2024\n", path="year")
    assert metadata.title == "2024"


@pytest.mark.parametrize(
    ("relative", "expected"),
    [
        ("index.md", "index"),
        ("guides/setup.md", "guides/setup"),
        ("guides/Setup.markdown", "guides/Setup"),
        (Path("agent-sdk") / "tools.MD", "agent-sdk/tools"),
    ],
)
def test_page_path_for_strips_markdown_suffix(
    relative: str | Path, expected: str
) -> None:
    assert page_path_for(relative) == expected

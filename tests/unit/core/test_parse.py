"""Unit tests for core/parse.py"""

import datetime

import pytest

from mdblog.core.parse import discover_files, split_frontmatter


def test_split_frontmatter_with_yaml():
    """split_frontmatter extracts YAML header and returns body."""
    text = "---\ntitle: Hello\ndate: 2024-01-10\n---\n# Body\n"
    fm, body = split_frontmatter(text)
    assert fm == {"title": "Hello", "date": datetime.date(2024, 1, 10)}
    assert body == "# Body\n"


def test_split_frontmatter_no_frontmatter():
    """Text without a header yields an empty dict and the full text."""
    text = "# No frontmatter\n"
    assert split_frontmatter(text) == ({}, text)


def test_split_frontmatter_empty_header():
    """An empty header block parses to an empty mapping."""
    fm, body = split_frontmatter("---\n---\nBody\n")
    assert fm == {}
    assert body == "Body\n"


def test_split_frontmatter_ignores_longer_rules():
    """A '----' line inside the header does not close it."""
    fm, _ = split_frontmatter("---\ntitle: x\n---\n----\n")
    assert fm == {"title": "x"}


def test_split_frontmatter_invalid_yaml():
    """Invalid YAML raises ValueError."""
    with pytest.raises(ValueError, match="Invalid YAML frontmatter"):
        split_frontmatter("---\ntitle: [unclosed\n---\nBody\n")


def test_split_frontmatter_non_mapping():
    """A YAML list header raises ValueError."""
    with pytest.raises(ValueError, match="expected a mapping"):
        split_frontmatter("---\n- a\n- b\n---\nBody\n")


def test_discover_files_matches_pattern(tmp_path):
    """discover_files finds matching files recursively, sorted."""
    (tmp_path / "posts" / "2024").mkdir(parents=True)
    (tmp_path / "posts" / "b.mdx").write_text("b")
    (tmp_path / "posts" / "2024" / "a.mdx").write_text("a")
    (tmp_path / "posts" / "notes.txt").write_text("text")
    files = discover_files(tmp_path)
    assert [p.relative_to(tmp_path).as_posix() for p in files] == ["posts/2024/a.mdx", "posts/b.mdx"]

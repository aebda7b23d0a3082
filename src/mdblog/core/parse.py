"""File discovery, frontmatter extraction, and markdown-it parser setup"""

import re
from pathlib import Path
from typing import Any

import yaml
from markdown_it import MarkdownIt


FRONTMATTER_RE = re.compile(r'\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)', re.DOTALL | re.MULTILINE)


def make_parser(preset: str = 'gfm-like') -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def split_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with the YAML header removed.

    Text without a header yields ({}, text). Raises ValueError on invalid YAML
    or a header that is not a mapping.
    """
    m = FRONTMATTER_RE.match(text)
    if not m:
        return {}, text
    try:
        fm = yaml.safe_load(m.group(1)) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML frontmatter: {e}") from e
    if not isinstance(fm, dict):
        raise ValueError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
    return fm, text[m.end():]


def discover_files(root: Path, pattern: str = '**/*.mdx') -> list[Path]:
    """Return files under root matching the glob pattern, sorted by path."""
    return sorted(p for p in root.glob(pattern) if p.is_file())

"""Slug helpers: path-derived document slugs and URL-safe tag slugs"""

import re
from pathlib import PurePosixPath


MD_SUFFIXES = {'.md', '.mdx'}


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated URL-safe slug."""
    text = text.lower()
    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'[\s_]+', '-', text)
    return re.sub(r'-+', '-', text).strip('-')


def strip_md_suffix(path: str) -> str:
    """Drop a trailing .md/.mdx suffix, leaving any other suffix untouched."""
    p = PurePosixPath(path)
    return str(p.with_suffix('')) if p.suffix in MD_SUFFIXES else path


def derive_slug(path: str, keep_suffix: bool = True) -> str:
    """Return path with its leading directory removed ('posts/2024/a.mdx' -> '2024/a.mdx').

    Single-segment paths have no leading directory and are returned as-is.
    """
    parts = PurePosixPath(path).parts
    slug = '/'.join(parts[1:]) if len(parts) > 1 else path
    return slug if keep_suffix else strip_md_suffix(slug)

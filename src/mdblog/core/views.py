"""Presentation contract: listing entries, tag links, and date display"""

from datetime import datetime

from mdblog.core.catalog import DocumentCatalog
from mdblog.core.models import Document
from mdblog.core.utils.slug import slugify


MAX_DISPLAY = 5


def format_date(dt: datetime) -> str:
    """Listing date format, e.g. 2024/03/05."""
    return dt.strftime("%Y/%m/%d")


def tag_slug(tag: str) -> str:
    return slugify(tag)


def tag_label(tag: str) -> str:
    """Display label: first character upper-case, the rest lower-case."""
    return tag[:1].upper() + tag[1:].lower()


def tag_url(tag: str) -> str:
    return f"/tags/{tag_slug(tag)}"


def tag_link(tag: str) -> dict:
    return {"text": tag, "label": tag_label(tag), "url": tag_url(tag)}


def entry(doc: Document) -> dict:
    """One listing entry: everything the listing view renders for a post."""
    return {
        "slug": doc.slug,
        "url": doc.url,
        "title": doc.title,
        "date": doc.date.isoformat(),
        "date_display": format_date(doc.date),
        "summary": doc.summary,
        "tags": [tag_link(t) for t in doc.tags],
    }


def listing(catalog: DocumentCatalog, max_display: int = MAX_DISPLAY) -> list[dict]:
    """Entries for the newest published posts, truncated to max_display (0 = unlimited)."""
    if max_display < 0:
        raise ValueError(f"max_display must be >= 0, got {max_display}")
    docs = catalog.list_published()
    return [entry(d) for d in docs[:max_display or None]]


def tag_index(catalog: DocumentCatalog) -> dict[str, list[Document]]:
    """Published documents grouped by tag slug, each group in list_published() order.

    Case and spacing variants of a tag ('Next.js', 'nextjs') share a group.
    """
    groups: dict[str, list[Document]] = {}
    for doc in catalog.list_published():
        for key in dict.fromkeys(tag_slug(t) for t in doc.tags):
            groups.setdefault(key, []).append(doc)
    return groups

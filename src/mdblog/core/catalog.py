"""Document catalog: the immutable, fully-loaded document set and its query views"""

import logging
from collections import Counter
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator

from mdblog.core.errors import DuplicateSlugError, NotFoundError
from mdblog.core.load import load_all
from mdblog.core.models import Document
from mdblog.core.source import DocumentSource, FileSystemSource


logger = logging.getLogger(__name__)


class DocumentCatalog:
    """Read-only document set, constructed complete and never mutated afterward.

    Catalog order is the order documents were given in (source order for
    loaded catalogs). Slugs are unique; construction fails otherwise.
    """

    def __init__(self, documents: Iterable[Document]):
        docs = tuple(documents)
        index: dict[str, Document] = {}
        for doc in docs:
            if doc.slug in index:
                raise DuplicateSlugError(doc.slug, index[doc.slug].path, doc.path)
            index[doc.slug] = doc
        self._documents = docs
        self._by_slug = MappingProxyType(index)

    @classmethod
    def load(cls, source: DocumentSource, keep_suffix: bool = True, parser_config: str = 'gfm-like') -> "DocumentCatalog":
        """Load every document from source, then publish the finished catalog."""
        return cls(load_all(source, keep_suffix, parser_config))

    @classmethod
    def from_dir(cls, content_dir: Path, pattern: str = '**/*.mdx', **kwargs) -> "DocumentCatalog":
        return cls.load(FileSystemSource(content_dir, pattern), **kwargs)

    def __len__(self) -> int:
        return len(self._documents)

    def __iter__(self) -> Iterator[Document]:
        return iter(self._documents)

    def load_all(self) -> tuple[Document, ...]:
        """All documents, published or not, in catalog order."""
        return self._documents

    def list_published(self) -> list[Document]:
        """Published documents, newest first; equal dates keep catalog order."""
        published = [d for d in self._documents if d.published]
        return sorted(published, key=lambda d: d.date, reverse=True)

    def find_by_slug(self, slug: str) -> Document:
        """Return the document with this slug. Raises NotFoundError if absent."""
        try:
            return self._by_slug[slug]
        except KeyError:
            logger.debug("No document for slug %r", slug)
            raise NotFoundError(slug) from None

    def list_by_tag(self, tag: str) -> list[Document]:
        """list_published() restricted to documents carrying exactly this tag."""
        return [d for d in self.list_published() if tag in d.tags]

    def tag_counts(self) -> dict[str, int]:
        """Published document count per tag, most used first, then by tag text."""
        counts = Counter(t for d in self._documents if d.published for t in dict.fromkeys(d.tags))
        return dict(sorted(counts.items(), key=lambda kv: (-kv[1], kv[0])))


def list_published(catalog: DocumentCatalog) -> list[Document]:
    return catalog.list_published()


def find_by_slug(catalog: DocumentCatalog, slug: str) -> Document:
    return catalog.find_by_slug(slug)


def list_by_tag(catalog: DocumentCatalog, tag: str) -> list[Document]:
    return catalog.list_by_tag(tag)


def tag_counts(catalog: DocumentCatalog) -> dict[str, int]:
    return catalog.tag_counts()

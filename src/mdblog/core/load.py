"""Source-to-Document loading: required fields, derived slug, and duplicate checks"""

import logging

from pydantic import ValidationError

from mdblog.core.errors import DuplicateSlugError, LoadValidationError
from mdblog.core.models import Body, Document, SourceItem
from mdblog.core.parse import split_frontmatter
from mdblog.core.source import DocumentSource
from mdblog.core.toc import extract_toc
from mdblog.core.utils.slug import derive_slug


logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ('title', 'date')
LEGACY_FLAGS = ('release', 'draft')


def _describe(e: ValidationError) -> str:
    """Flatten pydantic errors into 'field: message' pairs."""
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
    )


def load_document(item: SourceItem, keep_suffix: bool = True, parser_config: str = 'gfm-like') -> Document:
    """Validate one source item and materialize it as a Document.

    Raises LoadValidationError for bad frontmatter, a missing title/date, a
    legacy release/draft key, or any field that fails validation.
    """
    try:
        fm, body = split_frontmatter(item.raw)
    except ValueError as e:
        raise LoadValidationError(item.path, str(e)) from e

    for name in REQUIRED_FIELDS:
        if fm.get(name) is None:
            raise LoadValidationError(item.path, f"missing required field '{name}'")
    for name in LEGACY_FLAGS:
        if name in fm:
            raise LoadValidationError(item.path, f"unsupported key '{name}'; use 'published: true|false'")

    published = fm.get('published')
    try:
        return Document(
            slug=derive_slug(item.path, keep_suffix),
            path=item.path,
            title=fm['title'],
            date=fm['date'],
            tags=fm.get('tags') or (),
            summary=fm.get('summary') or "",
            published=False if published is None else published,
            body=Body(raw=body, toc=extract_toc(body, parser_config)),
            frontmatter=fm,
        )
    except ValidationError as e:
        raise LoadValidationError(item.path, _describe(e)) from e


def load_all(source: DocumentSource, keep_suffix: bool = True, parser_config: str = 'gfm-like') -> list[Document]:
    """Load every source item in source order. Any invalid item aborts the whole load."""
    docs: list[Document] = []
    paths_by_slug: dict[str, str] = {}
    for item in source.items():
        logger.debug("Loading %s", item.path)
        doc = load_document(item, keep_suffix, parser_config)
        if doc.slug in paths_by_slug:
            raise DuplicateSlugError(doc.slug, paths_by_slug[doc.slug], doc.path)
        paths_by_slug[doc.slug] = doc.path
        docs.append(doc)

    published = sum(1 for d in docs if d.published)
    logger.info("Loaded %d document(s), %d published", len(docs), published)
    return docs

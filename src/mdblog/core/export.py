"""Export: listing index, per-post MDX + sidecar JSON, and per-tag indexes"""

import json
import logging
import shutil
import tempfile
from pathlib import Path

import yaml

from mdblog.core.catalog import DocumentCatalog
from mdblog.core.errors import OutputCollisionError
from mdblog.core.models import Document, thaw
from mdblog.core.utils.slug import strip_md_suffix
from mdblog.core.views import MAX_DISPLAY, entry, listing, tag_index


logger = logging.getLogger(__name__)

MANAGED_ENTRIES = ("blog", "tags", "index.json")


def build_mdx(doc: Document) -> str:
    """Return the untouched body with the author's frontmatter prepended.

    Validated fields replace their raw values; other author keys pass through.
    """
    fm = thaw(doc.frontmatter)
    fm.update({
        "title": doc.title,
        "date": doc.date.isoformat(),
        "tags": list(doc.tags),
        "summary": doc.summary,
        "published": doc.published,
        "slug": doc.slug,
    })
    header = yaml.safe_dump(fm, default_flow_style=False, allow_unicode=True, sort_keys=False)
    return f"---\n{header}---\n\n{doc.body.raw.lstrip()}"


def build_sidecar(doc: Document) -> dict:
    """Detail-view metadata for one post, including its table of contents."""
    return {
        "slug": doc.slug,
        "url": doc.url,
        "path": doc.path,
        "title": doc.title,
        "date": doc.date.isoformat(),
        "tags": list(doc.tags),
        "summary": doc.summary,
        "toc": [h.model_dump() for h in doc.body.toc],
    }


def _write_json(path: Path, data) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding='utf-8')


def output_name(slug: str) -> str:
    """Slug-relative output name under blog/, without .md/.mdx."""
    return strip_md_suffix(slug)


def write_doc(doc: Document, output_dir: Path) -> tuple[Path, Path]:
    """Write MDX + sidecar JSON for a single document.

    Output path mirrors the slug: output_dir / blog / <slug without .md/.mdx>.{mdx,json}
    Returns (mdx_path, json_path).
    """
    base = output_dir / "blog" / output_name(doc.slug)
    base.parent.mkdir(parents=True, exist_ok=True)
    mdx_path = base.parent / f"{base.name}.mdx"
    json_path = base.parent / f"{base.name}.json"

    mdx_path.write_text(build_mdx(doc), encoding='utf-8')
    _write_json(json_path, build_sidecar(doc))
    logger.debug("Wrote %s", mdx_path)
    return mdx_path, json_path


def _check_collisions(docs: list[Document]) -> None:
    """Raise OutputCollisionError if two slugs would write the same file."""
    owners: dict[str, str] = {}
    for doc in docs:
        name = output_name(doc.slug)
        if name in owners:
            raise OutputCollisionError(f"blog/{name}.mdx", owners[name], doc.slug)
        owners[name] = doc.slug


def _swap_in(staging: Path, output_dir: Path) -> None:
    """Replace the managed entries of output_dir with the freshly built ones."""
    for name in MANAGED_ENTRIES:
        old = output_dir / name
        if old.is_dir():
            shutil.rmtree(old)
        elif old.exists():
            old.unlink()
        new = staging / name
        if new.exists():
            new.replace(old)


def run_export(
    catalog: DocumentCatalog,
    output_dir: Path,
    max_display: int = MAX_DISPLAY,
    site: dict | None = None,
    ) -> list[tuple[str, Path]]:
    """Rebuild index.json, blog/ and tags/ under output_dir from the published documents.

    The export is written to a staging directory beside output_dir and swapped in
    once complete, so files from a previous build never survive. Other files in
    output_dir are left alone. Returns (slug, mdx_path) pairs.
    """
    docs = catalog.list_published()
    _check_collisions(docs)

    output_dir.mkdir(parents=True, exist_ok=True)
    staging = Path(tempfile.mkdtemp(prefix=f".{output_dir.name or 'export'}-", dir=output_dir.parent))
    try:
        results = []
        for doc in docs:
            mdx_path, _ = write_doc(doc, staging)
            results.append((doc.slug, output_dir / mdx_path.relative_to(staging)))

        _write_json(staging / "index.json", {
            "site": site or {},
            "posts": listing(catalog, max_display),
        })
        for key, tagged in tag_index(catalog).items():
            _write_json(staging / "tags" / f"{key}.json", {
                "tag": key,
                "posts": [entry(d) for d in tagged],
            })
        _swap_in(staging, output_dir)
    finally:
        shutil.rmtree(staging, ignore_errors=True)

    logger.info("Exported %d document(s) to %s", len(results), output_dir)
    return results

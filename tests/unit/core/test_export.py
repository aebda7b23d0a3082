"""Unit tests for core/export.py"""

import json

import pytest
import yaml

from mdblog.core.catalog import DocumentCatalog
from mdblog.core.errors import OutputCollisionError
from mdblog.core.export import build_mdx, build_sidecar, run_export, write_doc
from mdblog.core.source import MemorySource


@pytest.fixture(name="catalog")
def catalog_fixture(make_post):
    source = MemorySource()
    source.add("posts/2024/intro.mdx", make_post(
        "Intro", "2024-01-10", published=True, tags=["Python"], summary="First",
        body="<Hero />\n\n## Why\n\nBecause.\n",
    ))
    source.add("posts/b.mdx", make_post("B", "2024-03-05", published=True))
    source.add("posts/c.mdx", make_post("C", "2024-02-01", published=False, tags=["wip"]))
    return DocumentCatalog.load(source)


def _frontmatter(text: str) -> dict:
    _, header, _ = text.split("---\n", 2)
    return yaml.safe_load(header)


def test_build_mdx_normalized_frontmatter(catalog):
    """Frontmatter carries the validated fields; the body follows untouched."""
    text = build_mdx(catalog.find_by_slug("2024/intro.mdx"))
    assert _frontmatter(text) == {
        "title": "Intro",
        "date": "2024-01-10T00:00:00+00:00",
        "tags": ["Python"],
        "summary": "First",
        "published": True,
        "slug": "2024/intro.mdx",
    }
    assert text.endswith("<Hero />\n\n## Why\n\nBecause.\n")


def test_build_sidecar_includes_toc(catalog):
    sidecar = build_sidecar(catalog.find_by_slug("2024/intro.mdx"))
    assert sidecar["url"] == "/blog/2024/intro.mdx"
    assert sidecar["path"] == "posts/2024/intro.mdx"
    assert sidecar["toc"] == [{"level": 2, "text": "Why", "anchor": "why"}]


def test_write_doc_mirrors_slug(catalog, tmp_path):
    """Nested slugs produce nested output paths without a doubled suffix."""
    mdx_path, json_path = write_doc(catalog.find_by_slug("2024/intro.mdx"), tmp_path)
    assert mdx_path == tmp_path / "blog" / "2024" / "intro.mdx"
    assert json_path == tmp_path / "blog" / "2024" / "intro.json"
    assert mdx_path.exists() and json_path.exists()


def test_run_export_published_only(catalog, tmp_path):
    """Only published documents are written, newest first."""
    results = run_export(catalog, tmp_path)
    assert [slug for slug, _ in results] == ["b.mdx", "2024/intro.mdx"]
    assert not (tmp_path / "blog" / "c.mdx").exists()


def test_run_export_index(catalog, tmp_path):
    """index.json holds site metadata and the truncated listing."""
    run_export(catalog, tmp_path, max_display=1, site={"title": "Dev Chronicles"})
    index = json.loads((tmp_path / "index.json").read_text(encoding="utf-8"))
    assert index["site"] == {"title": "Dev Chronicles"}
    assert [p["slug"] for p in index["posts"]] == ["b.mdx"]


def test_run_export_tag_pages(catalog, tmp_path):
    """One JSON file per published tag slug."""
    run_export(catalog, tmp_path)
    tags = sorted(p.name for p in (tmp_path / "tags").iterdir())
    assert tags == ["python.json"]
    data = json.loads((tmp_path / "tags" / "python.json").read_text(encoding="utf-8"))
    assert data["tag"] == "python"
    assert [p["title"] for p in data["posts"]] == ["Intro"]


def test_build_mdx_keeps_author_keys(make_post):
    """Author keys outside the validated set pass through to the exported header."""
    source = MemorySource()
    source.add("posts/a.mdx", make_post("A", published=True, cover="hero.png", slug="ignored"))
    doc = DocumentCatalog.load(source).find_by_slug("a.mdx")
    fm = _frontmatter(build_mdx(doc))
    assert fm["cover"] == "hero.png"
    assert fm["slug"] == "a.mdx"


def test_run_export_rebuilds_output(make_post, tmp_path):
    """Re-exporting after a post is unpublished removes its post and tag files."""
    out = tmp_path / "dist"
    source = MemorySource()
    source.add("posts/a.mdx", make_post("A", "2024-01-10", published=True, tags=["old"]))
    source.add("posts/b.mdx", make_post("B", "2024-01-11", published=True))
    run_export(DocumentCatalog.load(source), out)
    assert (out / "blog" / "a.mdx").exists()
    assert (out / "tags" / "old.json").exists()

    source = MemorySource()
    source.add("posts/a.mdx", make_post("A", "2024-01-10", published=False, tags=["old"]))
    source.add("posts/b.mdx", make_post("B", "2024-01-11", published=True))
    results = run_export(DocumentCatalog.load(source), out)

    assert results == [("b.mdx", out / "blog" / "b.mdx")]
    files = sorted(p.relative_to(out).as_posix() for p in out.rglob("*") if p.is_file())
    assert files == ["blog/b.json", "blog/b.mdx", "index.json"]


def test_run_export_leaves_unmanaged_files(catalog, tmp_path):
    """Files outside blog/, tags/ and index.json survive; no staging dir is left behind."""
    out = tmp_path / "dist"
    out.mkdir()
    (out / "robots.txt").write_text("User-agent: *\n")
    run_export(catalog, out)
    assert (out / "robots.txt").read_text() == "User-agent: *\n"
    assert [p.name for p in tmp_path.iterdir()] == ["dist"]


def test_run_export_rejects_colliding_outputs(make_post, tmp_path):
    """a.md and a.mdx are distinct slugs but would share blog/a.mdx."""
    out = tmp_path / "dist"
    run_export(DocumentCatalog.load(MemorySource([])), out)
    source = MemorySource()
    source.add("posts/a.md", make_post("A md", published=True))
    source.add("posts/a.mdx", make_post("A mdx", published=True))
    with pytest.raises(OutputCollisionError) as exc:
        run_export(DocumentCatalog.load(source), out)
    assert exc.value.target == "blog/a.mdx"
    assert set(exc.value.slugs) == {"a.md", "a.mdx"}
    assert not (out / "blog").exists()
    assert (out / "index.json").exists()

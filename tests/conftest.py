"""Root test configuration: source-text and content-directory builders"""

import pytest
import yaml


def _post(title="Post", date="2024-01-01", body="Body.\n", **fields) -> str:
    """Render a source file: YAML frontmatter from the given fields, then body.

    Pass title=None or date=None to omit the key entirely.
    """
    fm = {k: v for k, v in {"title": title, "date": date, **fields}.items() if v is not None}
    header = yaml.safe_dump(fm, sort_keys=False, allow_unicode=True)
    return f"---\n{header}---\n{body}"


@pytest.fixture(name="make_post")
def make_post_fixture():
    return _post


@pytest.fixture(name="content_dir")
def content_dir_fixture(tmp_path):
    """A 'data' content root with a 'posts' collection of three sample posts."""
    root = tmp_path / "data"
    posts = root / "posts"
    posts.mkdir(parents=True)
    (posts / "a.mdx").write_text(
        _post("A", "2024-01-10", published=True, tags=["python", "Next.js"], summary="About A",
              body="## Setup\n\nText.\n\n### Install\n\nMore.\n"),
        encoding="utf-8",
    )
    (posts / "b.mdx").write_text(
        _post("B", "2024-03-05", published=True, tags=["python"]), encoding="utf-8",
    )
    (posts / "c.mdx").write_text(
        _post("C", "2024-02-01", published=False, tags=["draft-ideas"]), encoding="utf-8",
    )
    return root

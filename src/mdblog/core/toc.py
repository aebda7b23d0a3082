"""Table-of-contents extraction from markdown-it heading tokens"""

from mdblog.core.models import Heading
from mdblog.core.parse import make_parser
from mdblog.core.utils.slug import slugify


TOC_LEVELS = (2, 3)


def heading_level(token) -> int | None:
    """Return the heading level (1-6) for a heading_open token, else None."""
    if token.type == 'heading_open' and token.tag and token.tag[0] == 'h' and token.tag[1:].isdigit():
        return int(token.tag[1:])
    return None


def _inline_text(token) -> str:
    """Plain text of an inline token, dropping emphasis/link markup."""
    if not token.children:
        return token.content.strip()
    return ''.join(c.content for c in token.children if c.type in ('text', 'code_inline')).strip()


def _unique_anchor(base: str, seen: dict[str, int]) -> str:
    """Suffix repeated anchors with -1, -2, ... in order of appearance."""
    count = seen.get(base, 0)
    seen[base] = count + 1
    return base if count == 0 else f"{base}-{count}"


def extract_toc(markdown: str, parser_config: str = 'gfm-like', levels: tuple[int, ...] = TOC_LEVELS) -> tuple[Heading, ...]:
    """Return headings at the given levels with unique anchor ids, in document order."""
    tokens = make_parser(parser_config).parse(markdown)
    seen: dict[str, int] = {}
    headings = []
    for i, tok in enumerate(tokens):
        level = heading_level(tok)
        if level not in levels:
            continue
        text = _inline_text(tokens[i + 1])
        headings.append(Heading(level=level, text=text, anchor=_unique_anchor(slugify(text), seen)))
    return tuple(headings)

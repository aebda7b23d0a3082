"""Content domain models: source items, body handles, and validated documents"""

from datetime import date, datetime, time, timezone
from types import MappingProxyType
from typing import Annotated, Any, Mapping

from pydantic import (
    BaseModel, ConfigDict, Field, StrictBool, StringConstraints,
    computed_field, field_validator,
)

from mdblog.core.utils.slug import slugify


NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


def parse_date(value: Any) -> datetime:
    """Parse a YAML date/timestamp or ISO-8601 string into an aware UTC datetime.

    Naive values are read as UTC. Raises ValueError for anything else.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime.combine(value, time())
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(('Z', 'z')):
            text = text[:-1] + '+00:00'
        try:
            dt = datetime.fromisoformat(text)
        except ValueError as e:
            raise ValueError(f"unparsable date {value!r}") from e
    else:
        raise ValueError(f"expected a date, got {type(value).__name__}")

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def freeze(value: Any) -> Any:
    """Read-only deep copy of parsed YAML: mappings become proxies, lists become tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    return value


def thaw(value: Any) -> Any:
    """Plain dict/list copy of a frozen value, e.g. for YAML output."""
    if isinstance(value, Mapping):
        return {k: thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [thaw(v) for v in value]
    return value


class SourceItem(BaseModel):
    """One raw source file: content-root-relative POSIX path plus full text."""
    model_config = ConfigDict(frozen=True)
    path: str
    raw: str


class Heading(BaseModel):
    """A table-of-contents entry."""
    model_config = ConfigDict(frozen=True)
    level: int
    text: str
    anchor: str


class Body(BaseModel):
    """Opaque content handle: raw MDX source, passed through unmodified."""
    model_config = ConfigDict(frozen=True)
    raw: str
    toc: tuple[Heading, ...] = ()


class Document(BaseModel):
    """A validated, immutable content item. Built only by the loader."""
    model_config = ConfigDict(frozen=True, extra='forbid')

    slug:        NonEmptyStr
    path:        str
    title:       NonEmptyStr
    date:        datetime                   # aware, UTC
    tags:        tuple[NonEmptyStr, ...] = ()
    summary:     str = ""
    published:   StrictBool = False
    body:        Body
    frontmatter: Mapping[str, Any] = Field(default_factory=lambda: MappingProxyType({}))

    @field_validator('date', mode='before')
    @classmethod
    def coerce_date(cls, value: Any) -> datetime:
        return parse_date(value)

    @field_validator('tags')
    @classmethod
    def check_tags(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        for tag in value:
            if not slugify(tag):
                raise ValueError(f"tag {tag!r} has no letters or digits to link to")
        return value

    @field_validator('frontmatter')
    @classmethod
    def freeze_frontmatter(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return freeze(value)

    @computed_field
    @property
    def url(self) -> str:
        return f"/blog/{self.slug}"

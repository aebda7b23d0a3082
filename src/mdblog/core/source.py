"""Document sources: the raw, content-root-relative files a catalog is built from"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from mdblog.core.errors import LoadValidationError
from mdblog.core.models import SourceItem
from mdblog.core.parse import discover_files


class DocumentSource(ABC):
    @abstractmethod
    def items(self) -> Iterator[SourceItem]:
        """Yield every source item in a stable order."""
        raise NotImplementedError


@dataclass
class MemorySource(DocumentSource):
    _items: list[SourceItem] = field(default_factory=list)

    def add(self, path: str, raw: str) -> SourceItem:
        item = SourceItem(path=path, raw=raw)
        self._items.append(item)
        return item

    def items(self) -> Iterator[SourceItem]:
        return iter(list(self._items))


class FileSystemSource(DocumentSource):
    """Reads files matching pattern under root; paths are root-relative POSIX strings."""

    def __init__(self, root: Path, pattern: str = '**/*.mdx'):
        self.root = Path(root)
        self.pattern = pattern

    def items(self) -> Iterator[SourceItem]:
        if not self.root.is_dir():
            raise LoadValidationError(str(self.root), "content directory not found")
        for p in discover_files(self.root, self.pattern):
            rel = p.relative_to(self.root).as_posix()
            try:
                raw = p.read_text(encoding='utf-8')
            except (OSError, UnicodeDecodeError) as e:
                raise LoadValidationError(rel, f"unreadable source: {e}") from e
            yield SourceItem(path=rel, raw=raw)

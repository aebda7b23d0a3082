"""Catalog error hierarchy: load-time validation, duplicate slugs, and lookups"""


class CatalogError(Exception):
    """Base class for all catalog errors."""


class LoadValidationError(CatalogError, ValueError):
    """A source document failed validation while the catalog was being built."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class DuplicateSlugError(CatalogError, ValueError):
    """Two source documents resolved to the same slug."""

    def __init__(self, slug: str, first_path: str, second_path: str):
        self.slug = slug
        self.paths = (first_path, second_path)
        super().__init__(f"Duplicate slug '{slug}': {first_path} and {second_path}")


class OutputCollisionError(CatalogError, ValueError):
    """Two distinct slugs map to the same exported file (e.g. 'a.md' and 'a.mdx')."""

    def __init__(self, target: str, first_slug: str, second_slug: str):
        self.target = target
        self.slugs = (first_slug, second_slug)
        super().__init__(f"Slugs '{first_slug}' and '{second_slug}' both export to {target}")


class NotFoundError(CatalogError, LookupError):
    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"Document not found: {slug}")

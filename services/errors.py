"""Error taxonomy for the content pipeline.

SchemaError is per-item: the loader records it and moves on. Everything else
aborts the load.
"""


class ContentError(Exception):
    """Base class for content pipeline failures."""

    kind = "content_error"


class SchemaError(ContentError):
    """One content item failed validation. Carries every violation, not just the first."""

    kind = "schema_error"

    def __init__(self, source, errors):
        self.source = source
        self.errors = list(errors)
        detail = "; ".join(self.errors) if self.errors else "invalid entry"
        super().__init__(f"{source or '<unknown>'}: {detail}")


class DuplicateSlugError(ContentError):
    kind = "duplicate_slug"

    def __init__(self, collection: str, slug: str, sources: list[str]):
        self.collection = collection
        self.slug = slug
        self.sources = list(sources)
        super().__init__(
            f"Duplicate slug {slug!r} in collection {collection!r}: {', '.join(self.sources)}"
        )


class EmptyCollectionError(ContentError):
    kind = "empty_collection"

    def __init__(self, collection: str, rejected: int = 0):
        self.collection = collection
        self.rejected = rejected
        super().__init__(
            f"Collection {collection!r} has no valid items ({rejected} rejected)"
        )


class MissingSourceError(ContentError):
    kind = "missing_source"

    def __init__(self, path: str, reason: str = "not found"):
        self.path = path
        super().__init__(f"Content source {path!r} {reason}")


class UnknownCollectionError(ContentError):
    kind = "unknown_collection"

    def __init__(self, name: str, available: list[str]):
        self.name = name
        self.available = list(available)
        super().__init__(f"Unknown collection: {name!r} (available: {', '.join(self.available)})")


class SiteConfigError(ContentError):
    kind = "site_config"

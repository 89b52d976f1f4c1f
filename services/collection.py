"""Collection loader: scan a content directory into an ordered, validated snapshot.

Per-item failures (unreadable file, bad YAML, schema violations, empty slug)
exclude that item and are reported together once the pass is done. Duplicate
slugs, a missing source directory and an empty required collection abort the
load.
"""

import logging
import os
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from config import CONTENT_EXTENSIONS, get_content_dir
from services.errors import (
    DuplicateSlugError,
    EmptyCollectionError,
    MissingSourceError,
    SchemaError,
    UnknownCollectionError,
)
from services.frontmatter import parse_frontmatter
from services.models import ContentItem
from services.schema import BLOG_SCHEMA, validate
from services.slugs import derive_slug

log = logging.getLogger(__name__)

COLLECTIONS = {
    "blog": {"schema": BLOG_SCHEMA, "required": True},
}


class Collection(Sequence):
    """Immutable, ordered set of valid items plus the per-item errors of the load."""

    def __init__(self, name: str, items, errors=()):
        self.name = name
        self.items = tuple(items)
        self.errors = tuple(errors)
        self._by_slug = {item.slug: item for item in self.items}

    def __getitem__(self, index):
        return self.items[index]

    def __len__(self) -> int:
        return len(self.items)

    def __repr__(self) -> str:
        return f"Collection({self.name!r}, items={len(self.items)}, errors={len(self.errors)})"

    def get(self, slug: str) -> ContentItem | None:
        return self._by_slug.get(slug)


def discover(root: str) -> list[str]:
    """Return content file paths relative to root, in a stable (sorted walk) order.

    Hidden entries and names starting with '_' are skipped.
    """
    found = []
    for dirpath, dirs, files in os.walk(root):
        dirs[:] = sorted(d for d in dirs if not d.startswith((".", "_")))
        rel_root = os.path.relpath(dirpath, root)
        for fname in sorted(files):
            if fname.startswith((".", "_")):
                continue
            if os.path.splitext(fname)[1].lower() not in CONTENT_EXTENSIONS:
                continue
            rel_path = fname if rel_root == "." else os.path.join(rel_root, fname)
            found.append(rel_path.replace(os.sep, "/"))
    return found


def load_item(root: str, rel_path: str, collection: str, schema: dict = BLOG_SCHEMA) -> ContentItem:
    """Build one ContentItem from root/rel_path. Raises SchemaError on any per-item failure."""
    abs_path = os.path.join(root, rel_path)
    try:
        with open(abs_path, encoding="utf-8") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise SchemaError(rel_path, [f"Could not read file: {e}"]) from e

    fm, body = parse_frontmatter(content, source=rel_path)
    metadata = validate(fm, source=rel_path, schema=schema)

    slug = derive_slug(rel_path, override=metadata.slug)
    if not slug:
        raise SchemaError(rel_path, ["Derived slug is empty"])

    return ContentItem(id=rel_path, collection=collection, slug=slug, metadata=metadata, body=body)


def _try_load(root, rel_path, collection, schema):
    try:
        return load_item(root, rel_path, collection, schema), None
    except SchemaError as e:
        return None, e


def load_collection(name: str, content_dir: str = None, workers: int = None) -> Collection:
    """Load every item of the named collection.

    Output order equals enumeration order, also when workers > 1.
    """
    spec = COLLECTIONS.get(name)
    if spec is None:
        raise UnknownCollectionError(name, sorted(COLLECTIONS))

    root = os.path.join(get_content_dir(content_dir), name)
    if not os.path.isdir(root):
        raise MissingSourceError(root)
    if not os.access(root, os.R_OK | os.X_OK):
        raise MissingSourceError(root, "is not readable")

    paths = discover(root)
    schema = spec["schema"]

    if workers and workers > 1 and len(paths) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(lambda p: _try_load(root, p, name, schema), paths))
    else:
        results = [_try_load(root, p, name, schema) for p in paths]

    items: list[ContentItem] = []
    errors: list[SchemaError] = []
    seen: dict[str, str] = {}
    for item, err in results:
        if err is not None:
            log.warning("Skipping %s/%s: %s", name, err.source, "; ".join(err.errors))
            errors.append(err)
            continue
        if item.slug in seen:
            raise DuplicateSlugError(name, item.slug, [seen[item.slug], item.id])
        seen[item.slug] = item.id
        items.append(item)

    if errors:
        log.error(
            "Collection %r: %d of %d item(s) rejected: %s",
            name,
            len(errors),
            len(paths),
            ", ".join(e.source for e in errors),
        )

    if not items and spec.get("required"):
        raise EmptyCollectionError(name, rejected=len(errors))

    log.info("Loaded collection %r: %d item(s) from %s", name, len(items), root)
    return Collection(name, items, errors)


def load_all(content_dir: str = None, workers: int = None) -> dict[str, Collection]:
    """Load every registered collection. Optional collections that are absent are skipped."""
    loaded = {}
    for name, spec in COLLECTIONS.items():
        try:
            loaded[name] = load_collection(name, content_dir=content_dir, workers=workers)
        except MissingSourceError:
            if spec.get("required"):
                raise
            log.info("Optional collection %r not present, skipping", name)
    return loaded

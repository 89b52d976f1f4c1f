"""Slug derivation: content path (or explicit override) to URL path segment."""

import os
import re
import unicodedata

from config import CONTENT_EXTENSIONS

_ILLEGAL_RE = re.compile(r"[^\w-]+")
_DASHES_RE = re.compile(r"-{2,}")


def _normalize_segment(segment: str) -> str:
    """Lowercase, collapse whitespace and URL-illegal characters to single hyphens."""
    segment = _ILLEGAL_RE.sub("-", segment.strip().lower())
    segment = _DASHES_RE.sub("-", segment)
    return segment.strip("-")


def normalize_slug(text: str) -> str:
    """NFC-normalize, then normalize every /-separated segment; empty segments are dropped."""
    text = unicodedata.normalize("NFC", text or "")
    parts = (_normalize_segment(p) for p in text.replace(os.sep, "/").split("/"))
    return "/".join(p for p in parts if p)


def derive_slug(rel_path: str, override: str | None = None) -> str:
    """Return the slug for an item at rel_path (relative to its collection root).

    An explicit override wins. Otherwise the extension is stripped and a trailing
    `index` collapses into its directory, so design/observer/index.md and
    design/observer.md both map to design/observer.
    """
    if override:
        return normalize_slug(override)

    path = rel_path.replace(os.sep, "/")
    stem, ext = os.path.splitext(path)
    if ext.lower() not in CONTENT_EXTENSIONS:
        stem = path
    parts = stem.split("/")
    if len(parts) > 1 and parts[-1].lower() == "index":
        parts = parts[:-1]
    return normalize_slug("/".join(parts))

"""Query helpers over a loaded collection: filtering, sorting, grouping, search.

Every function is pure and total. Inputs are never modified; a new list is returned.
"""

import math
import re
from collections import Counter

from config import WORDS_PER_MINUTE
from services.models import ContentItem

_WORD_RE = re.compile(r"\S+")


def exclude_drafts(items) -> list[ContentItem]:
    """Drop draft items. Used for every public listing."""
    return [item for item in items if not item.draft]


def sort_by_date_descending(items) -> list[ContentItem]:
    """Newest first. Stable, so same-day items keep their load order."""
    return sorted(items, key=lambda item: item.publish_date, reverse=True)


def published(items) -> list[ContentItem]:
    """The public listing: non-drafts, newest first."""
    return sort_by_date_descending(exclude_drafts(items))


def latest(items, n: int) -> list[ContentItem]:
    return published(items)[: max(n, 0)]


def filter_by_tag(items, tag: str) -> list[ContentItem]:
    """Exact, case-sensitive tag match."""
    return [item for item in items if tag in item.tags]


def search(items, query: str, include_tags: bool = True) -> list[ContentItem]:
    """Case-insensitive substring match on title and summary (and tags).

    Results keep input order; there is no ranking.
    """
    needle = (query or "").casefold()
    results = []
    for item in items:
        haystack = [item.title, item.summary]
        if include_tags:
            haystack.extend(item.tags)
        if any(needle in text.casefold() for text in haystack):
            results.append(item)
    return results


def tag_counts(items) -> list[tuple[str, int]]:
    """(tag, count) pairs, most used first, then alphabetical."""
    counts = Counter(tag for item in items for tag in item.tags)
    return sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))


def group_by_tag(items) -> dict[str, list[ContentItem]]:
    """Tag → items carrying it, tags in alphabetical order, items in input order."""
    groups: dict[str, list[ContentItem]] = {}
    for tag in sorted({tag for item in items for tag in item.tags}):
        groups[tag] = filter_by_tag(items, tag)
    return groups


def group_by_year(items) -> list[tuple[int, list[ContentItem]]]:
    """Archive view: (year, items) with years descending, items newest first."""
    groups: dict[int, list[ContentItem]] = {}
    for item in sort_by_date_descending(items):
        groups.setdefault(item.publish_date.year, []).append(item)
    return sorted(groups.items(), key=lambda kv: kv[0], reverse=True)


def adjacent(items, slug: str) -> tuple[ContentItem | None, ContentItem | None]:
    """(previous, next) neighbours of slug within items, or (None, None) if absent.

    With a newest-first listing, previous is the newer post and next the older one.
    """
    items = list(items)
    for i, item in enumerate(items):
        if item.slug == slug:
            prev_item = items[i - 1] if i > 0 else None
            next_item = items[i + 1] if i + 1 < len(items) else None
            return prev_item, next_item
    return None, None


def reading_time(item: ContentItem, words_per_minute: int = None) -> int:
    """Estimated minutes to read the body, never less than 1."""
    wpm = words_per_minute or WORDS_PER_MINUTE
    words = len(_WORD_RE.findall(item.body))
    return max(1, math.ceil(words / wpm))

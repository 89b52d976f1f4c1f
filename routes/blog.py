"""Blog preview endpoints: listing, single post, archive, tags, search.

Every request loads a fresh snapshot of the collection, so edits to content
files show up without a restart.
"""

from flask import Blueprint, current_app, jsonify, request

from config import CONTENT_DIR, LOAD_WORKERS
from services.collection import load_collection
from services.errors import ContentError
from services.query import (
    adjacent,
    exclude_drafts,
    filter_by_tag,
    group_by_year,
    published,
    reading_time,
    search,
    sort_by_date_descending,
    tag_counts,
)

bp = Blueprint("blog", __name__)

_COLLECTION = "blog"


def _truthy(value) -> bool:
    return (value or "").lower() in ("1", "true", "yes", "on")


def _load():
    return load_collection(
        _COLLECTION,
        content_dir=current_app.config.get("CONTENT_DIR") or CONTENT_DIR,
        workers=current_app.config.get("LOAD_WORKERS") or LOAD_WORKERS,
    )


def _listing(items) -> list:
    """Public listing by default; ?drafts=1 keeps drafts for preview."""
    if _truthy(request.args.get("drafts")):
        return sort_by_date_descending(items)
    return published(items)


def _summary(item) -> dict:
    data = item.to_dict()
    data["reading_time"] = reading_time(item)
    return data


@bp.errorhandler(ContentError)
def content_error(e):
    return jsonify({"error": str(e), "kind": e.kind}), 500


@bp.route("/api/blog")
def blog_index():
    """Published posts, newest first. Optional ?limit=N and ?drafts=1."""
    items = _listing(_load())
    limit = request.args.get("limit")
    if limit is not None:
        try:
            items = items[: max(int(limit), 0)]
        except ValueError:
            return jsonify({"error": "limit must be an integer"}), 400
    return jsonify({"posts": [_summary(i) for i in items], "count": len(items)})


@bp.route("/api/blog/<path:slug>")
def blog_post(slug):
    """One post with body, reading time and newer/older neighbours."""
    listing = _listing(_load())
    item = next((i for i in listing if i.slug == slug), None)
    if item is None:
        return jsonify({"error": f"Not found: {slug}"}), 404

    newer, older = adjacent(listing, slug)
    data = item.to_dict(include_body=True)
    data["reading_time"] = reading_time(item)
    data["newer"] = {"slug": newer.slug, "title": newer.title} if newer else None
    data["older"] = {"slug": older.slug, "title": older.title} if older else None
    return jsonify(data)


@bp.route("/api/archive")
def blog_archive():
    """Published posts grouped by year, years descending."""
    groups = group_by_year(exclude_drafts(_load()))
    return jsonify(
        [{"year": year, "posts": [_summary(i) for i in items]} for year, items in groups]
    )


@bp.route("/api/tags")
def blog_tags():
    """Tag usage counts across published posts."""
    counts = tag_counts(exclude_drafts(_load()))
    return jsonify([{"tag": tag, "count": count} for tag, count in counts])


@bp.route("/api/tags/<path:tag>")
def blog_tag(tag):
    """Published posts carrying tag (exact, case-sensitive)."""
    items = filter_by_tag(published(_load()), tag)
    return jsonify({"tag": tag, "posts": [_summary(i) for i in items], "count": len(items)})


@bp.route("/api/search")
def blog_search():
    """Substring search over title, summary and tags of published posts.

    Query params:
        q     Search string. Blank returns no results.
        tags  "0" to search title and summary only.
    """
    q = request.args.get("q", "").strip()
    if not q:
        return jsonify({"query": "", "results": []})

    include_tags = request.args.get("tags", "1") != "0"
    results = search(published(_load()), q, include_tags=include_tags)
    return jsonify({"query": q, "results": [_summary(i) for i in results]})

"""Blog front-matter schema and validation."""

from datetime import date, datetime

from services.errors import SchemaError
from services.models import PostMetadata

BLOG_SCHEMA = {
    "title":   {"type": str,          "required": True},
    "summary": {"type": str,          "required": True},
    "date":    {"type": (str, date),  "required": True},    # YYYY-MM-DD or YAML date
    "draft":   {"type": bool,         "required": False, "default": False},
    "tags":    {"type": list,         "required": False, "default": []},
    "slug":    {"type": str,          "required": False},   # explicit URL override
}

# Long forms seen in older posts ("Mar 22 2024", "March 22, 2024").
_DATE_FORMATS = ("%Y-%m-%d", "%Y/%m/%d", "%b %d %Y", "%B %d %Y", "%b %d, %Y", "%B %d, %Y")


def _type_name(expected) -> str:
    if isinstance(expected, tuple):
        return " or ".join(t.__name__ for t in expected)
    return expected.__name__


def parse_date(value) -> date:
    """Coerce a front-matter date value to a calendar date. Raises ValueError."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"not a date: {value!r}")

    text = value.strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    try:
        # ISO datetimes, including a trailing Z
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        raise ValueError(f"unparseable date: {value!r}") from None


def validate_frontmatter(fm: dict, schema: dict = BLOG_SCHEMA) -> list[str]:
    """Return list of validation errors. Empty list means valid."""
    errors = []

    for field, spec in schema.items():
        value = fm.get(field)
        if spec.get("required") and value is None:
            errors.append(f"Missing required field: {field!r}")
            continue
        if value is not None and not isinstance(value, spec["type"]):
            expected = _type_name(spec["type"])
            got = type(value).__name__
            errors.append(f"Field {field!r} must be {expected}, got {got}")

    title = fm.get("title")
    if isinstance(title, str) and not title.strip():
        errors.append("Field 'title' must not be empty")

    tags = fm.get("tags")
    if isinstance(tags, list):
        bad = [t for t in tags if not isinstance(t, str)]
        if bad:
            errors.append(f"Field 'tags' must contain only strings, got {bad!r}")

    raw_date = fm.get("date")
    if raw_date is not None and isinstance(raw_date, (str, date)):
        try:
            parse_date(raw_date)
        except ValueError:
            errors.append(f"Field 'date' is not a valid calendar date: {raw_date!r}")

    return errors


def validate(fm: dict, source: str | None = None, schema: dict = BLOG_SCHEMA) -> PostMetadata:
    """Validate front-matter and return typed metadata with defaults applied.

    Raises SchemaError listing every violated field.
    """
    if not isinstance(fm, dict):
        raise SchemaError(source, [f"Front-matter must be a mapping, got {type(fm).__name__}"])

    errors = validate_frontmatter(fm, schema)
    if errors:
        raise SchemaError(source, errors)

    def _get(field):
        value = fm.get(field)
        if value is None:
            return schema.get(field, {}).get("default")
        return value

    return PostMetadata(
        title=fm["title"],
        summary=fm["summary"],
        publish_date=parse_date(fm["date"]),
        draft=bool(_get("draft")),
        tags=frozenset(_get("tags") or ()),
        slug=_get("slug"),
    )

"""Tests for the collection loader: enumeration, per-item errors, fatal errors."""

import logging
from datetime import date
from unittest.mock import patch

import pytest

from services.collection import Collection, discover, load_all, load_collection
from services.errors import (
    DuplicateSlugError,
    EmptyCollectionError,
    MissingSourceError,
    SchemaError,
    UnknownCollectionError,
)
from services.schema import BLOG_SCHEMA


def _post(title, day="2024-01-01", summary="Summary.", extra=""):
    return f"---\ntitle: {title}\nsummary: {summary}\ndate: {day}\n{extra}---\n\nBody of {title}.\n"


@pytest.fixture()
def content_dir(tmp_path):
    """Content root with a blog collection of five files, one with a bad date."""
    blog = tmp_path / "blog"
    blog.mkdir()
    (blog / "a-first.md").write_text(_post("First", "2024-01-01"))
    (blog / "b-second.mdx").write_text(_post("Second", "2024-06-01"))
    (blog / "c-broken.md").write_text(_post("Broken", "not-a-date"))
    (blog / "d-fourth.md").write_text(_post("Fourth", "2023-12-01"))
    (blog / "e-fifth.md").write_text(_post("Fifth", "2024-03-01", extra="draft: true\n"))
    return tmp_path


# ---------------------------------------------------------------------------
# discover
# ---------------------------------------------------------------------------


def test_discover_sorted_and_filtered(tmp_path):
    (tmp_path / "sub").mkdir()
    (tmp_path / ".hidden").mkdir()
    (tmp_path / "_drafts").mkdir()
    (tmp_path / "z.md").write_text("")
    (tmp_path / "a.mdx").write_text("")
    (tmp_path / "sub" / "b.md").write_text("")
    (tmp_path / ".hidden" / "c.md").write_text("")
    (tmp_path / "_drafts" / "d.md").write_text("")
    (tmp_path / "_partial.md").write_text("")
    (tmp_path / "image.png").write_text("")
    assert discover(str(tmp_path)) == ["a.mdx", "z.md", "sub/b.md"]


# ---------------------------------------------------------------------------
# load_collection
# ---------------------------------------------------------------------------


def test_load_excludes_only_bad_item(content_dir, caplog):
    with caplog.at_level(logging.WARNING, logger="services.collection"):
        collection = load_collection("blog", content_dir=str(content_dir))

    assert isinstance(collection, Collection)
    assert [i.id for i in collection] == ["a-first.md", "b-second.mdx", "d-fourth.md", "e-fifth.md"]
    assert len(collection.errors) == 1
    err = collection.errors[0]
    assert isinstance(err, SchemaError)
    assert err.source == "c-broken.md"
    assert any("date" in e for e in err.errors)
    assert "c-broken.md" in caplog.text


def test_load_builds_typed_items(content_dir):
    collection = load_collection("blog", content_dir=str(content_dir))
    second = collection.get("b-second")
    assert second is not None
    assert second.collection == "blog"
    assert second.title == "Second"
    assert second.publish_date == date(2024, 6, 1)
    assert second.draft is False
    assert second.body == "\nBody of Second.\n"
    assert collection.get("e-fifth").draft is True


def test_load_is_idempotent(content_dir):
    first = load_collection("blog", content_dir=str(content_dir))
    second = load_collection("blog", content_dir=str(content_dir))
    assert list(first) == list(second)


def test_parallel_load_keeps_enumeration_order(content_dir):
    sequential = load_collection("blog", content_dir=str(content_dir))
    parallel = load_collection("blog", content_dir=str(content_dir), workers=4)
    assert [i.id for i in parallel] == [i.id for i in sequential]
    assert [e.source for e in parallel.errors] == ["c-broken.md"]


def test_nested_and_override_slugs(tmp_path):
    blog = tmp_path / "blog"
    (blog / "patterns" / "proxy").mkdir(parents=True)
    (blog / "patterns" / "proxy" / "index.md").write_text(_post("Proxy"))
    (blog / "old-name.md").write_text(_post("Renamed", extra="slug: New Name\n"))
    collection = load_collection("blog", content_dir=str(tmp_path))
    assert {i.slug for i in collection} == {"patterns/proxy", "new-name"}


def test_duplicate_slug_is_fatal(tmp_path):
    blog = tmp_path / "blog"
    blog.mkdir()
    (blog / "Hello World.md").write_text(_post("One"))
    (blog / "hello-world.md").write_text(_post("Two"))
    with pytest.raises(DuplicateSlugError) as exc_info:
        load_collection("blog", content_dir=str(tmp_path))
    assert exc_info.value.slug == "hello-world"
    assert sorted(exc_info.value.sources) == ["Hello World.md", "hello-world.md"]


def test_duplicate_via_override_is_fatal(tmp_path):
    blog = tmp_path / "blog"
    blog.mkdir()
    (blog / "observer.md").write_text(_post("One"))
    (blog / "other.md").write_text(_post("Two", extra="slug: observer\n"))
    with pytest.raises(DuplicateSlugError):
        load_collection("blog", content_dir=str(tmp_path))


def test_empty_collection_is_fatal(tmp_path):
    blog = tmp_path / "blog"
    blog.mkdir()
    (blog / "bad.md").write_text("---\ntitle: Only\n---\nNo summary or date.\n")
    with pytest.raises(EmptyCollectionError) as exc_info:
        load_collection("blog", content_dir=str(tmp_path))
    assert exc_info.value.rejected == 1


def test_missing_source_is_fatal(tmp_path):
    with pytest.raises(MissingSourceError):
        load_collection("blog", content_dir=str(tmp_path / "nowhere"))


def test_unknown_collection(tmp_path):
    with pytest.raises(UnknownCollectionError):
        load_collection("recipes", content_dir=str(tmp_path))


def test_undecodable_file_is_per_item(tmp_path):
    blog = tmp_path / "blog"
    blog.mkdir()
    (blog / "good.md").write_text(_post("Good"))
    (blog / "binary.md").write_bytes(b"\xff\xfe\x00garbage")
    collection = load_collection("blog", content_dir=str(tmp_path))
    assert [i.id for i in collection] == ["good.md"]
    assert collection.errors[0].source == "binary.md"


def test_optional_collection_skipped_when_absent(content_dir):
    registry = {
        "blog": {"schema": BLOG_SCHEMA, "required": True},
        "projects": {"schema": BLOG_SCHEMA, "required": False},
    }
    with patch("services.collection.COLLECTIONS", registry):
        loaded = load_all(content_dir=str(content_dir))
    assert list(loaded) == ["blog"]


def test_default_content_dir_from_settings(content_dir):
    with patch("config._read_setting", return_value=str(content_dir)):
        collection = load_collection("blog")
    assert len(collection) == 4

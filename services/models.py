"""Typed content records produced by the loader."""

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class PostMetadata:
    title: str
    summary: str
    publish_date: date
    draft: bool = False
    tags: frozenset[str] = field(default_factory=frozenset)
    slug: str | None = None


@dataclass(frozen=True)
class ContentItem:
    """One validated article. Built once per load, never mutated."""

    id: str
    collection: str
    slug: str
    metadata: PostMetadata
    body: str = field(default="", repr=False)

    @property
    def title(self) -> str:
        return self.metadata.title

    @property
    def summary(self) -> str:
        return self.metadata.summary

    @property
    def publish_date(self) -> date:
        return self.metadata.publish_date

    @property
    def draft(self) -> bool:
        return self.metadata.draft

    @property
    def tags(self) -> frozenset[str]:
        return self.metadata.tags

    def to_dict(self, include_body: bool = False) -> dict:
        data = {
            "id": self.id,
            "collection": self.collection,
            "slug": self.slug,
            "title": self.title,
            "summary": self.summary,
            "date": self.publish_date.isoformat(),
            "draft": self.draft,
            "tags": sorted(self.tags),
        }
        if include_body:
            data["body"] = self.body
        return data

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional

# Frontmatter key -> Article attribute, in the order keys are written back out.
SCHEMA_KEYS: Dict[str, str] = {
    "title": "title",
    "excerpt": "excerpt",
    "category": "category",
    "date": "date",
    "publishedAt": "published_at",
    "updatedAt": "updated_at",
    "readingTime": "reading_time",
    "author": "author",
    "tags": "tags",
}


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _iso(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


@dataclass(slots=True, frozen=True)
class CategoryRef:
    name: str
    slug: str


@dataclass(slots=True, frozen=True)
class AuthorRef:
    name: str
    slug: str


def _ref(cls, value: Any):
    if not isinstance(value, Mapping):
        return None
    return cls(name=str(value.get("name") or ""), slug=str(value.get("slug") or ""))


@dataclass(slots=True)
class Article:
    """One article: frontmatter metadata plus the Markdown body.

    Dates are kept as ISO-8601 strings. Frontmatter keys outside the schema
    are carried in ``extra`` so writing an article back loses nothing.
    """

    title: str
    body: str = ""
    excerpt: Optional[str] = None
    category: Optional[CategoryRef] = None
    date: Optional[str] = None
    published_at: Optional[str] = None
    updated_at: Optional[str] = None
    reading_time: Optional[str] = None
    author: Optional[AuthorRef] = None
    tags: List[str] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    # Location in the corpus; not part of the content itself
    source_path: Optional[str] = field(default=None, compare=False)
    index: int = field(default=0, compare=False)

    @classmethod
    def from_metadata(
        cls,
        metadata: Mapping[str, Any],
        body: str = "",
        *,
        source_path: Optional[str] = None,
        index: int = 0,
    ) -> "Article":
        """Build an article from a parsed frontmatter mapping.

        The mapping is expected to have passed validation; values of an
        unexpected shape are coerced leniently rather than rejected here.
        """
        tags = metadata.get("tags") or []
        if not isinstance(tags, list):
            tags = [tags]
        return cls(
            title=_text(metadata.get("title")) or "",
            body=body,
            excerpt=_text(metadata.get("excerpt")),
            category=_ref(CategoryRef, metadata.get("category")),
            date=_iso(metadata.get("date")),
            published_at=_iso(metadata.get("publishedAt")),
            updated_at=_iso(metadata.get("updatedAt")),
            reading_time=_text(metadata.get("readingTime")),
            author=_ref(AuthorRef, metadata.get("author")),
            tags=[str(t) for t in tags if t is not None],
            extra={k: v for k, v in metadata.items() if k not in SCHEMA_KEYS},
            source_path=source_path,
            index=index,
        )

    def to_metadata(self) -> Dict[str, Any]:
        """Return the frontmatter mapping using the on-disk key names."""
        meta: Dict[str, Any] = {}
        for key, attr in SCHEMA_KEYS.items():
            value = getattr(self, attr)
            if value is None:
                continue
            if isinstance(value, (CategoryRef, AuthorRef)):
                value = {"name": value.name, "slug": value.slug}
            elif attr == "tags":
                if not value:
                    continue
                value = list(value)
            meta[key] = value
        meta.update(self.extra)
        return meta

    @property
    def category_slug(self) -> Optional[str]:
        return self.category.slug if self.category else None

    @property
    def author_slug(self) -> Optional[str]:
        return self.author.slug if self.author else None

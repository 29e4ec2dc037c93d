from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List

from ..content.slugs import tag_to_slug
from ..models import Article


@dataclass(slots=True)
class TaxonomyCount:
    name: str
    slug: str
    count: int


def collect_tags(articles: Iterable[Article]) -> List[TaxonomyCount]:
    """Count tag usage across articles.

    Tags are keyed by their slug so "Docker" and "docker" are one tag; the
    casing of the first occurrence is kept as the display name.
    """
    counts: Dict[str, TaxonomyCount] = {}
    for art in articles:
        for tag in art.tags:
            slug = tag_to_slug(tag)
            if not slug:
                continue
            existing = counts.get(slug)
            if existing:
                existing.count += 1
            else:
                counts[slug] = TaxonomyCount(name=tag, slug=slug, count=1)
    return sorted(counts.values(), key=lambda t: (-t.count, t.slug))


def collect_categories(articles: Iterable[Article]) -> List[TaxonomyCount]:
    counts: Dict[str, TaxonomyCount] = {}
    for art in articles:
        if not art.category or not art.category.slug:
            continue
        slug = art.category.slug
        if slug in counts:
            counts[slug].count += 1
        else:
            counts[slug] = TaxonomyCount(name=art.category.name or slug, slug=slug, count=1)
    return sorted(counts.values(), key=lambda c: (-c.count, c.name.lower()))


def collect_authors(articles: Iterable[Article]) -> List[TaxonomyCount]:
    counts: Dict[str, TaxonomyCount] = {}
    for art in articles:
        if not art.author or not art.author.slug:
            continue
        slug = art.author.slug
        if slug in counts:
            counts[slug].count += 1
        else:
            counts[slug] = TaxonomyCount(name=art.author.name or slug, slug=slug, count=1)
    return sorted(counts.values(), key=lambda a: a.name.lower())


def articles_by_tag(articles: Iterable[Article], tag_slug: str) -> List[Article]:
    return [a for a in articles if any(tag_to_slug(t) == tag_slug for t in a.tags)]

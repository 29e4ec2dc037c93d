"""Corpus-wide tag, category and author summaries."""

from .taxonomy import (
    TaxonomyCount,
    articles_by_tag,
    collect_authors,
    collect_categories,
    collect_tags,
)

__all__ = [
    "TaxonomyCount",
    "articles_by_tag",
    "collect_authors",
    "collect_categories",
    "collect_tags",
]

"""Content handling: frontmatter parsing, multi-article splitting and validation."""

from .errors import (
    ContentError,
    FieldError,
    InvalidFieldError,
    MalformedFrontmatterError,
    MissingFieldError,
)
from .frontmatter import ParsedDocument, load_article, parse, serialize
from .splitter import DEFAULT_SEPARATOR, Chunk, split_articles
from .validate import REQUIRED_FIELDS, ConventionWarning, check_conventions, validate
from .slugs import is_url_safe_slug, slug_to_tag, tag_to_slug
from .links import LinkChecker, LinkStatus, extract_links, find_duplicate_links, find_invalid_links

__all__ = [
    "ContentError",
    "FieldError",
    "InvalidFieldError",
    "MalformedFrontmatterError",
    "MissingFieldError",
    "ParsedDocument",
    "load_article",
    "parse",
    "serialize",
    "DEFAULT_SEPARATOR",
    "Chunk",
    "split_articles",
    "REQUIRED_FIELDS",
    "ConventionWarning",
    "check_conventions",
    "validate",
    "is_url_safe_slug",
    "slug_to_tag",
    "tag_to_slug",
    "LinkChecker",
    "LinkStatus",
    "extract_links",
    "find_duplicate_links",
    "find_invalid_links",
]

from __future__ import annotations

import re

_whitespace_re = re.compile(r"\s+")
_non_slug_re = re.compile(r"[^\w-]+", re.ASCII)
_multi_hyphen_re = re.compile(r"--+")
_url_safe_re = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def tag_to_slug(tag: str) -> str:
    """Turn a free-text tag into its URL slug ("CI/CD Pipelines" -> "cicd-pipelines")."""
    slug = _whitespace_re.sub("-", (tag or "").lower())
    slug = _non_slug_re.sub("", slug)
    slug = _multi_hyphen_re.sub("-", slug)
    return slug.strip("-")


def slug_to_tag(slug: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in (slug or "").split("-"))


def is_url_safe_slug(value: object) -> bool:
    return isinstance(value, str) and bool(_url_safe_re.match(value))

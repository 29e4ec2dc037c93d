"""Split Markdown files into YAML frontmatter and body, and write them back.

A document looks like::

    ---
    title: 'Docker volumes explained'
    category:
      name: Docker
      slug: docker
    ---
    Markdown body...

The closing delimiter may also be ``...`` (YAML document end marker).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from ..models import Article
from .errors import MalformedFrontmatterError


DELIMITER = "---"
_CLOSING = {"---", "..."}


@dataclass(slots=True)
class ParsedDocument:
    metadata: Dict[str, Any] = field(default_factory=dict)
    body: str = ""
    # 1-based line numbers of the delimiters within the parsed text
    start_line: int = 1
    end_line: int = 1


def _normalize_newlines(text: str) -> str:
    if text.startswith("\ufeff"):
        text = text[1:]
    return text.replace("\r\n", "\n").replace("\r", "\n")


def parse(raw_text: str) -> ParsedDocument:
    """Parse ``raw_text`` into its frontmatter mapping and Markdown body.

    Raises :class:`MalformedFrontmatterError` when the opening or closing
    delimiter is missing, the block is not valid YAML, or it is not a mapping.
    """
    lines = _normalize_newlines(raw_text or "").split("\n")

    start = 0
    while start < len(lines) and not lines[start].strip():
        start += 1
    if start >= len(lines) or lines[start].rstrip() != DELIMITER:
        raise MalformedFrontmatterError(
            "missing opening '---' frontmatter delimiter",
            line=start + 1 if start < len(lines) else None,
        )

    end: Optional[int] = None
    for i in range(start + 1, len(lines)):
        if lines[i].rstrip() in _CLOSING:
            end = i
            break
    if end is None:
        raise MalformedFrontmatterError("missing closing '---' frontmatter delimiter", line=start + 1)

    block = "\n".join(lines[start + 1 : end])
    try:
        data = yaml.safe_load(block)
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        line = start + 2 + mark.line if mark is not None else None
        problem = getattr(exc, "problem", None) or str(exc)
        raise MalformedFrontmatterError(f"frontmatter is not valid YAML: {problem}", line=line) from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise MalformedFrontmatterError(
            f"frontmatter must be a mapping, got {type(data).__name__}", line=start + 2
        )

    body = "\n".join(lines[end + 1 :])
    return ParsedDocument(
        metadata={str(k): v for k, v in data.items()},
        body=body,
        start_line=start + 1,
        end_line=end + 1,
    )


def serialize(article: Union[Article, Mapping[str, Any]], body: Optional[str] = None) -> str:
    """Render an article (or a bare metadata mapping) as frontmatter + body."""
    if isinstance(article, Article):
        metadata: Mapping[str, Any] = article.to_metadata()
        body = article.body if body is None else body
    else:
        metadata = article
    dumped = yaml.safe_dump(
        dict(metadata),
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )
    return f"{DELIMITER}\n{dumped}{DELIMITER}\n{body or ''}"


def load_article(raw_text: str, *, source_path: Optional[str] = None, index: int = 0) -> Article:
    doc = parse(raw_text)
    return Article.from_metadata(doc.metadata, doc.body, source_path=source_path, index=index)

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List

DEFAULT_SEPARATOR = "<!-- ARTICLE SEPARATOR -->"

_fence_open_re = re.compile(r"^\s{0,3}(`{3,}|~{3,})")
# A closing fence carries no info string
_fence_close_re = re.compile(r"^\s{0,3}(`{3,}|~{3,})\s*$")


@dataclass(slots=True, frozen=True)
class Chunk:
    index: int
    text: str
    start_line: int  # 1-based line of the chunk's first line in the file
    unclosed_fence: bool = False


def split_articles(raw_text: str, separator: str = DEFAULT_SEPARATOR) -> List[Chunk]:
    """Split an export that concatenates several articles into one chunk per article.

    A separator counts when it is alone on its line. Articles are independent,
    so a separator also ends any code fence left open by the article before
    it; that chunk is flagged with ``unclosed_fence``. Whitespace-only chunks
    are dropped; indexes stay contiguous.
    """
    text = (raw_text or "").replace("\r\n", "\n").replace("\r", "\n")
    token = separator.strip()

    chunks: List[Chunk] = []
    current: List[str] = []
    current_start = 1
    fence: str | None = None

    def flush() -> None:
        body = "\n".join(current)
        if body.strip():
            chunks.append(
                Chunk(index=len(chunks), text=body, start_line=current_start, unclosed_fence=fence is not None)
            )

    for lineno, line in enumerate(text.split("\n"), start=1):
        if token and line.strip() == token:
            flush()
            current = []
            current_start = lineno + 1
            fence = None
            continue
        if fence is None:
            m = _fence_open_re.match(line)
            if m:
                fence = m.group(1)
        else:
            m = _fence_close_re.match(line)
            if m and m.group(1)[0] == fence[0] and len(m.group(1)) >= len(fence):
                fence = None
        current.append(line)

    flush()
    return chunks

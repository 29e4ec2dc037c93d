from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional

from .article import Article

Severity = Literal["error", "warning"]


@dataclass(slots=True, frozen=True)
class Diagnostic:
    """A single lint finding.

    ``index`` is the 0-based position of the article inside its file, or
    ``None`` for problems with the file as a whole (unreadable, not UTF-8).
    """

    path: str
    index: Optional[int]
    severity: Severity
    code: str
    message: str
    field: Optional[str] = None
    line: Optional[int] = None

    @property
    def location(self) -> str:
        loc = self.path
        if self.line is not None:
            loc += f":{self.line}"
        if self.index is not None:
            loc += f"#{self.index}"
        return loc


@dataclass(slots=True)
class FileResult:
    path: str
    articles: List[Article] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == "error"]

    @property
    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == "warning"]

    @property
    def ok(self) -> bool:
        return not self.errors

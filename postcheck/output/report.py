from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import List, Sequence

from ..analysis import TaxonomyCount
from ..models import Diagnostic, FileResult


def _now_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat()


@dataclass(slots=True)
class LintReport:
    files: List[FileResult]
    generated_at: str = field(default_factory=_now_iso)

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return [d for f in self.files for d in f.diagnostics]

    @property
    def article_count(self) -> int:
        return sum(len(f.articles) for f in self.files)

    @property
    def error_count(self) -> int:
        return sum(len(f.errors) for f in self.files)

    @property
    def warning_count(self) -> int:
        return sum(len(f.warnings) for f in self.files)

    def exit_code(self, *, strict: bool = False) -> int:
        if self.error_count or (strict and self.warning_count):
            return 1
        return 0

    def summary_line(self) -> str:
        return (
            f"{len(self.files)} file(s), {self.article_count} article(s): "
            f"{self.error_count} error(s), {self.warning_count} warning(s)"
        )

    def to_text(self) -> str:
        lines = []
        for d in self.diagnostics:
            where = f" {d.field}" if d.field else ""
            lines.append(f"{d.location}: {d.severity} {d.code}{where}: {d.message}")
        lines.append(self.summary_line())
        return "\n".join(lines) + "\n"

    def to_markdown(self) -> str:
        problems = "\n".join(
            f"- `{d.location}` **{d.severity}** {d.code}{f' (`{d.field}`)' if d.field else ''}: {d.message}"
            for d in self.diagnostics
        )
        return (
            "### Content Lint Summary\n\n"
            f"- Files checked: {len(self.files)}\n"
            f"- Articles parsed: {self.article_count}\n"
            f"- Errors: {self.error_count}\n"
            f"- Warnings: {self.warning_count}\n\n"
            f"### Problems\n\n{problems if problems else '- None'}\n"
        )

    def to_json_str(self) -> str:
        payload = {
            "generated_at": self.generated_at,
            "summary": {
                "files": len(self.files),
                "articles": self.article_count,
                "errors": self.error_count,
                "warnings": self.warning_count,
            },
            "diagnostics": [asdict(d) for d in self.diagnostics],
        }
        return json.dumps(payload, ensure_ascii=False, indent=2)


def taxonomy_to_json_str(
    tags: Sequence[TaxonomyCount],
    categories: Sequence[TaxonomyCount],
    authors: Sequence[TaxonomyCount],
) -> str:
    payload = {
        "tags": [asdict(t) for t in tags],
        "categories": [asdict(c) for c in categories],
        "authors": [asdict(a) for a in authors],
    }
    return json.dumps(payload, ensure_ascii=False, indent=2)

from __future__ import annotations

import fnmatch
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, List, Optional

from .content import (
    MalformedFrontmatterError,
    check_conventions,
    extract_links,
    find_duplicate_links,
    find_invalid_links,
    parse,
    split_articles,
    validate,
)
from .content.links import LinkChecker, is_valid_url
from .models import Article, Diagnostic, FileResult
from .utils.config_loader import LintConfig
from .utils.logging import get_logger

logger = get_logger("postcheck.runner")


class Linter:
    """Lint a corpus of Markdown articles.

    Files are independent of each other, and so are the articles inside a
    multi-article file: a malformed article is reported and the next one is
    still checked.
    """

    def __init__(self, config: Optional[LintConfig] = None, *, link_checker: Optional[LinkChecker] = None) -> None:
        self.config = config or LintConfig()
        if link_checker is None and self.config.check_links:
            link_checker = LinkChecker(timeout=self.config.link_timeout, retries=self.config.link_retries)
        self.link_checker = link_checker

    def _excluded(self, path: Path) -> bool:
        posix = path.as_posix()
        return any(fnmatch.fnmatch(posix, pat) or fnmatch.fnmatch(path.name, pat) for pat in self.config.exclude)

    def discover(self, paths: Iterable[Path | str]) -> List[Path]:
        """Expand files and directories into the sorted list of content files."""
        found: set[Path] = set()
        extensions = {e.lower() for e in self.config.extensions}
        for raw in paths:
            path = Path(raw)
            if path.is_dir():
                for root, dirs, files in os.walk(path):
                    dirs[:] = sorted(d for d in dirs if not d.startswith("."))
                    for name in files:
                        candidate = Path(root) / name
                        if candidate.suffix.lower() in extensions and not self._excluded(candidate):
                            found.add(candidate)
            elif path.exists():
                # Explicitly named files are linted regardless of extension
                if not self._excluded(path):
                    found.add(path)
            else:
                logger.warning("Path does not exist: %s", path)
        return sorted(found)

    def _lint_article(self, chunk_text: str, path: str, index: int, line_offset: int) -> tuple[Optional[Article], List[Diagnostic]]:
        diagnostics: List[Diagnostic] = []

        def add(severity: str, code: str, message: str, field: Optional[str] = None, line: Optional[int] = None) -> None:
            diagnostics.append(
                Diagnostic(path=path, index=index, severity=severity, code=code, message=message, field=field, line=line)
            )

        try:
            doc = parse(chunk_text)
        except MalformedFrontmatterError as exc:
            line = exc.line + line_offset if exc.line is not None else None
            add("error", "malformed-frontmatter", exc.message, line=line)
            return None, diagnostics

        for err in validate(doc.metadata, self.config.required_fields):
            add("error", err.code, err.message, field=err.field, line=doc.start_line + line_offset)

        for warn in check_conventions(doc.metadata, doc.body):
            add("warning", warn.code, warn.message, field=warn.field)

        urls = extract_links(doc.body)
        for url in find_invalid_links(urls):
            add("error", "invalid-link", f"malformed URL: {url}")
        for url in find_duplicate_links(urls):
            add("warning", "duplicate-link", f"URL linked more than once: {url}")
        if self.link_checker is not None:
            for status in self.link_checker.check_all(u for u in urls if is_valid_url(u)):
                if not status.ok:
                    detail = f"HTTP {status.status_code}" if status.status_code else status.error
                    add("warning", "broken-link", f"{status.url} ({detail})")

        article = Article.from_metadata(doc.metadata, doc.body, source_path=path, index=index)
        return article, diagnostics

    def lint_text(self, raw_text: str, path: str = "<string>") -> FileResult:
        result = FileResult(path=path)
        chunks = split_articles(raw_text, self.config.separator)
        if not chunks:
            result.diagnostics.append(
                Diagnostic(path=path, index=None, severity="error", code="empty-file", message="file has no content")
            )
            return result
        for chunk in chunks:
            article, diagnostics = self._lint_article(chunk.text, path, chunk.index, chunk.start_line - 1)
            if article is not None:
                result.articles.append(article)
            result.diagnostics.extend(diagnostics)
            if chunk.unclosed_fence:
                result.diagnostics.append(
                    Diagnostic(
                        path=path,
                        index=chunk.index,
                        severity="warning",
                        code="unclosed-fence",
                        message="code fence is not closed before the article ends",
                    )
                )
        logger.debug("Linted %s: articles=%d diagnostics=%d", path, len(chunks), len(result.diagnostics))
        return result

    def lint_file(self, path: Path | str) -> FileResult:
        file_path = Path(path)
        try:
            raw_text = file_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            return FileResult(
                path=str(file_path),
                diagnostics=[
                    Diagnostic(path=str(file_path), index=None, severity="error", code="encoding", message=f"file is not valid UTF-8: {exc.reason}")
                ],
            )
        except OSError as exc:
            return FileResult(
                path=str(file_path),
                diagnostics=[
                    Diagnostic(path=str(file_path), index=None, severity="error", code="unreadable", message=f"cannot read file: {exc.strerror or exc}")
                ],
            )
        return self.lint_text(raw_text, str(file_path))

    def lint_paths(self, paths: Iterable[Path | str]) -> List[FileResult]:
        """Lint every content file under ``paths``; results are in sorted path order."""
        files = self.discover(paths)
        if not files:
            return []

        max_workers = max(1, min(self.config.max_workers, len(files)))
        logger.info("Linting %d file(s) (workers=%d)", len(files), max_workers)
        if max_workers == 1:
            results = [self.lint_file(f) for f in files]
        else:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                results = list(executor.map(self.lint_file, files))

        errors = sum(len(r.errors) for r in results)
        warnings = sum(len(r.warnings) for r in results)
        logger.info("Lint finished: files=%d errors=%d warnings=%d", len(results), errors, warnings)
        return results

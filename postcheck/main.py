"""Command-line entrypoint for postcheck.

High-level flow:
1) load configuration
2) discover and lint content files
3) print the lint report (or the taxonomy report) and exit with its status
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from typing import List, Optional

from dotenv import load_dotenv

from .analysis import collect_authors, collect_categories, collect_tags
from .output import LintReport, taxonomy_to_json_str
from .runner import Linter
from .utils.config_loader import ConfigError, load_lint_config
from .utils.logging import configure_logging, get_logger

EXIT_OK = 0
EXIT_USAGE = 2


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="postcheck",
        description="Validate YAML frontmatter of Markdown articles and report every problem in one pass",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        default=["content"],
        help="Markdown files or directories to lint (default: content/)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to lint configuration file (YAML); defaults to .postcheck.yaml when present",
    )
    parser.add_argument(
        "--format",
        default="text",
        choices=["text", "json", "markdown"],
        help="Report format",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit non-zero on warnings as well as errors",
    )
    parser.add_argument(
        "--check-links",
        action="store_true",
        help="Request every linked URL and warn about broken ones (uses the network)",
    )
    parser.add_argument(
        "--separator",
        default=None,
        help="Line token separating articles in multi-article files",
    )
    parser.add_argument(
        "--taxonomy",
        action="store_true",
        help="Print tag, category and author counts as JSON instead of diagnostics",
    )
    parser.add_argument(
        "--max-workers",
        type=int,
        default=None,
        help="Number of files linted concurrently (1 = sequential)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv(override=False)
    args = parse_args(argv)
    try:
        configure_logging(level=args.log_level)
    except ValueError as exc:
        sys.stderr.write(f"postcheck: {exc}\n")
        return EXIT_USAGE
    logger = get_logger("postcheck.cli")

    try:
        config = load_lint_config(args.config)
    except ConfigError as exc:
        logger.error("Failed to load configuration: %s", exc)
        return EXIT_USAGE

    overrides = {}
    if args.check_links:
        overrides["check_links"] = True
    if args.separator:
        overrides["separator"] = args.separator
    if args.max_workers is not None:
        if args.max_workers < 1:
            logger.error("--max-workers must be at least 1")
            return EXIT_USAGE
        overrides["max_workers"] = args.max_workers
    if overrides:
        config = replace(config, **overrides)

    try:
        results = Linter(config).lint_paths(args.paths)
    except Exception as exc:  # noqa: BLE001 - top-level entrypoint guard
        logger.exception("Lint run failed: %s", exc)
        return EXIT_USAGE

    if args.taxonomy:
        articles = [a for r in results for a in r.articles]
        sys.stdout.write(
            taxonomy_to_json_str(collect_tags(articles), collect_categories(articles), collect_authors(articles)) + "\n"
        )
        return EXIT_OK

    report = LintReport(results)
    if args.format == "json":
        sys.stdout.write(report.to_json_str() + "\n")
    elif args.format == "markdown":
        sys.stdout.write(report.to_markdown())
    else:
        sys.stdout.write(report.to_text())
    return report.exit_code(strict=args.strict)


if __name__ == "__main__":  # pragma: no cover - script entrypoint
    raise SystemExit(main())

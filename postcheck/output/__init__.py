"""Rendering of lint and taxonomy reports."""

from .report import LintReport, taxonomy_to_json_str

__all__ = ["LintReport", "taxonomy_to_json_str"]

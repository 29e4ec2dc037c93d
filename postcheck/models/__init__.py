"""Typed models used across the application."""

from .article import Article, AuthorRef, CategoryRef
from .diagnostic import Diagnostic, FileResult, Severity

__all__ = ["Article", "AuthorRef", "CategoryRef", "Diagnostic", "FileResult", "Severity"]

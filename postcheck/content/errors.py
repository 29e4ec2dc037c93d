from __future__ import annotations

from typing import Optional


class ContentError(Exception):
    """Base class for problems found in article content."""


class MalformedFrontmatterError(ContentError):
    """Raised when the frontmatter block is missing, unterminated or not a YAML mapping."""

    def __init__(self, message: str, *, line: Optional[int] = None) -> None:
        self.message = message
        self.line = line
        super().__init__(f"{message} (line {line})" if line is not None else message)


class FieldError(ContentError):
    """A problem with a single frontmatter field.

    Instances are collected by :func:`postcheck.content.validate.validate`
    rather than raised, so every problem in a file is reported in one pass.
    """

    code = "field"

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldError):
            return NotImplemented
        return type(self) is type(other) and (self.field, self.message) == (other.field, other.message)

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.field, self.message))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.field!r})"


class MissingFieldError(FieldError):
    code = "missing-field"

    def __init__(self, field: str) -> None:
        super().__init__(field, "required field is missing or empty")


class InvalidFieldError(FieldError):
    code = "invalid-field"

"""Top-level package for postcheck.

Loads Markdown articles with YAML frontmatter, validates their metadata and
reports every problem found across a content corpus.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Tuple

import yaml

from ..content.validate import REQUIRED_FIELDS
from .lint_settings import ConfigError, LintSettings


DEFAULT_CONFIG_PATH = Path(".postcheck.yaml")
DEFAULT_EXTENSIONS: Tuple[str, ...] = (".md", ".markdown")


@dataclass(slots=True)
class LintConfig:
    required_fields: List[str] = field(default_factory=lambda: list(REQUIRED_FIELDS))
    separator: Optional[str] = None
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    exclude: List[str] = field(default_factory=list)
    check_links: bool = False
    link_timeout: Optional[float] = None
    link_retries: Optional[int] = None
    max_workers: Optional[int] = None

    def __post_init__(self) -> None:
        # Unset values fall back to the environment-driven settings
        settings = LintSettings()
        self.separator = settings.separator if self.separator is None else self.separator
        self.link_timeout = settings.link_timeout if self.link_timeout is None else self.link_timeout
        self.link_retries = settings.link_retries if self.link_retries is None else self.link_retries
        self.max_workers = settings.max_workers if self.max_workers is None else self.max_workers


def _string_list(data: dict, key: str) -> Optional[List[str]]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(v, str) and v.strip() for v in value):
        raise ConfigError(f"'{key}' must be a list of non-empty strings if provided")
    return [v.strip() for v in value]


def _positive_number(data: dict, key: str, kind: type) -> Any:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigError(f"'{key}' must be a positive number if provided")
    if kind is int and not isinstance(value, int):
        raise ConfigError(f"'{key}' must be a positive integer if provided")
    return kind(value)


def _validate_config_dict(data: dict) -> LintConfig:
    """Validate the YAML mapping and coerce it into a ``LintConfig``.

    Optional fields:
      - required_fields: list[str] of dotted frontmatter paths
      - separator: str used between articles in multi-article exports
      - extensions: list[str] such as ".md"
      - exclude: list[str] of glob patterns matched against file paths
      - check_links: bool
      - link_timeout: positive number of seconds
      - link_retries: non-negative int
      - max_workers: positive int
    """
    kwargs: dict[str, Any] = {}

    required = _string_list(data, "required_fields")
    if required is not None:
        kwargs["required_fields"] = required

    separator = data.get("separator")
    if separator is not None:
        if not isinstance(separator, str) or not separator.strip():
            raise ConfigError("'separator' must be a non-empty string if provided")
        kwargs["separator"] = separator.strip()

    extensions = _string_list(data, "extensions")
    if extensions is not None:
        bad = [e for e in extensions if not e.startswith(".")]
        if bad:
            raise ConfigError(f"Invalid extensions: {', '.join(bad)}. Each must start with '.'")
        kwargs["extensions"] = [e.lower() for e in extensions]

    exclude = _string_list(data, "exclude")
    if exclude is not None:
        kwargs["exclude"] = exclude

    check_links = data.get("check_links")
    if check_links is not None:
        if not isinstance(check_links, bool):
            raise ConfigError("'check_links' must be true or false if provided")
        kwargs["check_links"] = check_links

    timeout = _positive_number(data, "link_timeout", float)
    if timeout is not None:
        kwargs["link_timeout"] = timeout

    retries = data.get("link_retries")
    if retries is not None:
        if isinstance(retries, bool) or not isinstance(retries, int) or retries < 0:
            raise ConfigError("'link_retries' must be a non-negative integer if provided")
        kwargs["link_retries"] = retries

    workers = _positive_number(data, "max_workers", int)
    if workers is not None:
        kwargs["max_workers"] = workers

    return LintConfig(**kwargs)


def load_lint_config(path: Path | str | None = None) -> LintConfig:
    """Load lint settings from YAML.

    Without an explicit ``path`` the default ``.postcheck.yaml`` is used when
    present and built-in defaults otherwise. An explicit path that does not
    exist is an error. Unknown top-level keys are ignored for forward
    compatibility.
    """
    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return LintConfig()
        config_path = DEFAULT_CONFIG_PATH
    else:
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")

    try:
        with config_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config file is not valid YAML: {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError("Top level of the configuration must be a mapping")
    return _validate_config_dict(data)

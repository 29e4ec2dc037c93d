from __future__ import annotations

import os
from dataclasses import dataclass, field

from ..content.splitter import DEFAULT_SEPARATOR


class ConfigError(Exception):
    """Raised when the configuration file or environment is invalid."""


def _env_number(name: str, default: str, kind: type, minimum: float, inclusive: bool = False):
    raw = os.getenv(name) or default
    try:
        value = kind(raw.strip())
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None
    if value < minimum or (value == minimum and not inclusive):
        bound = f">= {minimum}" if inclusive else f"> {minimum}"
        raise ConfigError(f"{name} must be {bound}, got {raw!r}")
    return value


@dataclass(slots=True)
class LintSettings:
    max_workers: int = field(default_factory=lambda: _env_number("POSTCHECK_MAX_WORKERS", "8", int, 0))
    link_timeout: float = field(default_factory=lambda: _env_number("POSTCHECK_LINK_TIMEOUT", "10", float, 0))
    link_retries: int = field(
        default_factory=lambda: _env_number("POSTCHECK_LINK_RETRIES", "1", int, 0, inclusive=True)
    )
    separator: str = field(default_factory=lambda: os.getenv("POSTCHECK_SEPARATOR") or DEFAULT_SEPARATOR)

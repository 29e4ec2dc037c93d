"""Tests for lint configuration loading."""

import pytest

from postcheck.content import DEFAULT_SEPARATOR, REQUIRED_FIELDS
from postcheck.utils.config_loader import ConfigError, LintConfig, load_lint_config


def test_defaults_without_config_file():
    config = load_lint_config()
    assert config.required_fields == list(REQUIRED_FIELDS)
    assert config.separator == DEFAULT_SEPARATOR
    assert config.extensions == [".md", ".markdown"]
    assert config.check_links is False
    assert config.max_workers == 8


def test_default_file_in_working_directory(tmp_path):
    (tmp_path / ".postcheck.yaml").write_text("check_links: true\n", encoding="utf-8")
    assert load_lint_config().check_links is True


def test_explicit_missing_file_is_an_error(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_lint_config(tmp_path / "missing.yaml")


def test_full_config(tmp_path):
    path = tmp_path / "lint.yaml"
    path.write_text(
        "required_fields: [title, category.slug, author.slug]\n"
        "separator: '=== NEXT ==='\n"
        "extensions: ['.MD', '.mdx']\n"
        "exclude: ['*/drafts/*']\n"
        "check_links: true\n"
        "link_timeout: 2.5\n"
        "link_retries: 0\n"
        "max_workers: 2\n"
        "unknown_key: ignored\n",
        encoding="utf-8",
    )
    config = load_lint_config(path)
    assert config.required_fields == ["title", "category.slug", "author.slug"]
    assert config.separator == "=== NEXT ==="
    assert config.extensions == [".md", ".mdx"]
    assert config.exclude == ["*/drafts/*"]
    assert config.check_links is True
    assert config.link_timeout == 2.5
    assert config.link_retries == 0
    assert config.max_workers == 2


@pytest.mark.parametrize(
    "content, key",
    [
        ("required_fields: title\n", "required_fields"),
        ("separator: ''\n", "separator"),
        ("extensions: [md]\n", "extensions"),
        ("check_links: 'yes please'\n", "check_links"),
        ("link_timeout: -1\n", "link_timeout"),
        ("link_retries: -1\n", "link_retries"),
        ("max_workers: 1.5\n", "max_workers"),
        ("- just\n- a list\n", "mapping"),
        ("key: [unclosed\n", "valid YAML"),
    ],
)
def test_invalid_values(tmp_path, content, key):
    path = tmp_path / "bad.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError, match=key):
        load_lint_config(path)


def test_environment_defaults(monkeypatch):
    monkeypatch.setenv("POSTCHECK_MAX_WORKERS", "3")
    monkeypatch.setenv("POSTCHECK_SEPARATOR", "+++ split +++")
    config = LintConfig()
    assert config.max_workers == 3
    assert config.separator == "+++ split +++"


@pytest.mark.parametrize(
    "var, value",
    [
        ("POSTCHECK_MAX_WORKERS", "many"),
        ("POSTCHECK_MAX_WORKERS", "0"),
        ("POSTCHECK_LINK_TIMEOUT", "-5"),
        ("POSTCHECK_LINK_TIMEOUT", "soon"),
        ("POSTCHECK_LINK_RETRIES", "-1"),
    ],
)
def test_invalid_environment_values(monkeypatch, var, value):
    monkeypatch.setenv(var, value)
    with pytest.raises(ConfigError, match=var):
        load_lint_config()


def test_zero_retries_from_environment(monkeypatch):
    monkeypatch.setenv("POSTCHECK_LINK_RETRIES", "0")
    assert LintConfig().link_retries == 0

"""End-to-end tests for the command-line entrypoint."""

import json

from postcheck.main import main


def test_text_report_and_failing_exit_code(content_dir, capsys):
    code = main([str(content_dir)])
    out = capsys.readouterr().out
    assert code == 1
    assert "broken.md" in out
    assert "missing-field category.slug" in out
    assert out.splitlines()[-1] == "4 file(s), 5 article(s): 1 error(s), 0 warning(s)"


def test_clean_corpus_exits_zero(content_dir, capsys):
    (content_dir / "posts" / "broken.md").unlink()
    assert main([str(content_dir), "--max-workers", "1"]) == 0
    assert "0 error(s)" in capsys.readouterr().out


def test_strict_mode_fails_on_warnings(tmp_path, capsys):
    path = tmp_path / "a.md"
    path.write_text("---\ntitle: X\ncategory:\n  slug: Not Safe\n---\nBody\n", encoding="utf-8")
    assert main([str(path)]) == 0
    assert main([str(path), "--strict"]) == 1
    assert "slug-format" in capsys.readouterr().out


def test_json_format(content_dir, capsys):
    main([str(content_dir), "--format", "json"])
    payload = json.loads(capsys.readouterr().out)
    assert payload["summary"]["errors"] == 1
    assert payload["diagnostics"][0]["code"] == "missing-field"


def test_custom_separator_flag(tmp_path, docker_article, terraform_article, capsys):
    path = tmp_path / "export.md"
    path.write_text(docker_article + "@@@\n" + terraform_article, encoding="utf-8")
    main([str(path), "--separator", "@@@", "--format", "json"])
    assert json.loads(capsys.readouterr().out)["summary"]["articles"] == 2


def test_taxonomy_report(content_dir, capsys):
    assert main([str(content_dir), "--taxonomy"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["categories"][0] == {"name": "Docker", "slug": "docker", "count": 2}
    assert payload["tags"][0] == {"name": "Docker", "slug": "docker", "count": 4}
    assert payload["authors"] == [{"name": "DevOps Daily Team", "slug": "devops-daily-team", "count": 4}]


def test_config_errors_exit_with_usage_code(tmp_path, capsys):
    assert main([str(tmp_path), "--config", str(tmp_path / "missing.yaml")]) == 2
    bad = tmp_path / "bad.yaml"
    bad.write_text("max_workers: zero\n", encoding="utf-8")
    assert main([str(tmp_path), "--config", str(bad)]) == 2
    assert main([str(tmp_path), "--max-workers", "0"]) == 2


def test_config_error_is_logged_without_traceback(tmp_path, capsys):
    assert main([str(tmp_path), "--config", str(tmp_path / "missing.yaml")]) == 2
    err = capsys.readouterr().err
    assert "Failed to load configuration: Config file not found" in err
    assert "Traceback" not in err


def test_invalid_environment_settings_exit_with_usage_code(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("POSTCHECK_MAX_WORKERS", "many")
    assert main([str(tmp_path)]) == 2
    assert "POSTCHECK_MAX_WORKERS must be a number" in capsys.readouterr().err


def test_unknown_log_level_from_environment(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("LOG_LEVEL", "LOUD")
    assert main([str(tmp_path)]) == 2
    assert "Unknown log level: 'LOUD'" in capsys.readouterr().err

"""Shared fixtures for postcheck tests."""

import logging
from pathlib import Path

import pytest

from postcheck.content.splitter import DEFAULT_SEPARATOR

DOCKER_ARTICLE = """---
title: 'Docker volumes explained'
excerpt: 'How named volumes and bind mounts differ.'
category:
  name: Docker
  slug: docker
date: '2024-03-01'
publishedAt: '2024-03-01T09:00:00Z'
updatedAt: '2024-03-05T12:00:00Z'
readingTime: '8 min read'
author:
  name: DevOps Daily Team
  slug: devops-daily-team
tags:
  - Docker
  - Storage
---

# Docker volumes explained

Read the [official docs](https://docs.docker.com/storage/volumes/) first.
"""

TERRAFORM_ARTICLE = """---
title: 'Terraform state locking'
category:
  name: Terraform
  slug: terraform
author:
  name: DevOps Daily Team
  slug: devops-daily-team
tags:
  - terraform
  - docker
---

State locking prevents concurrent applies.
"""


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Run each test in an empty directory with no postcheck/logging env overrides.

    Root logger handlers are restored afterwards since the CLI reconfigures them.
    """
    for var in (
        "POSTCHECK_MAX_WORKERS",
        "POSTCHECK_LINK_TIMEOUT",
        "POSTCHECK_LINK_RETRIES",
        "POSTCHECK_SEPARATOR",
        "LOG_LEVEL",
        "LOG_OUTPUT",
        "LOG_FILE_PATH",
        "LOG_FORMAT",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def docker_article() -> str:
    return DOCKER_ARTICLE


@pytest.fixture
def terraform_article() -> str:
    return TERRAFORM_ARTICLE


@pytest.fixture
def content_dir(tmp_path) -> Path:
    """A small corpus: two valid posts, one broken post and one multi-article export."""
    root = tmp_path / "content"
    posts = root / "posts"
    posts.mkdir(parents=True)
    (posts / "docker-volumes.md").write_text(DOCKER_ARTICLE, encoding="utf-8")
    (posts / "terraform-locking.md").write_text(TERRAFORM_ARTICLE, encoding="utf-8")
    (posts / "broken.md").write_text("---\ntitle: 'No category'\n---\nBody\n", encoding="utf-8")
    (root / "export.md").write_text(
        DOCKER_ARTICLE + DEFAULT_SEPARATOR + "\n" + TERRAFORM_ARTICLE, encoding="utf-8"
    )
    (root / "notes.txt").write_text("not an article", encoding="utf-8")
    return root

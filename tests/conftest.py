from pathlib import Path

import pytest

from repo_describer import config, errors

GO_REPO = {
    "a.go": "package main",
    "sub/b.go": "package sub",
}

MIXED_REPO = {
    "README.md": "# Mixed\n",
    "go.mod": "module example.com/mixed\n",
    "main.go": "package main\n",
    "cmd/server/server.go": "package server\n",
    "internal/api/handler.go": "package api\n",
    "internal/api/routes.go": "package api\n",
    "internal/store/store.go": "package store\n",
    "docs/design.md": "# Design\n",
    "config/default.json": "{}\n",
    "build/output.bin": "binary-ish\n",
    "app.log": "log line\n",
    "Makefile": "all:\n\tgo build\n",
}


def write_tree(root: Path, files: dict[str, str]) -> Path:
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


class FakeClient:
    """Deterministic stand-in for the generation service."""

    def __init__(self, responses=None, fail_on: int | None = None):
        self.responses = list(responses or ["overview", "description"])
        self.fail_on = fail_on
        self.prompts: list[str] = []

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.fail_on is not None and len(self.prompts) == self.fail_on:
            raise errors.ServiceError("service unavailable")
        return self.responses[len(self.prompts) - 1]


@pytest.fixture
def go_repo(tmp_path):
    return write_tree(tmp_path / "go-project", GO_REPO)


@pytest.fixture
def mixed_repo(tmp_path):
    return write_tree(tmp_path / "mixed", MIXED_REPO)


@pytest.fixture
def api_key(monkeypatch, tmp_path):
    # Run from an empty directory so a developer's .env is never picked up.
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("OPENAI_API_KEY", "test-key")
    config.get_config.cache_clear()
    yield "test-key"
    config.get_config.cache_clear()


@pytest.fixture
def cfg(api_key, tmp_path):
    return config.load_config().model_copy(update={"output_root": tmp_path / "data"})


@pytest.fixture
def fake_client():
    return FakeClient()

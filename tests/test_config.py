"""Tests for prkit.config (YAML + env loading, token resolution)."""

from pathlib import Path

import pytest

from prkit.config import AppConfig, GitHubConfig, RunConfig, load_config


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in (
        "PRKIT_GITHUB_ACCESS_TOKEN",
        "PRKIT_GITHUB_ACCESS_TOKEN_FILE",
        "GITHUB_TOKEN",
        "GITHUB_TOKEN_FILE",
        "PRKIT_BRANCH",
        "PRKIT_TITLE",
    ):
        monkeypatch.delenv(key, raising=False)


def test_run_defaults() -> None:
    """Defaults match the documented run options."""
    cfg = RunConfig()
    assert cfg.base_branch == "master"
    assert cfg.branch == "prkit"
    assert cfg.remote == "origin"
    assert cfg.fork_to_remote == "origin"
    assert cfg.title == "PRKit Pull Request"
    assert cfg.commit_message == "Automated commit by PRKit"


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path / "nope.yaml")
    assert config.run == RunConfig()
    assert config.github.api_url == "https://api.github.com"
    assert config.git.timeout_seconds is None


def test_yaml_values(tmp_path: Path) -> None:
    path = tmp_path / "prkit.yaml"
    path.write_text(
        "run:\n"
        "  branch: bump-ruby\n"
        "  title: Bump ruby\n"
        "  fork_to_remote: chrismo\n"
        "github:\n"
        "  api_url: https://ghe.example.com/api/v3\n"
        "git:\n"
        "  timeout_seconds: 120\n"
        "logging:\n"
        "  level: DEBUG\n"
    )
    config = load_config(path)
    assert config.run.branch == "bump-ruby"
    assert config.run.title == "Bump ruby"
    assert config.run.fork_to_remote == "chrismo"
    assert config.run.base_branch == "master"
    assert config.github.api_url == "https://ghe.example.com/api/v3"
    assert config.git.timeout_seconds == 120
    assert config.logging.level == "DEBUG"


def test_env_overrides_run_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PRKIT_BRANCH", "from-env")
    config = load_config(tmp_path / "nope.yaml")
    assert config.run.branch == "from-env"


def test_token_placeholder_substituted(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """${VAR} in YAML is replaced from the environment."""
    monkeypatch.setenv("MY_TOKEN", "secret-1")
    path = tmp_path / "prkit.yaml"
    path.write_text("github:\n  token: ${MY_TOKEN}\n")
    assert load_config(path).github_token_resolved == "secret-1"


def test_token_from_prkit_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PRKIT_GITHUB_ACCESS_TOKEN", " secret-2 ")
    assert load_config(tmp_path / "nope.yaml").github_token_resolved == "secret-2"


def test_token_from_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    secret = tmp_path / "token"
    secret.write_text("secret-3\n")
    monkeypatch.setenv("GITHUB_TOKEN_FILE", str(secret))
    assert load_config(tmp_path / "nope.yaml").github_token_resolved == "secret-3"


def test_explicit_token_wins() -> None:
    config = AppConfig(github=GitHubConfig(token="explicit"))
    assert config.github_token_resolved == "explicit"

"""Configuration loading from YAML and environment.

The GitHub token is taken from the config file, environment variables or
files (Docker secrets). Never put real tokens in config files committed to
the repo.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from prkit.models import DEFAULT_TITLE


def _read_secret(env_key: str, file_env_key: str) -> str | None:
    """Read secret from env var or from file path in env (e.g. Docker
    secrets)."""
    value = _current_env.get(env_key)
    if value:
        return value.strip()
    file_path = _current_env.get(file_env_key)
    if file_path:
        return Path(file_path).read_text().strip()
    return None


# Injected by load_config so secrets can be read from env/file
_current_env: dict[str, str] = {}


class RunConfig(BaseSettings):
    """Branch, PR and commit settings for one run."""

    model_config = SettingsConfigDict(env_prefix="PRKIT_", extra="ignore")

    base_branch: str = Field(default="master", description="Branch the PR targets and work starts from")
    branch: str = Field(default="prkit", description="Work branch name")
    remote: str = Field(default="origin", description="Canonical remote the PR is filed against")
    fork_to_remote: str = Field(default="origin", description="Remote the work branch is pushed to")
    title: str = Field(default=DEFAULT_TITLE, description="PR title; identifies the PR across runs")
    commit_message: str = Field(default="Automated commit by PRKit", description="Commit message")
    body: str = Field(default="", description="PR body")
    author_name: str = Field(default="PRKit", description="Git user.name for the commit")
    author_email: str = Field(default="prkit@localhost", description="Git user.email for the commit")


class GitHubConfig(BaseSettings):
    """GitHub API settings."""

    model_config = SettingsConfigDict(env_prefix="GITHUB_", extra="ignore")

    token: str | None = Field(default=None, description="PAT or app token; use env or secret file")
    api_url: str = Field(default="https://api.github.com", description="API base URL")
    timeout_seconds: float = Field(default=30, gt=0, description="HTTP timeout in seconds")


class GitConfig(BaseSettings):
    """Git subprocess settings."""

    model_config = SettingsConfigDict(env_prefix="GIT_", extra="ignore")

    timeout_seconds: float | None = Field(default=None, gt=0, description="Per-command timeout; None waits forever")


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore")

    run: RunConfig = Field(default_factory=RunConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    git: GitConfig = Field(default_factory=GitConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def github_token_resolved(self) -> str | None:
        """Resolve GitHub token from config, then env or Docker secret file."""
        t = self.github.token
        if t and not t.startswith("${"):
            return t
        return _read_secret("PRKIT_GITHUB_ACCESS_TOKEN", "PRKIT_GITHUB_ACCESS_TOKEN_FILE") or _read_secret(
            "GITHUB_TOKEN", "GITHUB_TOKEN_FILE"
        )


def _substitute_env(value: Any) -> Any:
    """Replace ${VAR} and $VAR in strings with os.environ."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return _current_env.get(key, value)
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return _current_env.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v) for v in value]
    return value


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load config from YAML file and environment.

    Missing file yields defaults (still overridable by PRKIT_*, GITHUB_*,
    GIT_* and LOGGING_* env vars). Token: PRKIT_GITHUB_ACCESS_TOKEN or
    GITHUB_TOKEN, or their *_FILE variants.
    """
    global _current_env
    import os

    _current_env = dict(os.environ)

    path = config_path or Path("prkit.yaml")
    raw: dict[str, Any] = {}
    if path.is_file():
        raw = yaml.safe_load(path.read_text()) or {}
        raw = _substitute_env(raw)

    return AppConfig(
        run=RunConfig(**(raw.get("run") or {})),
        github=GitHubConfig(**(raw.get("github") or {})),
        git=GitConfig(**(raw.get("git") or {})),
        logging=LoggingConfig(**(raw.get("logging") or {})),
    )

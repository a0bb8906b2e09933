"""Tests for prkit.pull_request.run with in-memory collaborators."""

from unittest.mock import patch

import pytest

from prkit.config import AppConfig, GitHubConfig, RunConfig
from prkit.errors import DirtyWorkingTree, ProviderAPIFailure
from prkit.pull_request import PullRequestRun, build_provider, run


def _config() -> AppConfig:
    return AppConfig(run=RunConfig(title="T", branch="prkit", base_branch="master"))


def test_full_flow_order(fake_git, fake_provider) -> None:
    """Guard, reconcile, callback, commit, push, create PR, in that order."""
    seen = []

    def mutate(repo_dir) -> None:
        seen.append((repo_dir, fake_git.current))
        fake_git.write()

    result = run("/repo", _config(), mutate, git=fake_git, provider=fake_provider)

    assert seen == [(fake_git.repo_dir, "prkit")]
    assert result.committed is True
    assert result.pr_created is True
    assert result.pr_number == 1
    assert result.final_branch == "prkit"
    names = [c[0] for c in fake_git.calls]
    assert names.index("stage_all") < names.index("commit") < names.index("push")


def test_repeated_runs_keep_one_pr(fake_git, fake_provider) -> None:
    """Same title twice: one open PR, second run reuses it."""
    first = run("/repo", _config(), lambda _: fake_git.write(), git=fake_git, provider=fake_provider)
    second = run("/repo", _config(), lambda _: fake_git.write(), git=fake_git, provider=fake_provider)

    assert first.pr_created is True
    assert second.pr_created is False
    assert second.pr_number == first.pr_number
    assert fake_provider.open_titles() == ["T"]
    assert len(fake_git.commits) == 2


def test_no_change_no_pr(fake_git, fake_provider) -> None:
    result = run("/repo", _config(), None, git=fake_git, provider=fake_provider)

    assert result.committed is False
    assert result.pr_number is None
    assert result.final_branch == "master"
    assert not any(c[0] == "create" for c in fake_provider.calls)
    assert not any(c[0] == "push" for c in fake_git.calls)


def test_dirty_tree_touches_nothing(fake_git, fake_provider) -> None:
    fake_git.write("README.md")
    callback_calls = []

    with pytest.raises(DirtyWorkingTree):
        run("/repo", _config(), callback_calls.append, git=fake_git, provider=fake_provider)

    assert fake_git.calls == []
    assert fake_provider.calls == []
    assert callback_calls == []


def test_provider_failure_aborts_run(fake_git, fake_provider) -> None:
    """Provider errors propagate without retry."""

    def failing(repo: str, state: str = "open"):
        raise ProviderAPIFailure("401: Bad credentials", status_code=401)

    fake_provider.list_pull_requests = failing

    with pytest.raises(ProviderAPIFailure, match="Bad credentials"):
        run("/repo", _config(), None, git=fake_git, provider=fake_provider)
    assert not any(c[0].startswith("delete") for c in fake_git.calls)


def test_callback_error_propagates(fake_git, fake_provider) -> None:
    def boom(_repo) -> None:
        raise RuntimeError("generator failed")

    with pytest.raises(RuntimeError, match="generator failed"):
        PullRequestRun(fake_git, fake_provider, _config()).execute(boom)
    assert not any(c[0] == "commit" for c in fake_git.calls)


def test_build_provider_passes_token_explicitly() -> None:
    config = AppConfig(github=GitHubConfig(token="tok", api_url="https://ghe.example.com/api/v3", timeout_seconds=5))
    with patch("prkit.pull_request.GitHubAdapter") as adapter:
        build_provider(config)
    adapter.assert_called_once_with(token="tok", api_url="https://ghe.example.com/api/v3", timeout=5)

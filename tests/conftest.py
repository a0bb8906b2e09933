"""Shared fixtures: in-memory git repository and pull request provider."""

from pathlib import Path
from typing import List

import pytest

from prkit.adapters.base import PullRequestProvider
from prkit.errors import GitOperationFailure
from prkit.models import ForkRecord, GitStatus, PullRequestRecord, StatusEntry


class FakeGit:
    """Git repository state held in memory.

    ``server`` is what each remote really has; ``tracking`` is what the
    local clone believes (remote-tracking refs), refreshed only by fetch.
    """

    def __init__(self) -> None:
        self.repo_dir = Path("/repo")
        self.local = {"master"}
        self.server = {"origin": {"master"}}
        self.tracking = {("origin", "master")}
        self.current = "master"
        self.changes: List[StatusEntry] = []
        self.vanish_on_stage = False
        self.urls = {"origin": "git@github.com:acme/widgets.git"}
        self.commits: List[tuple[str, str]] = []
        self.calls: List[tuple] = []

    def status(self) -> GitStatus:
        return GitStatus(repo_dir=str(self.repo_dir), entries=list(self.changes))

    def current_branch(self) -> str:
        return self.current

    def list_local_branches(self) -> list[str]:
        return sorted(self.local)

    def list_remote_tracking_branches(self) -> list[tuple[str, str]]:
        return sorted(self.tracking)

    def has_local_branch(self, name: str) -> bool:
        return name in self.local

    def has_remote_branch(self, remote: str, name: str) -> bool:
        return (remote, name) in self.tracking

    def fetch(self, remote: str, prune: bool = False) -> None:
        self.calls.append(("fetch", remote, prune))
        if prune:
            self.tracking = {(r, b) for r, b in self.tracking if r != remote}
        self.tracking |= {(remote, b) for b in self.server.get(remote, set())}

    def checkout(self, branch: str, create: bool = False, track: str | None = None) -> None:
        self.calls.append(("checkout", branch, create, track))
        if track:
            remote, _, name = track.partition("/")
            if (remote, name) not in self.tracking or name in self.local:
                raise GitOperationFailure(f"git checkout -t {track}: fatal")
            self.local.add(name)
        elif create:
            if branch in self.local:
                raise GitOperationFailure(f"git checkout -b {branch}: already exists")
            self.local.add(branch)
        elif branch not in self.local:
            raise GitOperationFailure(f"git checkout {branch}: did not match any file(s)")
        self.current = branch

    def delete_local_branch(self, branch: str) -> None:
        self.calls.append(("delete_local", branch))
        if branch == self.current:
            raise GitOperationFailure(f"git branch -D {branch}: cannot delete checked out branch")
        self.local.discard(branch)

    def pull(self, remote: str | None = None, branch: str | None = None) -> None:
        self.calls.append(("pull", remote, branch))

    def push(self, remote: str, refspec: str) -> None:
        self.calls.append(("push", remote, refspec))
        self.server.setdefault(remote, set()).add(refspec)
        self.tracking.add((remote, refspec))

    def delete_remote_branch(self, remote: str, branch: str) -> None:
        self.calls.append(("delete_remote", remote, branch))
        self.server.get(remote, set()).discard(branch)
        self.tracking.discard((remote, branch))

    def stage_all(self) -> None:
        self.calls.append(("stage_all",))
        if self.vanish_on_stage:
            self.changes = []

    def commit(self, message: str, author_name: str, author_email: str) -> None:
        self.calls.append(("commit", message))
        self.commits.append((self.current, message))
        self.changes = []

    def add_remote(self, name: str, url: str) -> None:
        self.calls.append(("add_remote", name, url))
        if name in self.urls:
            raise GitOperationFailure(f"git remote add {name} {url}: error: remote {name} already exists.")
        self.urls[name] = url
        self.server.setdefault(name, {"master"})

    def read_remote_url(self, remote: str) -> str:
        if remote not in self.urls:
            raise GitOperationFailure(f"git config --get remote.{remote}.url: ")
        return self.urls[remote]

    def write(self, path: str = "version.txt") -> None:
        """Simulate the mutation callback modifying a tracked file."""
        self.changes.append(StatusEntry(index=" ", worktree="M", path=path))


class FakeProvider(PullRequestProvider):
    """Pull requests held in memory, numbered from 1."""

    def __init__(self, fork_owner: str = "me") -> None:
        self.pulls: dict[str, List[PullRequestRecord]] = {}
        self.fork_owner = fork_owner
        self.calls: List[tuple] = []

    def fork_repository(self, repo: str) -> ForkRecord:
        self.calls.append(("fork", repo))
        name = repo.split("/")[1]
        return ForkRecord(full_name=f"{self.fork_owner}/{name}", ssh_url=f"git@github.com:{self.fork_owner}/{name}.git")

    def list_pull_requests(self, repo: str, state: str = "open") -> List[PullRequestRecord]:
        self.calls.append(("list", repo, state))
        return [p for p in self.pulls.get(repo, []) if state == "all" or p.state == state]

    def create_pull_request(self, repo: str, base: str, head: str, title: str, body: str = "") -> PullRequestRecord:
        self.calls.append(("create", repo, base, head, title))
        pulls = self.pulls.setdefault(repo, [])
        pr = PullRequestRecord(number=len(pulls) + 1, title=title, head_branch=head.split(":")[-1], base_branch=base)
        pulls.append(pr)
        return pr

    def close_pull_request(self, repo: str, number: int) -> None:
        self.calls.append(("close", repo, number))
        for pr in self.pulls.get(repo, []):
            if pr.number == number:
                pr.state = "closed"

    def open_titles(self, repo: str = "acme/widgets") -> list[str]:
        return [p.title for p in self.pulls.get(repo, []) if p.state == "open"]


@pytest.fixture
def fake_git() -> FakeGit:
    return FakeGit()


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider()

"""Git repository bound to one working directory.

Thin object over the module functions in this package so that the
reconciler, committer and publisher can be handed a single collaborator
(and tests a fake one). Every query runs git; nothing is cached.
"""

import logging
from pathlib import Path

from prkit.errors import GitOperationFailure
from prkit.models import GitStatus
from prkit.services.git import branches, commits, push_pull, remotes, status
from prkit.services.git._run import _run_git


class GitRepository:
    """Git operations for the repository at ``repo_dir``."""

    def __init__(
        self,
        repo_dir: Path,
        log: logging.Logger | None = None,
        timeout: float | None = None,
        author_name: str | None = None,
        author_email: str | None = None,
    ) -> None:
        self.repo_dir = Path(repo_dir)
        self._log = log or logging.getLogger("prkit.git")
        self._timeout = timeout
        self.author_name = author_name
        self.author_email = author_email

    @classmethod
    def open(
        cls,
        repo_dir: Path,
        log: logging.Logger | None = None,
        timeout: float | None = None,
        author_name: str | None = None,
        author_email: str | None = None,
    ) -> "GitRepository":
        """Open the work tree at ``repo_dir``; raises GitOperationFailure if it
        is not one.

        ``author_name`` and ``author_email`` are the identity used for merge
        commits made by ``pull``.
        """
        path = Path(repo_dir)
        if not path.is_dir():
            raise GitOperationFailure(f"not a directory: {path}")
        out = _run_git(["rev-parse", "--show-toplevel"], cwd=path, log=log, timeout=timeout)
        return cls(
            Path(out.strip()),
            log=log,
            timeout=timeout,
            author_name=author_name,
            author_email=author_email,
        )

    def _kw(self) -> dict:
        return {"repo_dir": self.repo_dir, "log": self._log, "timeout": self._timeout}

    def status(self) -> GitStatus:
        return status.read_status(**self._kw())

    def current_branch(self) -> str:
        return branches.current_branch(**self._kw())

    def list_local_branches(self) -> list[str]:
        return branches.list_local_branches(**self._kw())

    def list_remote_tracking_branches(self) -> list[tuple[str, str]]:
        return branches.list_remote_tracking_branches(**self._kw())

    def has_local_branch(self, name: str) -> bool:
        return name in self.list_local_branches()

    def has_remote_branch(self, remote: str, name: str) -> bool:
        return (remote, name) in self.list_remote_tracking_branches()

    def checkout(self, branch: str, create: bool = False, track: str | None = None) -> None:
        branches.checkout_branch(branch, create=create, track=track, **self._kw())

    def delete_local_branch(self, branch: str) -> None:
        branches.delete_local_branch(branch, **self._kw())

    def fetch(self, remote: str, prune: bool = False) -> None:
        push_pull.fetch(remote, prune=prune, **self._kw())

    def pull(self, remote: str | None = None, branch: str | None = None) -> None:
        push_pull.run_git_pull(
            remote,
            branch,
            author_name=self.author_name,
            author_email=self.author_email,
            **self._kw(),
        )

    def push(self, remote: str, refspec: str) -> None:
        push_pull.push(remote, refspec, **self._kw())

    def delete_remote_branch(self, remote: str, branch: str) -> None:
        push_pull.delete_remote_branch(branch, remote=remote, **self._kw())

    def stage_all(self) -> None:
        commits.stage_all(**self._kw())

    def commit(self, message: str, author_name: str, author_email: str) -> None:
        commits.commit(message, author_name, author_email, **self._kw())

    def add_remote(self, name: str, url: str) -> None:
        remotes.add_remote(name, url, **self._kw())

    def read_remote_url(self, remote: str) -> str:
        return remotes.read_remote_url(remote, **self._kw())

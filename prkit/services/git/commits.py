"""Stage and commit changes with a configured author identity."""

import logging
from pathlib import Path

from prkit.services.git._run import _run_git


def stage_all(
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
    timeout: float | None = None,
) -> None:
    """Stage every change in the working tree, deletions included."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    _run_git(["add", "-A"], cwd=cwd, log=log, timeout=timeout)


def commit(
    commit_message: str,
    author_name: str,
    author_email: str,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
    timeout: float | None = None,
) -> None:
    """Commit staged changes with the given identity.

    Raises GitOperationFailure when git refuses, including when there is
    nothing to commit; callers check status first.
    """
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    _run_git(
        [
            "-c",
            f"user.name={author_name}",
            "-c",
            f"user.email={author_email}",
            "commit",
            "-m",
            commit_message,
        ],
        cwd=cwd,
        log=log,
        timeout=timeout,
    )
    if log:
        log.info("Committed: %s", commit_message.splitlines()[0] if commit_message else "")

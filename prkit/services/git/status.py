"""Working tree status (porcelain v1) and the clean predicate."""

import logging
from pathlib import Path

from prkit.models import GitStatus, StatusEntry
from prkit.services.git._run import _run_git


def parse_porcelain(output: str, repo_dir: Path | str = ".") -> GitStatus:
    """Parse ``git status --porcelain=v1 -z`` output.

    Renames and copies (staged, or in the worktree for intent-to-add files)
    carry the original path as an extra NUL-separated field; it is skipped.
    """
    entries: list[StatusEntry] = []
    fields = output.split("\0")
    i = 0
    while i < len(fields):
        field = fields[i]
        i += 1
        if len(field) < 4:
            continue
        index, worktree, path = field[0], field[1], field[3:]
        entries.append(StatusEntry(index=index, worktree=worktree, path=path))
        if index in "RC" or worktree in "RC":
            i += 1
    return GitStatus(repo_dir=str(repo_dir), entries=entries)


def read_status(
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
    timeout: float | None = None,
) -> GitStatus:
    """Return the working tree status of the repository."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    out = _run_git(["status", "--porcelain=v1", "-z"], cwd=cwd, log=log, timeout=timeout)
    return parse_porcelain(out, cwd)

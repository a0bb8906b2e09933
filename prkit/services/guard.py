"""Refuse to start on a working tree with uncommitted tracked changes."""

import logging

from prkit.errors import DirtyWorkingTree
from prkit.services.git import GitRepository


def ensure_clean(git: GitRepository, log: logging.Logger | None = None) -> None:
    """Raise DirtyWorkingTree if any tracked file is modified, added or
    deleted. Untracked files are ignored."""
    status = git.status()
    if status.clean:
        return
    dirty = status.short()
    if log:
        log.error("Working tree is not clean: %s", ", ".join(dirty))
    raise DirtyWorkingTree("Directory does not have clean git status:\n" + "\n".join(dirty))

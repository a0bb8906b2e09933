"""Commit whatever the mutation callback changed, or back out cleanly."""

import logging

from prkit.services.git import GitRepository


class ChangeCommitter:
    """Stages all changes and commits them to the checked-out work branch."""

    def __init__(
        self,
        base_branch: str,
        commit_message: str,
        author_name: str,
        author_email: str,
        git: GitRepository,
        log: logging.Logger | None = None,
    ) -> None:
        self.base_branch = base_branch
        self.commit_message = commit_message
        self.author_name = author_name
        self.author_email = author_email
        self._git = git
        self._log = log or logging.getLogger("prkit.committer")

    def commit(self) -> bool:
        """Commit all changes; return False (and go back to the base branch)
        when there is nothing to commit.

        Cleanliness is checked after ``git add``: a whitespace-only rewrite
        can look dirty before staging and vanish once staged.
        """
        self._git.stage_all()
        if self._git.status().clean:
            self._log.info("No changes to commit")
            self._git.checkout(self.base_branch)
            return False
        self._git.commit(self.commit_message, self.author_name, self.author_email)
        return True

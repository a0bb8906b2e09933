"""Errors raised by a PRKit run.

Nothing in the run retries or recovers: every error aborts the run and
reaches the caller with the failing operation named in the message.
"""


class PullRequestError(Exception):
    """Base class for every PRKit failure."""

    pass


class DirtyWorkingTree(PullRequestError):
    """Raised when tracked files are modified before the run starts."""

    pass


class RemoteRegistrationFailure(PullRequestError):
    """Raised when adding the fork remote fails for a reason other than
    "already exists"."""

    pass


class GitOperationFailure(PullRequestError):
    """Raised when a git command fails."""

    def __init__(
        self,
        message: str,
        args: list[str] | None = None,
        returncode: int | None = None,
        output: str = "",
    ) -> None:
        super().__init__(message)
        self.git_args = list(args or [])
        self.returncode = returncode
        self.output = output


class ProviderAPIFailure(PullRequestError):
    """Raised when a hosted PR provider call fails (HTTP error or transport)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

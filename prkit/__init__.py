"""PRKit: commit automated changes to a branch and keep one pull request open
for them."""

from prkit.errors import (
    DirtyWorkingTree,
    GitOperationFailure,
    ProviderAPIFailure,
    PullRequestError,
    RemoteRegistrationFailure,
)
from prkit.models import BranchDescriptor, RunResult
from prkit.pull_request import PullRequestRun, run

__all__ = [
    "BranchDescriptor",
    "DirtyWorkingTree",
    "GitOperationFailure",
    "ProviderAPIFailure",
    "PullRequestError",
    "PullRequestRun",
    "RemoteRegistrationFailure",
    "RunResult",
    "run",
]

"""Run steps: guard, reconcile, commit, publish."""

from prkit.services.committer import ChangeCommitter
from prkit.services.fork import ensure_fork_remote
from prkit.services.guard import ensure_clean
from prkit.services.publisher import PublishResult, PullRequestPublisher
from prkit.services.reconciler import ReconcileOutcome, Reconciler

__all__ = [
    "ChangeCommitter",
    "PublishResult",
    "PullRequestPublisher",
    "ReconcileOutcome",
    "Reconciler",
    "ensure_clean",
    "ensure_fork_remote",
]

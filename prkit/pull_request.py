"""One PRKit run: guard, reconcile, mutate, commit, publish.

Usage from code::

    result = run(Path("crispy-duck"), config, lambda repo: bump_version(repo))

Runs against the same directory or PR title must be serialized by the
caller; nothing here locks.
"""

import logging
from pathlib import Path
from typing import Callable

from prkit.adapters.base import PullRequestProvider
from prkit.adapters.github import GitHubAdapter
from prkit.config import AppConfig
from prkit.models import BranchDescriptor, RunResult
from prkit.services import ChangeCommitter, PullRequestPublisher, Reconciler, ensure_clean
from prkit.services.git import GitRepository

MutationCallback = Callable[[Path], None]


def build_provider(config: AppConfig) -> PullRequestProvider:
    """GitHub adapter from config; the token is resolved here, not in the
    adapter."""
    return GitHubAdapter(
        token=config.github_token_resolved,
        api_url=config.github.api_url,
        timeout=config.github.timeout_seconds,
    )


class PullRequestRun:
    """Collaborators and settings for one run over one repository."""

    def __init__(
        self,
        git: GitRepository,
        provider: PullRequestProvider,
        config: AppConfig,
        log: logging.Logger | None = None,
    ) -> None:
        self.git = git
        self.provider = provider
        self.config = config
        self.branch = BranchDescriptor.from_config(config.run)
        self._log = log or logging.getLogger("prkit.run")

    def execute(self, mutation_callback: MutationCallback | None = None) -> RunResult:
        """Run every step in order; any failure propagates unchanged."""
        run_cfg = self.config.run
        ensure_clean(self.git, log=self._log)

        Reconciler(self.branch, run_cfg.base_branch, self.git, self.provider, log=self._log).prepare()

        if mutation_callback is not None:
            mutation_callback(self.git.repo_dir)

        committer = ChangeCommitter(
            run_cfg.base_branch,
            run_cfg.commit_message,
            run_cfg.author_name,
            run_cfg.author_email,
            self.git,
            log=self._log,
        )
        result = RunResult()
        result.committed = committer.commit()
        if result.committed:
            published = PullRequestPublisher(
                self.branch,
                run_cfg.base_branch,
                self.git,
                self.provider,
                body=run_cfg.body,
                log=self._log,
            ).publish()
            result.pr_created = published.created
            result.pr_number = published.number
        result.final_branch = self.git.current_branch()
        return result


def run(
    directory: Path | str,
    config: AppConfig,
    mutation_callback: MutationCallback | None = None,
    *,
    git: GitRepository | None = None,
    provider: PullRequestProvider | None = None,
    log: logging.Logger | None = None,
) -> RunResult:
    """Commit the changes ``mutation_callback`` makes in ``directory`` to the
    work branch and make sure one PR is open for it.

    Args:
        directory: Git work tree to operate on.
        config: Application config (``config.run`` holds branch and PR
            settings).
        mutation_callback: Called with the repository path once the work
            branch is checked out; may be None.
        git: Repository override (tests).
        provider: Provider override; defaults to GitHub from ``config``.
        log: Optional logger.

    Returns:
        RunResult describing what was committed and published.

    Raises:
        DirtyWorkingTree: Tracked files were modified before the run.
        RemoteRegistrationFailure: The fork remote could not be added.
        GitOperationFailure: A git command failed.
        ProviderAPIFailure: A provider API call failed.
    """
    logger = log or logging.getLogger("prkit.run")
    repo = git or GitRepository.open(
        Path(directory),
        log=logger,
        timeout=config.git.timeout_seconds,
        author_name=config.run.author_name,
        author_email=config.run.author_email,
    )
    prov = provider or build_provider(config)
    return PullRequestRun(repo, prov, config, log=logger).execute(mutation_callback)

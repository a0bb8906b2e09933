"""Data models for the work branch, git status, pull requests and run results."""

from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, ConfigDict, field_validator

if TYPE_CHECKING:
    from prkit.config import RunConfig

DEFAULT_TITLE = "PRKit Pull Request"

# Porcelain v1 status codes that mark a tracked file as changed
TRACKED_CHANGE_CODES = frozenset("MADRCTU")

_CHANGE_TYPES = {
    "M": "M",
    "T": "M",
    "A": "A",
    "D": "D",
    "R": "R",
    "C": "A",
    "U": "U",
}


class BranchDescriptor(BaseModel):
    """The logical work branch for one run.

    ``title`` doubles as the idempotency key of the pull request: a run
    reuses any open PR with the same title instead of opening another.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    title: str = DEFAULT_TITLE
    remote: str = "origin"
    fork_to_remote: str = "origin"

    @field_validator("title", mode="before")
    @classmethod
    def _default_title(cls, value: str | None) -> str:
        if value is None or not str(value).strip():
            return DEFAULT_TITLE
        return value

    @property
    def needs_fork(self) -> bool:
        """True when the branch is pushed to a remote other than the
        canonical one."""
        return self.remote != self.fork_to_remote

    @property
    def remote_ref(self) -> str:
        """Remote-tracking ref name, e.g. ``origin/prkit``."""
        return f"{self.fork_to_remote}/{self.name}"

    @classmethod
    def from_config(cls, config: "RunConfig") -> "BranchDescriptor":
        return cls(
            name=config.branch,
            title=config.title,
            remote=config.remote,
            fork_to_remote=config.fork_to_remote,
        )


class StatusEntry(BaseModel):
    """One line of ``git status --porcelain``."""

    index: str
    worktree: str
    path: str

    @property
    def is_untracked(self) -> bool:
        return self.index == "?" or self.index == "!"

    @property
    def is_tracked_change(self) -> bool:
        if self.is_untracked:
            return False
        return self.index in TRACKED_CHANGE_CODES or self.worktree in TRACKED_CHANGE_CODES

    @property
    def type(self) -> str:
        """Single-letter change type (M, A, D, R, U)."""
        code = self.index if self.index in TRACKED_CHANGE_CODES else self.worktree
        return _CHANGE_TYPES.get(code, code)


class GitStatus(BaseModel):
    """Working tree status.

    The tree is clean when no tracked file is modified, added or deleted
    relative to the index or HEAD. Untracked and ignored files are never
    dirty.
    """

    repo_dir: str = "."
    entries: list[StatusEntry] = []

    @property
    def tracked_dirty(self) -> list[StatusEntry]:
        return [e for e in self.entries if e.is_tracked_change]

    @property
    def clean(self) -> bool:
        return not self.tracked_dirty

    def short(self) -> list[str]:
        """Dirty files as ``<repo_dir>/<path>: <type>`` lines."""
        return [f"{self.repo_dir.rstrip('/')}/{e.path}: {e.type}" for e in self.tracked_dirty]


class PullRequestRecord(BaseModel):
    """Pull request on the hosted provider."""

    number: int
    title: str
    state: Literal["open", "closed"] = "open"
    head_branch: str = ""
    base_branch: str = ""
    html_url: str | None = None


class ForkRecord(BaseModel):
    """Repository fork returned by the provider."""

    full_name: str
    ssh_url: str
    clone_url: str | None = None


class RunResult(BaseModel):
    """Outcome of one run."""

    committed: bool = False
    pr_created: bool = False
    pr_number: int | None = None
    final_branch: str = ""

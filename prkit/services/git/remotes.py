"""Remote configuration: read URLs, register remotes, derive owner/name."""

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import urlparse

from prkit.services.git._run import _run_git

if TYPE_CHECKING:
    from prkit.services.git.repository import GitRepository

# scp-like syntax: [user@]host:path, no "://" and no leading slash in path
_SCP_LIKE_RE = re.compile(r"^(?:[^@/]+@)?[^:/]+:(?!//)(?P<path>.+)$")


def repository_slug(url: str) -> str:
    """Derive an ``owner/name`` identifier from a remote URL.

    Supports scp-like SSH (``git@github.com:owner/name.git``), URL forms
    (https, ssh, git, file) and local paths. The last two path segments
    are returned with any ``.git`` suffix removed.

    Args:
        url: Remote URL as configured in ``remote.<name>.url``.

    Returns:
        Identifier such as ``"livingsocial/crispy-duck"``.

    Raises:
        ValueError: If the URL does not contain an owner and a name.
    """
    value = (url or "").strip()
    if "://" in value:
        path = urlparse(value).path
    else:
        m = _SCP_LIKE_RE.match(value)
        path = m.group("path") if m and not Path(value).is_absolute() else value
    path = path.replace("\\", "/").rstrip("/")
    if path.lower().endswith(".git"):
        path = path[: -len(".git")]
    parts = [p for p in path.split("/") if p]
    if len(parts) < 2:
        raise ValueError(f"Cannot derive owner/name from remote URL: {url!r}")
    return f"{parts[-2]}/{parts[-1]}"


def read_remote_url(
    remote: str,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
    timeout: float | None = None,
) -> str:
    """Return ``remote.<remote>.url`` from git config."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    return _run_git(["config", "--get", f"remote.{remote}.url"], cwd=cwd, log=log, timeout=timeout).strip()


def add_remote(
    name: str,
    url: str,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
    timeout: float | None = None,
) -> None:
    """Register a remote; raises GitOperationFailure if it already exists."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    _run_git(["remote", "add", name, url], cwd=cwd, log=log, timeout=timeout)
    if log:
        log.info("Added remote %s -> %s", name, url)


def authoritative_repo(git: "GitRepository", remote: str) -> str:
    """``owner/name`` of the repository behind a named remote, e.g.
    ``"livingsocial/crispy-duck"``."""
    return repository_slug(git.read_remote_url(remote))

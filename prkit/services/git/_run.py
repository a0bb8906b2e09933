"""Internal helpers: run git commands, map failures to GitOperationFailure."""

import logging
import subprocess
from pathlib import Path

from prkit.errors import GitOperationFailure


def _run_git(
    args: list[str],
    cwd: Path,
    log: logging.Logger | None = None,
    timeout: float | None = None,
) -> str:
    """Run git command and return its stdout; raise GitOperationFailure on
    non-zero exit."""
    cmd = ["git"] + args
    try:
        proc = subprocess.run(cmd, cwd=cwd, check=True, capture_output=True, text=True, timeout=timeout)
    except subprocess.CalledProcessError as e:
        err = (e.stderr or e.stdout or "").strip()
        if log:
            log.warning("Git %s failed: %s", args, err)
        raise GitOperationFailure(f"git {' '.join(args)}: {err}", args=args, returncode=e.returncode, output=err) from e
    except subprocess.TimeoutExpired as e:
        if log:
            log.warning("Git %s timed out after %ss", args, timeout)
        raise GitOperationFailure(f"git {' '.join(args)}: timed out after {timeout}s", args=args) from e
    except FileNotFoundError as e:
        raise GitOperationFailure("git not found", args=args) from e
    return proc.stdout

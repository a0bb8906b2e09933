"""PRKit entry point.

Runs an optional command in the repository, then commits its changes to the
work branch and opens (or reuses) a pull request. Usage:
prkit [options] [-- command ...].
"""

import argparse
import logging
import subprocess
import sys
from pathlib import Path

from prkit.config import AppConfig, load_config
from prkit.errors import PullRequestError
from prkit.logging import PrkitLogging
from prkit.pull_request import run


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI; everything after ``--`` is the mutation command."""
    argv = list(argv if argv is not None else sys.argv[1:])
    command: list[str] = []
    if "--" in argv:
        split = argv.index("--")
        command = argv[split + 1 :]
        argv = argv[:split]

    parser = argparse.ArgumentParser(
        prog="prkit",
        description="PRKit - commit changes to a work branch and open or reuse one pull request",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("prkit.yaml"),
        help="Path to YAML config file",
    )
    parser.add_argument("--dir", "-C", type=Path, default=Path("."), help="Repository directory")
    parser.add_argument("--branch", help="Work branch name (run.branch)")
    parser.add_argument("--title", help="PR title (run.title)")
    parser.add_argument("--base", help="Base branch (run.base_branch)")
    parser.add_argument("--remote", help="Canonical remote (run.remote)")
    parser.add_argument("--fork-to-remote", help="Remote to push the branch to (run.fork_to_remote)")
    parser.add_argument("--message", "-m", help="Commit message (run.commit_message)")
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only load and validate config, then exit",
    )
    parsed = parser.parse_args(argv)
    parsed.command = command
    return parsed


def apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    """Return config with CLI flags applied over config.run."""
    overrides = {
        "branch": args.branch,
        "title": args.title,
        "base_branch": args.base,
        "remote": args.remote,
        "fork_to_remote": args.fork_to_remote,
        "commit_message": args.message,
    }
    updates = {k: v for k, v in overrides.items() if v is not None}
    if not updates:
        return config
    return config.model_copy(update={"run": config.run.model_copy(update=updates)})


def command_callback(command: list[str]):
    """Mutation callback running ``command`` in the repository; a non-zero
    exit raises CalledProcessError."""

    def _mutate(repo_dir: Path) -> None:
        subprocess.run(command, cwd=repo_dir, check=True)

    return _mutate


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    config = apply_overrides(load_config(args.config), args)
    PrkitLogging(config.logging).setup()
    log = logging.getLogger("prkit")

    if args.check:
        print("Config OK:", config.run.branch, config.run.title)
        return 0

    callback = command_callback(args.command) if args.command else None
    try:
        result = run(args.dir, config, callback, log=log)
    except PullRequestError as e:
        log.error("PRKit run failed: %s", e)
        return 1
    except subprocess.CalledProcessError as e:
        log.error("Command %s exited with %s", e.cmd, e.returncode)
        return 1
    except OSError as e:
        log.error("Command %s could not be started: %s", args.command, e)
        return 1
    log.info(
        "Done: committed=%s pr_created=%s pr=%s branch=%s",
        result.committed,
        result.pr_created,
        result.pr_number,
        result.final_branch,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())

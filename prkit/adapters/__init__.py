"""Hosted pull request provider adapters."""

from prkit.adapters.base import PullRequestProvider
from prkit.adapters.github import GitHubAdapter

__all__ = ["GitHubAdapter", "PullRequestProvider"]

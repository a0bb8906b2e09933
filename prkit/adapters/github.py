"""GitHub API adapter."""

from typing import Any, Dict, List

import requests

from prkit.adapters.base import PullRequestProvider
from prkit.errors import ProviderAPIFailure
from prkit.models import ForkRecord, PullRequestRecord

PER_PAGE = 100


def _pr_from_api(data: Dict[str, Any]) -> PullRequestRecord:
    head = data.get("head") or {}
    base = data.get("base") or {}
    return PullRequestRecord(
        number=data["number"],
        title=data.get("title") or "",
        state=data.get("state", "open"),
        head_branch=head.get("ref", ""),
        base_branch=base.get("ref", ""),
        html_url=data.get("html_url"),
    )


def _fork_from_api(data: Dict[str, Any]) -> ForkRecord:
    return ForkRecord(
        full_name=data.get("full_name") or "",
        ssh_url=data["ssh_url"],
        clone_url=data.get("clone_url"),
    )


class GitHubAdapter(PullRequestProvider):
    """GitHub REST v3 implementation.

    The token is passed in explicitly; the adapter never reads the
    environment.
    """

    def __init__(self, token: str | None, api_url: str = "https://api.github.com", timeout: float = 30) -> None:
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._session = requests.Session()
        if token:
            self._session.headers["Authorization"] = f"token {token}"
        self._session.headers["Accept"] = "application/vnd.github.v3+json"

    def _request(
        self,
        method: str,
        path: str,
        params: Dict[str, Any] | None = None,
        json: Dict[str, Any] | None = None,
    ) -> requests.Response:
        url = f"{self._api_url}{path}" if path.startswith("/") else f"{self._api_url}/{path}"
        try:
            resp = self._session.request(method, url, params=params, json=json, timeout=self._timeout)
        except requests.RequestException as e:
            raise ProviderAPIFailure(f"{method} {path}: {e}") from e
        if resp.status_code >= 400:
            msg = resp.text or resp.reason or str(resp.status_code)
            try:
                msg = resp.json().get("message", msg)
            except (ValueError, AttributeError):
                pass
            raise ProviderAPIFailure(f"{method} {path}: {resp.status_code}: {msg}", status_code=resp.status_code)
        return resp

    def fork_repository(self, repo: str) -> ForkRecord:
        resp = self._request("POST", f"/repos/{repo}/forks")
        return _fork_from_api(resp.json())

    def list_pull_requests(self, repo: str, state: str = "open") -> List[PullRequestRecord]:
        pulls: List[PullRequestRecord] = []
        page = 1
        while True:
            resp = self._request(
                "GET",
                f"/repos/{repo}/pulls",
                params={"state": state, "per_page": PER_PAGE, "page": page},
            )
            data = resp.json() or []
            pulls.extend(_pr_from_api(d) for d in data)
            if len(data) < PER_PAGE:
                return pulls
            page += 1

    def create_pull_request(
        self,
        repo: str,
        base: str,
        head: str,
        title: str,
        body: str = "",
    ) -> PullRequestRecord:
        resp = self._request(
            "POST",
            f"/repos/{repo}/pulls",
            json={"title": title, "body": body, "head": head, "base": base},
        )
        return _pr_from_api(resp.json())

    def close_pull_request(self, repo: str, number: int) -> None:
        self._request("PATCH", f"/repos/{repo}/pulls/{number}", json={"state": "closed"})

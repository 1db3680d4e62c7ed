"""GitHub API adapter."""

from typing import Any, Dict, List
from urllib.parse import quote

import requests

from clabot.adapters.base import GitPlatformAdapter, GitPlatformError
from clabot.models import CombinedStatus, Issue, PullRequest, Status


def _issue_from_api(data: Dict[str, Any]) -> Issue:
    labels = [lb["name"] for lb in (data.get("labels") or []) if isinstance(lb, dict) and "name" in lb]
    return Issue(
        number=data["number"],
        title=data.get("title") or "",
        state=data.get("state", "open"),
        labels=labels,
        is_pull_request="pull_request" in data,
    )


def _pr_from_api(org: str, repo: str, data: Dict[str, Any]) -> PullRequest:
    head = data.get("head") or {}
    return PullRequest(
        org=org,
        repo=repo,
        number=data["number"],
        head_sha=head.get("sha", ""),
        state=data.get("state", "open"),
    )


def _combined_status_from_api(data: Dict[str, Any]) -> CombinedStatus:
    statuses = [
        Status(
            context=s.get("context") or "",
            state=s.get("state") or "",
            description=s.get("description") or "",
            target_url=s.get("target_url"),
        )
        for s in (data.get("statuses") or [])
        if isinstance(s, dict)
    ]
    return CombinedStatus(sha=data.get("sha") or "", state=data.get("state") or "", statuses=statuses)


class GitHubAdapter(GitPlatformAdapter):
    """GitHub API implementation."""

    def __init__(self, token: str, api_url: str = "https://api.github.com") -> None:
        self._api_url = api_url.rstrip("/")
        self._session = requests.Session()
        self._session.headers["Authorization"] = f"token {token}"
        self._session.headers["Accept"] = "application/vnd.github.v3+json"

    def _request(
        self,
        method: str,
        path: str,
        params: Dict[str, Any] | None = None,
        json: Dict[str, Any] | None = None,
        missing_ok: bool = False,
    ) -> requests.Response:
        url = f"{self._api_url}{path}" if path.startswith("/") else f"{self._api_url}/{path}"
        try:
            resp = self._session.request(method, url, params=params, json=json, timeout=30)
        except requests.RequestException as e:
            raise GitPlatformError(f"{method} {path} failed: {e}") from e
        if resp.status_code == 404 and missing_ok:
            return resp
        if resp.status_code >= 400:
            msg = resp.text or resp.reason or str(resp.status_code)
            try:
                msg = resp.json().get("message", msg)
            except (ValueError, AttributeError):
                pass
            raise GitPlatformError(f"{resp.status_code}: {msg}")
        return resp

    def add_label(self, org: str, repo: str, number: int, label: str) -> None:
        self._request("POST", f"/repos/{org}/{repo}/issues/{number}/labels", json={"labels": [label]})

    def remove_label(self, org: str, repo: str, number: int, label: str) -> None:
        # 404: label was not on the issue, which is the state we wanted
        path = f"/repos/{org}/{repo}/issues/{number}/labels/{quote(label, safe='')}"
        self._request("DELETE", path, missing_ok=True)

    def get_pull_request(self, org: str, repo: str, number: int) -> PullRequest:
        resp = self._request("GET", f"/repos/{org}/{repo}/pulls/{number}")
        return _pr_from_api(org, repo, resp.json())

    def find_issues(self, query: str, sort: str = "", ascending: bool = False) -> List[Issue]:
        params: Dict[str, Any] = {"q": query}
        if sort:
            params["sort"] = sort
            params["order"] = "asc" if ascending else "desc"
        data = self._request("GET", "/search/issues", params=params).json() or {}
        return [_issue_from_api(d) for d in data.get("items") or []]

    def get_issue_labels(self, org: str, repo: str, number: int) -> List[str]:
        resp = self._request("GET", f"/repos/{org}/{repo}/issues/{number}/labels", params={"per_page": 100})
        data = resp.json() or []
        return [lb["name"] for lb in data if isinstance(lb, dict) and "name" in lb]

    def get_combined_status(self, org: str, repo: str, ref: str) -> CombinedStatus:
        """Combined status for ``ref``; statuses from every page, in API order."""
        path = f"/repos/{org}/{repo}/commits/{ref}/status"
        page = 1
        resp = self._request("GET", path, params={"per_page": 100, "page": page})
        data = resp.json() or {}
        statuses = list(data.get("statuses") or [])
        while "next" in (resp.links or {}):
            page += 1
            resp = self._request("GET", path, params={"per_page": 100, "page": page})
            statuses.extend((resp.json() or {}).get("statuses") or [])
        return _combined_status_from_api({**data, "statuses": statuses})

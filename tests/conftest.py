"""Shared fixtures: in-memory Git platform adapter that records calls."""

from typing import Dict, List, Tuple

import pytest

from clabot.adapters.base import GitPlatformAdapter, GitPlatformError
from clabot.models import CombinedStatus, Issue, PullRequest


class FakeAdapter(GitPlatformAdapter):
    """Records every call; responses and failures are set per test."""

    def __init__(self) -> None:
        self.calls: List[Tuple] = []
        self.search_results: List[List[Issue]] = []
        self.prs: Dict[int, PullRequest] = {}
        self.labels: Dict[int, List[str]] = {}
        self.combined: Dict[str, CombinedStatus] = {}
        self.fail: set[str] = set()

    def _check(self, op: str) -> None:
        if op in self.fail:
            raise GitPlatformError(f"500: {op} failed")

    @property
    def mutations(self) -> List[Tuple]:
        return [c for c in self.calls if c[0] in ("add_label", "remove_label")]

    def calls_to(self, op: str) -> List[Tuple]:
        return [c for c in self.calls if c[0] == op]

    def add_label(self, org: str, repo: str, number: int, label: str) -> None:
        self.calls.append(("add_label", org, repo, number, label))
        self._check("add_label")

    def remove_label(self, org: str, repo: str, number: int, label: str) -> None:
        self.calls.append(("remove_label", org, repo, number, label))
        self._check("remove_label")

    def get_pull_request(self, org: str, repo: str, number: int) -> PullRequest:
        self.calls.append(("get_pull_request", org, repo, number))
        self._check("get_pull_request")
        if number not in self.prs:
            raise GitPlatformError("404: Not Found")
        return self.prs[number]

    def find_issues(self, query: str, sort: str = "", ascending: bool = False) -> List[Issue]:
        self.calls.append(("find_issues", query, sort, ascending))
        self._check("find_issues")
        if not self.search_results:
            return []
        if len(self.search_results) > 1:
            return self.search_results.pop(0)
        return self.search_results[0]

    def get_issue_labels(self, org: str, repo: str, number: int) -> List[str]:
        self.calls.append(("get_issue_labels", org, repo, number))
        self._check("get_issue_labels")
        return list(self.labels.get(number, []))

    def get_combined_status(self, org: str, repo: str, ref: str) -> CombinedStatus:
        self.calls.append(("get_combined_status", org, repo, ref))
        self._check("get_combined_status")
        return self.combined.get(ref, CombinedStatus(sha=ref))


@pytest.fixture
def fake_adapter() -> FakeAdapter:
    return FakeAdapter()


@pytest.fixture
def sleeps() -> List[float]:
    """Delays requested by code under test; pass ``sleeps.append`` as sleep."""
    return []

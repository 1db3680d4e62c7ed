"""Abstract base for Git platform adapters."""

from abc import ABC, abstractmethod
from typing import List

from clabot.models import CombinedStatus, Issue, PullRequest


class GitPlatformError(Exception):
    """Raised when a Git platform API call fails."""

    pass


class GitPlatformAdapter(ABC):
    """Interface the reconcilers need from a Git hosting platform."""

    @abstractmethod
    def add_label(self, org: str, repo: str, number: int, label: str) -> None:
        """Add a label to an issue or PR."""
        ...

    @abstractmethod
    def remove_label(self, org: str, repo: str, number: int, label: str) -> None:
        """Remove a label from an issue or PR."""
        ...

    @abstractmethod
    def get_pull_request(self, org: str, repo: str, number: int) -> PullRequest:
        """Fetch PR by number."""
        ...

    @abstractmethod
    def find_issues(self, query: str, sort: str = "", ascending: bool = False) -> List[Issue]:
        """Search issues and pull requests."""
        ...

    @abstractmethod
    def get_issue_labels(self, org: str, repo: str, number: int) -> List[str]:
        """Return label names currently set on an issue or PR."""
        ...

    @abstractmethod
    def get_combined_status(self, org: str, repo: str, ref: str) -> CombinedStatus:
        """Return the combined commit status for a ref."""
        ...

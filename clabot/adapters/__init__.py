"""Git platform adapters (base and implementations)."""

from clabot.adapters.base import GitPlatformAdapter, GitPlatformError
from clabot.adapters.github import GitHubAdapter

__all__ = ["GitPlatformAdapter", "GitPlatformError", "GitHubAdapter"]

"""Data models for pull requests, statuses and webhook events (Pydantic)."""

from typing import List, Literal

from pydantic import BaseModel, Field

STATUS_PENDING = "pending"
STATUS_SUCCESS = "success"
STATUS_FAILURE = "failure"
STATUS_ERROR = "error"

COMMENT_CREATED = "created"
COMMENT_EDITED = "edited"
COMMENT_DELETED = "deleted"


class Issue(BaseModel):
    """Issue or pull request as returned by issue search."""

    number: int
    title: str = ""
    state: str = "open"
    labels: List[str] = Field(default_factory=list)
    is_pull_request: bool = False


class PullRequest(BaseModel):
    """Pull request identity and current head commit."""

    org: str
    repo: str
    number: int
    head_sha: str
    state: str = "open"


class Status(BaseModel):
    """One named commit status (context + state)."""

    context: str
    state: str
    description: str = ""
    target_url: str | None = None


class CombinedStatus(BaseModel):
    """All statuses recorded against a commit, in API order."""

    sha: str
    state: str = ""
    statuses: List[Status] = Field(default_factory=list)


class StatusEvent(BaseModel):
    """Commit status update (status webhook)."""

    sha: str
    state: str = ""
    context: str = ""
    org: str
    repo: str
    description: str = ""
    target_url: str | None = None


class GenericCommentEvent(BaseModel):
    """Comment on an issue or PR, normalized across comment-bearing webhooks."""

    org: str
    repo: str
    number: int
    is_pr: bool = False
    action: Literal["created", "edited", "deleted"] = "created"
    issue_state: str = "open"
    body: str = ""
    author: str = ""
    html_url: str | None = None

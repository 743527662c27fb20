"""Data types for GitHub activity records."""

from dataclasses import dataclass

from worktime.services.timeline.types import EventProvenance, PullRequestCommit


@dataclass
class GitHubRepo:
    """Normalized GitHub repository data."""

    name: str
    full_name: str


@dataclass
class CommitStats:
    """Line and file statistics of a single commit."""

    total: int
    additions: int
    deletions: int
    files: int  # Number of changed files


@dataclass
class CommitRecord:
    """Commit authored by the tracked user, ready to be stored."""

    sha: str
    author: str
    date: str  # ISO 8601, author date
    message: str
    provenance: EventProvenance
    stats: CommitStats | None = None

    @property
    def pull_request_id(self) -> int | None:
        """Pull request the commit was taken from, if any."""
        if isinstance(self.provenance, PullRequestCommit):
            return self.provenance.pr_id
        return None


@dataclass
class IssueEventRecord:
    """Issue or pull request event triggered by the tracked user."""

    id: int
    author: str
    date: str  # ISO 8601, created_at
    event_type: str  # "closed", "labeled", "merged", ...
    issue_id: int

"""Exceptions for the GitHub activity client."""

from worktime.core.exceptions import WorktimeError


class GitHubAPIError(WorktimeError):
    """Error from GitHub API."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        rate_limit_reset: int | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.rate_limit_reset = rate_limit_reset  # Unix timestamp when rate limit resets
        super().__init__(message)


class GitHubRepoRenamed(GitHubAPIError):
    """Repository has been renamed or transferred on GitHub.

    Raised on a 301 answer. new_full_name is set when the Location header
    names the new owner/repo; otherwise repo_id may hold the numeric id
    GitHub redirected to.
    """

    def __init__(
        self,
        old_full_name: str,
        new_full_name: str | None = None,
        repo_id: int | None = None,
    ):
        self.old_full_name = old_full_name
        self.new_full_name = new_full_name
        self.repo_id = repo_id

        if new_full_name:
            message = f"Repository renamed: {old_full_name} → {new_full_name}"
        elif repo_id:
            message = f"Repository {old_full_name} moved (GitHub ID: {repo_id})"
        else:
            message = f"Repository {old_full_name} was moved"

        super().__init__(message, status_code=301)

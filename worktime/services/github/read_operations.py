"""
GitHub API read operations.

Provides the read-only endpoints a fetch run needs:
- Organisation repositories
- Commits of a branch, filtered by author and date
- Commits of a pull request
- Commit statistics
- Issue events
"""

import logging
from typing import Any

from worktime.services.github.cache import cached_github_call, commit_stats_cache
from worktime.services.github.helpers import handle_error_response
from worktime.services.github.http_client import get_github_client
from worktime.services.github.types import CommitStats, GitHubRepo

logger = logging.getLogger(__name__)


class GitHubReadOperations:
    """
    Read-only operations for GitHub API.

    Uses a shared HTTP client singleton for connection pooling.
    """

    BASE_URL = "https://api.github.com"
    API_VERSION = "2022-11-28"
    PAGE_SIZE = 100

    def __init__(self, token: str):
        self.token = token
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": self.API_VERSION,
        }

    def _normalize_repo(self, data: dict[str, Any]) -> GitHubRepo:
        """Convert GitHub API response to GitHubRepo dataclass."""
        return GitHubRepo(
            name=data["name"],
            full_name=data["full_name"],
        )

    async def get_json(
        self,
        path: str,
        resource: str,
        params: dict[str, str | int] | None = None,
    ) -> Any:
        """
        GET a single API path and return the decoded body.

        Args:
            path: API path relative to BASE_URL
            resource: Name used in error messages
            params: Optional query parameters

        Raises:
            GitHubAPIError: On any non-200 response
        """
        client = get_github_client()
        response = await client.get(
            f"{self.BASE_URL}{path}",
            headers=self._headers,
            params=params,
        )
        handle_error_response(response, resource)
        logger.info(f"⇓ Fetched {path} {params or ''}")
        return response.json()

    async def paginate(
        self,
        path: str,
        resource: str,
        params: dict[str, str | int] | None = None,
    ) -> list[dict[str, Any]]:
        """
        Fetch every page of a list endpoint.

        Requests pages of PAGE_SIZE items until GitHub answers with an empty page.

        Args:
            path: API path relative to BASE_URL
            resource: Name used in error messages
            params: Extra query parameters sent with every page

        Returns:
            All items of all pages, in API order
        """
        items: list[dict[str, Any]] = []
        page = 1

        while True:
            page_params: dict[str, str | int] = {
                **(params or {}),
                "per_page": self.PAGE_SIZE,
                "page": page,
            }
            data = await self.get_json(path, resource, page_params)
            if not data:
                break
            items.extend(data)
            page += 1

        return items

    async def list_org_repos(self, org: str) -> list[GitHubRepo]:
        """Fetch all repositories of an organisation."""
        data = await self.paginate(f"/orgs/{org}/repos", org)
        return [self._normalize_repo(r) for r in data]

    async def list_commits(
        self,
        owner: str,
        repo: str,
        since: str,
        author: str,
    ) -> list[dict[str, Any]]:
        """
        Fetch all commits of the default branch by an author since a date.

        Args:
            owner: Repository owner
            repo: Repository name
            since: ISO 8601 timestamp, only commits after it are returned
            author: GitHub login of the commit author

        Returns:
            Raw commit objects as returned by GitHub
        """
        return await self.paginate(
            f"/repos/{owner}/{repo}/commits",
            f"{owner}/{repo}",
            {"since": since, "author": author},
        )

    async def list_pull_request_commits(
        self,
        owner: str,
        repo: str,
        pr_id: int,
    ) -> list[dict[str, Any]]:
        """Fetch all commits of a pull request (GitHub caps this list at 250)."""
        return await self.paginate(
            f"/repos/{owner}/{repo}/pulls/{pr_id}/commits",
            f"{owner}/{repo}#{pr_id}",
        )

    async def list_issue_events(self, owner: str, repo: str) -> list[dict[str, Any]]:
        """
        Fetch all issue events of a repository.

        The endpoint supports neither date nor actor filters; callers filter
        the result themselves.
        """
        return await self.paginate(
            f"/repos/{owner}/{repo}/issues/events",
            f"{owner}/{repo}",
        )

    @cached_github_call(commit_stats_cache)
    async def get_commit_stats(self, owner: str, repo: str, sha: str) -> CommitStats:
        """
        Fetch line and file statistics for a single commit.

        Results are cached by sha since a commit's statistics never change.

        Args:
            owner: Repository owner
            repo: Repository name
            sha: Commit SHA

        Returns:
            CommitStats for the commit
        """
        data = await self.get_json(
            f"/repos/{owner}/{repo}/commits/{sha}",
            f"{owner}/{repo}@{sha[:8]}",
        )
        stats = data.get("stats") or {}
        files = data.get("files") or []

        return CommitStats(
            total=stats.get("total", 0),
            additions=stats.get("additions", 0),
            deletions=stats.get("deletions", 0),
            files=len(files),
        )

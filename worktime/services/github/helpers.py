"""
GitHub API helper utilities.

Rate limit header parsing, redirect parsing and the status-code-to-exception
mapping shared by every read operation.
"""

import logging
import re

import httpx

from worktime.services.github.exceptions import GitHubAPIError, GitHubRepoRenamed

logger = logging.getLogger(__name__)

_REPO_LOCATION = re.compile(r"(?:https://api\.github\.com)?/repos/([^/]+)/([^/]+)")
_REPO_ID_LOCATION = re.compile(r"(?:https://api\.github\.com)?/repositories/(\d+)")

# "(#123)" in the first line of a commit message, appended by GitHub on squash merges
_PULL_REQUEST_REFERENCE = re.compile(r"\(#(\d+)\)")


class RateLimitInfo:
    """Rate limit information from GitHub API response."""

    def __init__(self, response: httpx.Response) -> None:
        self.remaining = response.headers.get("X-RateLimit-Remaining")
        self.reset = response.headers.get("X-RateLimit-Reset")

    @property
    def reset_timestamp(self) -> int | None:
        """Get reset timestamp as integer, or None if not available."""
        return int(self.reset) if self.reset else None

    @property
    def is_exhausted(self) -> bool:
        """Check if rate limit is exhausted."""
        return self.remaining is not None and int(self.remaining) == 0


def parse_redirect_location(location: str) -> tuple[str, str] | None:
    """
    Extract owner/repo from a redirect Location header.

    Accepts absolute ("https://api.github.com/repos/owner/name/...") and
    relative ("/repos/owner/name/...") forms.
    """
    match = _REPO_LOCATION.match(location or "")
    if match:
        return (match.group(1), match.group(2))
    return None


def parse_redirect_repo_id(location: str) -> int | None:
    """Extract the numeric repository id from a "/repositories/{id}" redirect."""
    match = _REPO_ID_LOCATION.match(location or "")
    if match:
        return int(match.group(1))
    return None


def find_pull_request_id(message: str) -> int | None:
    """
    Find the pull request a squash-merge commit was created from.

    GitHub only links commits to pull requests while the PR is open, so the
    reference is read from the commit message instead. Only the first line
    is considered and it must hold exactly one "(#N)" reference.

    Args:
        message: Full commit message

    Returns:
        Pull request number, or None for a plain commit
    """
    first_line = message.split("\n", 1)[0]
    matches = _PULL_REQUEST_REFERENCE.findall(first_line)
    if len(matches) == 1:
        return int(matches[0])
    return None


def handle_error_response(response: httpx.Response, resource: str) -> None:
    """
    Raise for any non-200 GitHub API response.

    Args:
        response: The HTTP response from GitHub API
        resource: Resource name for error context (e.g. "owner/repo")

    Raises:
        GitHubRepoRenamed: If repository was renamed/transferred (301)
        GitHubAPIError: For authentication, authorization, or other API errors
    """
    if response.status_code == 200:
        return

    rate_info = RateLimitInfo(response)

    if response.status_code == 301:
        location = response.headers.get("Location", "")
        logger.debug(f"Got 301 redirect for {resource}, Location header: {location!r}")

        new_repo = parse_redirect_location(location)
        if new_repo:
            raise GitHubRepoRenamed(resource, f"{new_repo[0]}/{new_repo[1]}")

        repo_id = parse_redirect_repo_id(location)
        if repo_id:
            raise GitHubRepoRenamed(resource, new_full_name=None, repo_id=repo_id)

        logger.warning(f"{resource} returned 301 with unparseable Location: {location!r}")
        raise GitHubAPIError(
            f"Repository {resource} was moved (301), but couldn't parse new location",
            301,
        )
    elif response.status_code == 401:
        raise GitHubAPIError("Invalid or expired GitHub token", 401)
    elif response.status_code == 404:
        raise GitHubAPIError(f"Repository or resource not found: {resource}", 404)
    elif response.status_code == 403:
        if rate_info.is_exhausted:
            raise GitHubAPIError(
                "GitHub API rate limit exceeded",
                403,
                rate_limit_reset=rate_info.reset_timestamp,
            )
        raise GitHubAPIError("GitHub API forbidden", 403)
    else:
        raise GitHubAPIError(
            f"GitHub API error: {response.status_code}", response.status_code
        )

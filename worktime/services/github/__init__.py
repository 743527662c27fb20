"""
GitHub service package.

Usage: `from worktime.services.github import GitHubReadOperations`

Module structure:
- read_operations.py: Paginated read-only API operations
- helpers.py: Rate limit handling, redirect parsing and error mapping
- http_client.py: Shared AsyncClient lifecycle
- cache.py: TTL cache for commit statistics
- types.py: Data types for repositories, commits and issue events
- exceptions.py: Custom exceptions
"""

from worktime.services.github.cache import clear_all_caches as clear_github_caches
from worktime.services.github.cache import get_cache_stats as get_github_cache_stats
from worktime.services.github.exceptions import GitHubAPIError, GitHubRepoRenamed
from worktime.services.github.helpers import (
    RateLimitInfo,
    find_pull_request_id,
    handle_error_response,
)
from worktime.services.github.http_client import close_github_client
from worktime.services.github.read_operations import GitHubReadOperations
from worktime.services.github.types import (
    CommitRecord,
    CommitStats,
    GitHubRepo,
    IssueEventRecord,
)

__all__ = [
    # Operations
    "GitHubReadOperations",
    # HTTP client lifecycle
    "close_github_client",
    # Cache management
    "clear_github_caches",
    "get_github_cache_stats",
    # Utilities
    "find_pull_request_id",
    "handle_error_response",
    "RateLimitInfo",
    # Exceptions
    "GitHubAPIError",
    "GitHubRepoRenamed",
    # Types
    "CommitRecord",
    "CommitStats",
    "GitHubRepo",
    "IssueEventRecord",
]

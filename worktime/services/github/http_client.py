"""
Shared HTTP client for GitHub API calls.

A fetch run pages through hundreds of commit and issue endpoints, so one
pooled AsyncClient is reused for all of them and closed when the run ends.
"""

import logging

import httpx

logger = logging.getLogger(__name__)

# Module-level singleton client
_client: httpx.AsyncClient | None = None


def get_github_client() -> httpx.AsyncClient:
    """
    Get or create the shared HTTP client for GitHub API calls.

    Auth headers are passed per request, not stored on the client.

    Returns:
        Shared httpx.AsyncClient configured for GitHub API
    """
    global _client
    if _client is None or _client.is_closed:
        _client = httpx.AsyncClient(
            timeout=httpx.Timeout(30.0, connect=5.0),
            limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
            http2=True,
        )
        logger.debug("Created new GitHub HTTP client")
    return _client


async def close_github_client() -> None:
    """Close the shared HTTP client at the end of a fetch run."""
    global _client
    if _client is not None and not _client.is_closed:
        await _client.aclose()
        _client = None
        logger.debug("Closed GitHub HTTP client")

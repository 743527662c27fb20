"""
TTL caching for GitHub API responses.

Commit statistics never change for a given sha, so they are cached for a
day; a fetch run that sees the same commit in the branch history and in a
pull request only asks GitHub once.
"""

import hashlib
import logging
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, ParamSpec, TypeVar

from cachetools import TTLCache  # type: ignore[import-untyped]

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")

_commit_stats_cache: TTLCache[str, Any] = TTLCache(maxsize=5000, ttl=86400)  # 1 day


def _make_cache_key(func_name: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> str:
    """Build a cache key from the function name and arguments, skipping 'self'."""
    cache_args = args[1:] if args else ()
    key_data = f"{func_name}:{cache_args}:{sorted(kwargs.items())}"
    return hashlib.md5(key_data.encode()).hexdigest()


def cached_github_call(
    cache: TTLCache[str, Any],
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """
    Decorator for caching async GitHub API calls.

    Usage:
        @cached_github_call(commit_stats_cache)
        async def get_commit_stats(self, owner: str, repo: str, sha: str) -> CommitStats:
            ...
    """

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            key = _make_cache_key(func.__name__, args, kwargs)

            if key in cache:
                logger.debug(f"Cache HIT: {func.__name__}")
                cached_result: T = cache[key]
                return cached_result

            logger.debug(f"Cache MISS: {func.__name__}")
            result = await func(*args, **kwargs)
            cache[key] = result
            return result

        return wrapper

    return decorator


def clear_all_caches() -> None:
    """Clear all GitHub caches."""
    _commit_stats_cache.clear()
    logger.debug("Cleared all GitHub caches")


def get_cache_stats() -> dict[str, dict[str, int]]:
    """Get current cache sizes."""
    return {
        "commit_stats": {
            "size": len(_commit_stats_cache),
            "maxsize": _commit_stats_cache.maxsize,
        },
    }


commit_stats_cache = _commit_stats_cache

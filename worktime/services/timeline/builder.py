"""Timeline builder: merges per-source event collections into one ordered timeline."""

import logging
from collections.abc import Iterable

from worktime.services.timeline.types import Event, Timeline

logger = logging.getLogger(__name__)


def dedupe_events(events: Iterable[Event]) -> list[Event]:
    """
    Drop events whose identity was already seen, keeping the first occurrence.

    Events without an identity are always kept.

    Args:
        events: Events in input order

    Returns:
        Events in input order without repeated identities
    """
    seen: set[str] = set()
    unique: list[Event] = []
    for event in events:
        identity = event.identity
        if identity is None:
            unique.append(event)
            continue
        if identity in seen:
            continue
        seen.add(identity)
        unique.append(event)
    return unique


def build_timeline(*collections: Iterable[Event]) -> Timeline:
    """
    Merge event collections into one timeline sorted by timestamp.

    Collections are concatenated in argument order, deduplicated by identity
    and sorted with a stable sort, so events sharing a timestamp keep their
    relative input order.

    Args:
        *collections: Zero or more event collections, in any order

    Returns:
        Timeline (tuple of events), empty when there are no events
    """
    merged = [event for collection in collections for event in collection]
    unique = dedupe_events(merged)

    dropped = len(merged) - len(unique)
    if dropped:
        logger.info(f"Dropped {dropped} duplicate events while building the timeline")

    timeline = tuple(sorted(unique, key=lambda event: event.timestamp))
    logger.debug(f"Built timeline with {len(timeline)} events from {len(collections)} sources")
    return timeline

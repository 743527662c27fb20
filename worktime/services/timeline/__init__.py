"""
Timeline package: the work phase inference engine.

Module structure:
- types.py: Events, provenance variants, work phases and query intervals
- builder.py: Merges event collections into one ordered, deduplicated timeline
- phases.py: Splits a timeline into work phases using a gap threshold
- aggregator.py: Measures work phases against arbitrary query windows
"""

from worktime.services.timeline.aggregator import (
    is_working,
    minutes_worked,
    overlap_duration,
    overlapping_phases,
    phase_overlaps,
)
from worktime.services.timeline.builder import build_timeline, dedupe_events
from worktime.services.timeline.phases import segment_work_phases
from worktime.services.timeline.types import (
    Event,
    EventKind,
    EventProvenance,
    PlainCommit,
    PullRequestCommit,
    QueryInterval,
    SquashMergeCommit,
    Timeline,
    WorkPhase,
)

__all__ = [
    # Engine
    "build_timeline",
    "dedupe_events",
    "segment_work_phases",
    "minutes_worked",
    "is_working",
    "overlap_duration",
    "overlapping_phases",
    "phase_overlaps",
    # Types
    "Event",
    "EventKind",
    "EventProvenance",
    "PlainCommit",
    "PullRequestCommit",
    "QueryInterval",
    "SquashMergeCommit",
    "Timeline",
    "WorkPhase",
]

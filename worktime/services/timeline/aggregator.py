"""Interval aggregation: how much inferred work falls into a query window."""

from bisect import bisect_left
from collections.abc import Sequence
from datetime import datetime, timedelta

from worktime.services.timeline.types import QueryInterval, WorkPhase

_MINUTE = timedelta(minutes=1)


def _phase_start(phase: WorkPhase) -> datetime:
    return phase.start


def phase_overlaps(phase: WorkPhase, interval: QueryInterval) -> bool:
    """
    Check if a phase overlaps the half-open interval.

    A one-instant phase (start == end) overlaps when the interval contains
    that instant; it still contributes zero minutes.
    """
    if phase.start == phase.end:
        return interval.contains(phase.start)
    return phase.start < interval.end and interval.start < phase.end


def overlap_duration(phase: WorkPhase, interval: QueryInterval) -> timedelta:
    """Length of the intersection of a phase and an interval (zero when disjoint)."""
    if not phase_overlaps(phase, interval):
        return timedelta(0)
    return min(phase.end, interval.end) - max(phase.start, interval.start)


def overlapping_phases(phases: Sequence[WorkPhase], interval: QueryInterval) -> list[WorkPhase]:
    """
    Phases overlapping the interval, found by bisecting on phase starts.

    Phases must be sorted and pairwise non-overlapping, as segment_work_phases
    returns them; their ends are then sorted too.
    """
    stop = bisect_left(phases, interval.end, key=_phase_start)
    first = stop
    while first > 0 and phases[first - 1].end >= interval.start:
        first -= 1
    return [phase for phase in phases[first:stop] if phase_overlaps(phase, interval)]


def minutes_worked(phases: Sequence[WorkPhase], interval: QueryInterval) -> float:
    """
    Total minutes of work inside a query interval.

    Phases are disjoint, so summing each phase's intersection never counts
    the same time twice. The result keeps fractional minutes.

    Args:
        phases: Sorted work phases of one analysis run
        interval: Half-open window to measure

    Returns:
        Non-negative number of minutes, 0.0 when nothing overlaps
    """
    total = sum(
        (overlap_duration(phase, interval) for phase in overlapping_phases(phases, interval)),
        timedelta(0),
    )
    return total / _MINUTE


def is_working(phases: Sequence[WorkPhase], interval: QueryInterval) -> bool:
    """Check if any work phase overlaps the interval."""
    return bool(overlapping_phases(phases, interval))

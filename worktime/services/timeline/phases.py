"""
Work phase segmentation.

Discrete events stand in for continuous but unobserved work. A silence longer
than the gap threshold ends the current phase; any shorter gap is treated as
part of the same session. Every phase is closed with a fixed padding after its
last event, representing work done after the last recorded activity.
"""

import logging
from collections.abc import Sequence
from datetime import datetime

from worktime.config.analysis import AnalysisConfig
from worktime.services.timeline.types import Event, WorkPhase

logger = logging.getLogger(__name__)


def segment_work_phases(
    timeline: Sequence[Event],
    config: AnalysisConfig | None = None,
) -> list[WorkPhase]:
    """
    Split a sorted timeline into non-overlapping work phases.

    Two consecutive events belong to the same phase iff the time between them
    is at most config.threshold. A phase ends at its last event plus
    config.padding; when the next phase starts earlier than that (threshold
    smaller than padding) the end is clamped to the next phase's start.
    A single trailing event forms a phase of exactly the padding length.

    Args:
        timeline: Events sorted ascending by timestamp
        config: Analysis configuration (threshold and padding are used)

    Returns:
        Phases sorted by start, pairwise non-overlapping, empty for an empty timeline
    """
    if config is None:
        config = AnalysisConfig()

    if not timeline:
        return []

    phases: list[WorkPhase] = []
    phase_start: datetime = timeline[0].timestamp

    for current, following in zip(timeline, timeline[1:]):
        gap = following.timestamp - current.timestamp
        if gap > config.threshold:
            end = min(current.timestamp + config.padding, following.timestamp)
            phases.append(WorkPhase(start=phase_start, end=end))
            phase_start = following.timestamp

    phases.append(WorkPhase(start=phase_start, end=timeline[-1].timestamp + config.padding))

    logger.debug(
        f"Segmented {len(timeline)} events into {len(phases)} work phases "
        f"(threshold={config.threshold}, padding={config.padding})"
    )
    return phases

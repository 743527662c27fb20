"""
Analysis run: from stored event collections to a finished report.

Workflow:
1. Merge the event collections into one timeline
2. Segment the timeline into work phases
3. Measure the phases per calendar cell, day, month and the whole range
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from worktime.config.analysis import AnalysisConfig
from worktime.services.report import (
    DayReport,
    MonthReport,
    build_calendar,
    build_month_summary,
    total_minutes,
)
from worktime.services.timeline import (
    Event,
    Timeline,
    WorkPhase,
    build_timeline,
    segment_work_phases,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    """Everything an analysis run computed."""

    timeline: Timeline
    phases: tuple[WorkPhase, ...]
    days: list[DayReport]
    months: list[MonthReport]
    total_minutes: float


def run_analysis(
    collections: Iterable[Iterable[Event]],
    config: AnalysisConfig,
) -> AnalysisResult:
    """
    Run the whole analysis for one configuration.

    Args:
        collections: One event collection per source (e.g. per repository)
        config: Analysis configuration with a start and end

    Returns:
        AnalysisResult with the timeline, phases and all reports

    Raises:
        ConfigurationError: If the configuration has no range
    """
    timeline = build_timeline(*collections)
    phases = tuple(segment_work_phases(timeline, config))
    logger.info(f"Found {len(phases)} work phases in {len(timeline)} timeline events")

    return AnalysisResult(
        timeline=timeline,
        phases=phases,
        days=build_calendar(timeline, phases, config),
        months=build_month_summary(phases, config),
        total_minutes=total_minutes(phases, config),
    )

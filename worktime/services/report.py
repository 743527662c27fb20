"""
Report layer: calendar cells, day, month and total work durations.

Everything here is built from the timeline and the work phases of one run
by asking the interval aggregator; nothing is printed.
"""

from bisect import bisect_left
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta

from worktime.config.analysis import AnalysisConfig
from worktime.core.exceptions import ConfigurationError
from worktime.services.timeline import (
    Event,
    QueryInterval,
    WorkPhase,
    is_working,
    minutes_worked,
)

# (minimum event count, symbol), checked from the top
INTENSITY_SYMBOLS: list[tuple[int, str]] = [
    (10, "●"),
    (4, "◕"),
    (2, "◓"),
    (1, "◔"),
    (0, " "),
]


@dataclass(frozen=True)
class CellReport:
    """One calendar cell of a day."""

    interval: QueryInterval
    in_phase: bool  # Any work phase overlaps the cell
    event_count: int

    @property
    def symbol(self) -> str:
        return intensity_symbol(self.event_count)


@dataclass(frozen=True)
class DayReport:
    """Work of one calendar day."""

    day: date
    cells: list[CellReport]
    minutes: float


@dataclass(frozen=True)
class MonthReport:
    """Work of one calendar month, clipped to the analysed range."""

    month: date  # First day of the month
    minutes: float


def intensity_symbol(event_count: int) -> str:
    """Pick the symbol showing how busy a cell was."""
    for minimum, symbol in INTENSITY_SYMBOLS:
        if event_count >= minimum:
            return symbol
    return " "


def format_duration(minutes: float) -> str:
    """Format minutes as HH:MM:SS, hours unbounded; empty string when nothing was worked."""
    if minutes <= 0:
        return ""
    total_seconds = round(minutes * 60)
    hours, remainder = divmod(total_seconds, 3600)
    mins, secs = divmod(remainder, 60)
    return f"{hours:02d}:{mins:02d}:{secs:02d}"


def _require_range(config: AnalysisConfig) -> QueryInterval:
    if not config.has_range:
        raise ConfigurationError("Reports need an analysis start and end")
    return QueryInterval(config.start, config.end)


def _day_start(day: date) -> datetime:
    return datetime(day.year, day.month, day.day, tzinfo=UTC)


def _next_month(month: date) -> date:
    if month.month == 12:
        return date(month.year + 1, 1, 1)
    return date(month.year, month.month + 1, 1)


def days_in_range(config: AnalysisConfig) -> list[date]:
    """Every calendar day (UTC) sharing time with the analysed range."""
    query = _require_range(config)
    days: list[date] = []
    day = query.start.date()
    while _day_start(day) < query.end:
        days.append(day)
        day += timedelta(days=1)
    return days


def count_events(timestamps: Sequence[datetime], interval: QueryInterval) -> int:
    """Count sorted timestamps inside [start, end)."""
    return bisect_left(timestamps, interval.end) - bisect_left(timestamps, interval.start)


def build_day(
    day: date,
    timestamps: Sequence[datetime],
    phases: Sequence[WorkPhase],
    config: AnalysisConfig,
) -> DayReport:
    """
    Partition a day into cells and measure the work done during it.

    Args:
        day: Calendar day (UTC)
        timestamps: Sorted event timestamps of the whole timeline
        phases: Work phases of the run
        config: Analysis configuration (cell_size is used)

    Returns:
        DayReport with one CellReport per cell
    """
    start = _day_start(day)
    cells: list[CellReport] = []
    for index in range(config.cells_per_day):
        cell_start = start + config.cell_size * index
        cell = QueryInterval(cell_start, cell_start + config.cell_size)
        cells.append(
            CellReport(
                interval=cell,
                in_phase=is_working(phases, cell),
                event_count=count_events(timestamps, cell),
            )
        )

    whole_day = QueryInterval(start, start + timedelta(days=1))
    return DayReport(day=day, cells=cells, minutes=minutes_worked(phases, whole_day))


def build_calendar(
    timeline: Sequence[Event],
    phases: Sequence[WorkPhase],
    config: AnalysisConfig,
) -> list[DayReport]:
    """Build a DayReport for every day of the analysed range."""
    timestamps = [event.timestamp for event in timeline]
    return [build_day(day, timestamps, phases, config) for day in days_in_range(config)]


def build_month_summary(
    phases: Sequence[WorkPhase],
    config: AnalysisConfig,
) -> list[MonthReport]:
    """Minutes worked per calendar month, clipped to the analysed range."""
    query = _require_range(config)
    months: list[MonthReport] = []

    month = query.start.date().replace(day=1)
    while _day_start(month) < query.end or not months:
        month_start = max(_day_start(month), query.start)
        month_end = min(_day_start(_next_month(month)), query.end)
        minutes = minutes_worked(phases, QueryInterval(month_start, month_end))
        months.append(MonthReport(month=month, minutes=minutes))
        month = _next_month(month)

    return months


def total_minutes(phases: Sequence[WorkPhase], config: AnalysisConfig) -> float:
    """Minutes worked over the whole analysed range."""
    return minutes_worked(phases, _require_range(config))

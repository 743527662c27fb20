"""Analysis configuration - one immutable value passed to the timeline engine."""

from dataclasses import dataclass
from datetime import datetime, timedelta

from worktime.config.settings import Settings
from worktime.core.exceptions import ConfigurationError
from worktime.core.timeutils import parse_instant

DEFAULT_THRESHOLD = timedelta(minutes=240)
DEFAULT_PADDING = timedelta(minutes=5)
DEFAULT_CELL_SIZE = timedelta(minutes=30)

_DAY = timedelta(days=1)


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for one analysis run."""

    threshold: timedelta = DEFAULT_THRESHOLD  # Max gap inside one work phase
    padding: timedelta = DEFAULT_PADDING  # Work assumed after a phase's last event
    start: datetime | None = None  # Inclusive start of the analysed range
    end: datetime | None = None  # Exclusive end of the analysed range
    cell_size: timedelta = DEFAULT_CELL_SIZE  # Calendar cell width

    def __post_init__(self) -> None:
        if self.padding < timedelta(0):
            raise ConfigurationError("Padding must not be negative")
        if self.cell_size <= timedelta(0) or _DAY % self.cell_size:
            raise ConfigurationError(f"Cell size {self.cell_size} must evenly divide a day")
        if self.start is not None and self.end is not None and self.end < self.start:
            raise ConfigurationError(
                f"Analysis range ends ({self.end.isoformat()}) "
                f"before it starts ({self.start.isoformat()})"
            )

    @property
    def has_range(self) -> bool:
        """Check if both ends of the analysed range are set."""
        return self.start is not None and self.end is not None

    @property
    def cells_per_day(self) -> int:
        return _DAY // self.cell_size


def build_analysis_config(
    settings: Settings,
    *,
    start: str | None = None,
    end: str | None = None,
    threshold_minutes: int | None = None,
) -> AnalysisConfig:
    """
    Build the analysis configuration from settings and explicit overrides.

    Args:
        settings: Loaded application settings
        start: ISO 8601 start overriding settings.analysis_from
        end: ISO 8601 end overriding settings.analysis_to
        threshold_minutes: Gap threshold overriding settings.threshold_minutes

    Returns:
        Frozen AnalysisConfig

    Raises:
        ParseError: If a date is not valid ISO 8601
        ConfigurationError: If the range is inverted or the cell size is invalid
    """
    if threshold_minutes is None:
        threshold_minutes = settings.threshold_minutes

    return AnalysisConfig(
        threshold=timedelta(minutes=threshold_minutes),
        padding=timedelta(minutes=settings.padding_minutes),
        start=parse_instant(start or settings.analysis_from, "--from"),
        end=parse_instant(end or settings.analysis_to, "--to"),
        cell_size=timedelta(minutes=settings.cell_minutes),
    )

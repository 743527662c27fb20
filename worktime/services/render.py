"""Terminal rendering of analysis reports with rich."""

from collections.abc import Sequence

from rich.console import Console
from rich.text import Text

from worktime.services.report import DayReport, MonthReport, format_duration

TITLE_STYLE = "bold black on magenta"


def print_title(console: Console, title: str) -> None:
    """Print a section title framed by lines of ❉ characters."""
    line = "".join("❉" if index % 2 == 0 else " " for index in range(len(title)))
    console.print(line, style=TITLE_STYLE)
    console.print(title, style=TITLE_STYLE)
    console.print(line, style=TITLE_STYLE)
    console.print()


def render_day(day: DayReport) -> Text:
    """Render one calendar line; cells inside a work phase are underlined."""
    text = Text(f"┆ {day.day:%d.%m.%y} ┆ ")
    for cell in day.cells:
        text.append(cell.symbol, style="underline" if cell.in_phase else "")
    text.append(f" ┆ {format_duration(day.minutes)}")
    return text


def print_calendar(console: Console, days: Sequence[DayReport]) -> None:
    """Print one line per day with a heading whenever a new month starts."""
    print_title(console, "Calendar")

    previous_month: tuple[int, int] | None = None
    for day in days:
        month = (day.day.year, day.day.month)
        if month != previous_month:
            console.print()
            console.print(f"{day.day:%B %Y}", style="bold underline")
            console.print()
            previous_month = month
        console.print(render_day(day))

    console.print()


def print_month_summary(console: Console, months: Sequence[MonthReport]) -> None:
    print_title(console, "Months summary")

    console.print("  Month         Hours")
    console.print("------------------------")
    for month in months:
        console.print(
            " ".join(
                [
                    "▶",
                    f"{month.month:%B %y}".ljust(12),
                    format_duration(month.minutes).rjust(9),
                ]
            )
        )

    console.print()


def print_total(console: Console, minutes: float) -> None:
    print_title(console, "Total hours")
    console.print(f"{format_duration(minutes) or '00:00:00'} hours")
    console.print()

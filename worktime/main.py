"""Command line entry point: `worktime fetch` and `worktime analyse`."""

import asyncio
import logging
import sys
from pathlib import Path

import click
from rich.console import Console

from worktime.config import build_analysis_config, settings
from worktime.core.exceptions import ConfigurationError, WorktimeError
from worktime.services.analysis import run_analysis
from worktime.services.collector import ActivityCollector
from worktime.services.github import (
    GitHubReadOperations,
    close_github_client,
    get_github_cache_stats,
)
from worktime.services.render import (
    print_calendar,
    print_month_summary,
    print_title,
    print_total,
)
from worktime.services.storage import ActivityStore


def setup_logging(verbose: bool = False) -> None:
    """Configure application logging."""
    # Format: timestamp - level - logger name - message
    log_format = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
    date_format = "%H:%M:%S"

    logging.basicConfig(
        level=logging.DEBUG if verbose or settings.debug else logging.INFO,
        format=log_format,
        datefmt=date_format,
        stream=sys.stderr,
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("hpack").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)


def resolve_github_token(token_file: str) -> str:
    """
    Get the GitHub token from settings or from the token file.

    Raises:
        ConfigurationError: If neither holds a token
    """
    if settings.github_enabled:
        return settings.github_token

    path = Path(token_file)
    try:
        token = path.read_text(encoding="utf-8").strip()
    except OSError as e:
        raise ConfigurationError(
            f'GitHub personal authentication token for API missing in "{path}" file'
        ) from e

    if not token:
        raise ConfigurationError(f'GitHub token file "{path}" is empty')
    return token


async def fetch_activity(
    token: str,
    organisation: str,
    author: str,
    since: str,
    data_dir: str,
) -> int:
    """Fetch and store the activity of every repository; returns the repository count."""
    collector = ActivityCollector(
        github=GitHubReadOperations(token),
        store=ActivityStore(data_dir),
        author=author,
        since=since,
    )
    try:
        activities = await collector.collect_organisation(organisation)
    finally:
        await close_github_client()
    logger.debug(f"GitHub cache: {get_github_cache_stats()}")
    return len(activities)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def cli(verbose: bool) -> None:
    """Infer working hours from GitHub activity."""
    setup_logging(verbose)


@cli.command()
@click.option(
    "-t",
    "--token-file",
    default=settings.github_token_file,
    show_default=True,
    help="Path to file holding GitHub API auth token",
)
@click.option(
    "-f",
    "--from",
    "since",
    default=settings.fetch_from,
    show_default=True,
    help="Download data from that date on, formatted as ISO 8601 string",
)
@click.option(
    "-o",
    "--organisation",
    default=settings.github_organisation,
    show_default=True,
    help="GitHub organisation name",
)
@click.option(
    "-a",
    "--author",
    default=settings.github_author,
    show_default=True,
    help="GitHub username",
)
@click.option(
    "-d",
    "--data",
    "data_dir",
    default=settings.data_dir,
    show_default=True,
    help="Folder to write one JSON file per repository to",
)
def fetch(token_file: str, since: str, organisation: str, author: str, data_dir: str) -> None:
    """Download commits and issue events of an author from GitHub."""
    try:
        token = resolve_github_token(token_file)
        count = asyncio.run(fetch_activity(token, organisation, author, since, data_dir))
    except WorktimeError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"✔ Stored activity of {count} repositories in {data_dir}")


@cli.command()
@click.option(
    "-d",
    "--data",
    "data_dir",
    default=settings.data_dir,
    show_default=True,
    help="Name of the data folder",
)
@click.option(
    "-f",
    "--from",
    "start",
    default=settings.analysis_from,
    show_default=True,
    help="Analyse data from that date on, formatted as ISO 8601 string",
)
@click.option(
    "-t",
    "--to",
    "end",
    default=settings.analysis_to,
    show_default=True,
    help="Analyse data until that date, formatted as ISO 8601 string",
)
@click.option(
    "-g",
    "--threshold",
    type=click.IntRange(min=0),
    default=settings.threshold_minutes,
    show_default=True,
    help="Minutes between two events that still count as one working phase",
)
def analyse(data_dir: str, start: str, end: str, threshold: int) -> None:
    """Print a calendar of inferred working phases and the hours worked."""
    console = Console(highlight=False)

    try:
        config = build_analysis_config(
            settings, start=start, end=end, threshold_minutes=threshold
        )
        print_title(console, "Gather data from all files into a timeline")
        collections = ActivityStore(data_dir).load_events()
        result = run_analysis(collections, config)
    except WorktimeError as e:
        raise click.ClickException(str(e)) from e

    console.print(f"✔ Got [bold]{len(result.timeline)}[/bold] timeline events")
    console.print()

    print_calendar(console, result.days)
    print_month_summary(console, result.months)
    print_total(console, result.total_minutes)
    console.print("Done!")


if __name__ == "__main__":
    cli()

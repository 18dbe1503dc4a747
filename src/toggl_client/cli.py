"""Command-line interface for the Toggl API client."""

import logging
import sys
from datetime import datetime, time, timedelta, timezone
from pathlib import Path
from typing import NoReturn, Optional

import httpx
import typer
from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

from toggl_client import __version__
from toggl_client.client import TogglClient
from toggl_client.config import Config
from toggl_client.errors import TogglError, TruncatedResultError
from toggl_client.models import TimeEntry
from toggl_client.utils import StorageManager, setup_logging

app = typer.Typer(help="Query the Toggl time tracking API")
console = Console()
logger = logging.getLogger(__name__)

ConfigDirOption = typer.Option(
    None,
    "--config-dir",
    help="Configuration directory. Defaults to ~/.toggl-client/",
)
VerboseOption = typer.Option(
    False,
    "--verbose",
    "-v",
    help="Enable verbose logging.",
)


def _setup_logging(config_dir: Optional[Path], verbose: bool) -> None:
    config = Config(config_dir)
    setup_logging(
        log_level=logging.DEBUG if verbose else logging.INFO,
        log_file=config.log_file,
    )


def _parse_date(value: str) -> datetime:
    try:
        return datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        console.print("[red]Invalid date format. Use YYYY-MM-DD[/red]")
        raise typer.Exit(code=1)


def _open_client(config_dir: Optional[Path]) -> TogglClient:
    storage = StorageManager(config_dir)
    config = Config(config_dir)
    try:
        return TogglClient.from_storage(storage, timeout=config.timeout)
    except ValueError:
        console.print("[yellow]Toggl API token not found. Please configure it first.[/yellow]")
        console.print("Run: toggl-client configure")
        raise typer.Exit(code=1)


def _format_duration(value: timedelta) -> str:
    seconds = int(value.total_seconds())
    hours, remainder = divmod(abs(seconds), 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours}:{minutes:02d}:{seconds:02d}"


def _entries_table(title: str, entries: list[TimeEntry]) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan")
    table.add_column("Start")
    table.add_column("Stop")
    table.add_column("Duration", style="magenta")
    table.add_column("Description")
    table.add_column("Tags", style="yellow")

    for entry in entries:
        table.add_row(
            str(entry.id),
            entry.start.strftime("%Y-%m-%d %H:%M") if entry.start else "-",
            entry.stop.strftime("%Y-%m-%d %H:%M") if entry.stop else "-",
            "running" if entry.is_running else _format_duration(entry.duration),
            entry.description,
            ", ".join(entry.tags),
        )
    return table


def _fail(error: Exception) -> NoReturn:
    logger.error(f"API request failed: {error}", exc_info=True)
    console.print(f"[red]Error: API request failed: {error}[/red]")
    raise typer.Exit(code=1)


@app.command()
def configure(
    config_dir: Optional[Path] = ConfigDirOption,
    verbose: bool = VerboseOption,
) -> None:
    """Save the Toggl API token and test the connection."""
    _setup_logging(config_dir, verbose)

    storage = StorageManager(config_dir)
    config = Config(config_dir)

    console.print("[bold cyan]Toggl Client Configuration[/bold cyan]")
    api_key = Prompt.ask("Enter your Toggl API token", password=True)
    storage.set_token(api_key)
    console.print("[green]✓ Toggl API token saved[/green]")

    console.print("[cyan]Testing connection...[/cyan]")
    try:
        with TogglClient(api_key, timeout=config.timeout) as client:
            user = client.me.get()
    except TogglError as e:
        console.print(f"[red]✗ Failed to connect to Toggl: {e}[/red]")
        raise typer.Exit(code=1)

    console.print(f"[green]✓ Connected to Toggl as {user.email}[/green]")


@app.command()
def me(
    config_dir: Optional[Path] = ConfigDirOption,
    verbose: bool = VerboseOption,
) -> None:
    """Show the profile of the current user."""
    _setup_logging(config_dir, verbose)

    try:
        with _open_client(config_dir) as client:
            user = client.me.get()
    except (TogglError, httpx.HTTPError) as e:
        _fail(e)

    table = Table(title="Toggl User")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="magenta")
    table.add_row("Email", user.email)
    table.add_row("Default workspace", str(user.default_workspace_id))
    table.add_row("Timezone", user.timezone)
    table.add_row("Language", user.language)
    table.add_row("Date format", user.date_format)
    table.add_row("Beginning of week", str(user.beginning_of_week))
    console.print(table)


@app.command()
def entries(
    from_date: str = typer.Option(
        ...,
        "--from-date",
        help="First day of the range (YYYY-MM-DD, UTC).",
    ),
    to_date: Optional[str] = typer.Option(
        None,
        "--to-date",
        help="Last day of the range (YYYY-MM-DD, UTC). Defaults to today.",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Fail when the service's 1000 entry limit is reached.",
    ),
    config_dir: Optional[Path] = ConfigDirOption,
    verbose: bool = VerboseOption,
) -> None:
    """List time entries started within a date range."""
    _setup_logging(config_dir, verbose)

    start = _parse_date(from_date).replace(tzinfo=timezone.utc)
    if to_date:
        end_day = _parse_date(to_date)
    else:
        end_day = datetime.now(timezone.utc)
    end = datetime.combine(end_day.date(), time.max, tzinfo=timezone.utc)

    if start > end:
        console.print("[red]--from-date must not be after --to-date[/red]")
        raise typer.Exit(code=1)

    try:
        with _open_client(config_dir) as client:
            result = client.time_entries.range(start, end, strict=strict)
    except TruncatedResultError as e:
        console.print(f"[red]Error: {e}[/red]")
        console.print("Split the range into smaller ones.")
        raise typer.Exit(code=1)
    except (TogglError, httpx.HTTPError) as e:
        _fail(e)

    if not result:
        console.print("[yellow]No time entries found.[/yellow]")
        return

    console.print(_entries_table("Time Entries", result))
    total = sum((entry.duration for entry in result if not entry.is_running), timedelta(0))
    console.print(f"Total: [bold]{_format_duration(total)}[/bold] in {len(result)} entries")


@app.command()
def current(
    config_dir: Optional[Path] = ConfigDirOption,
    verbose: bool = VerboseOption,
) -> None:
    """Show the running time entry."""
    _setup_logging(config_dir, verbose)

    try:
        with _open_client(config_dir) as client:
            entry = client.time_entries.current()
    except (TogglError, httpx.HTTPError) as e:
        _fail(e)

    if entry is None:
        console.print("[yellow]No running time entry.[/yellow]")
        return

    console.print(_entries_table("Running Entry", [entry]))


@app.command()
def entry(
    entry_id: int = typer.Argument(..., help="Time entry ID."),
    config_dir: Optional[Path] = ConfigDirOption,
    verbose: bool = VerboseOption,
) -> None:
    """Show a single time entry."""
    _setup_logging(config_dir, verbose)

    try:
        with _open_client(config_dir) as client:
            result = client.time_entries.get(entry_id)
    except (TogglError, httpx.HTTPError) as e:
        _fail(e)

    console.print(_entries_table(f"Time Entry {entry_id}", [result]))


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"Toggl Client v{__version__}")


def main() -> None:
    """Main entry point."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        console.print(f"[red]Unexpected error: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()

"""CLI entry point for the interview scheduler."""

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .constants import DEFAULT_GRANULARITY, DEFAULT_TIME_LIMIT
from .exceptions import SchedulingError
from .exporters import get_exporter, load_result
from .models import ScheduleResult, SearchMode, TimeWindow
from .scheduler import ConfigLoader, InterviewScheduler, SchedulerConfig, load_request
from .scheduler.config import SchedulingRequest
from .utils import format_time, group_by_candidate, parse_time
from .validators import validate_candidate, validate_organization, validate_time_window

app = typer.Typer(
    name="crisp-scheduler",
    help="Schedule campus recruitment interviews",
    add_completion=False,
)
console = Console()


class OutputFormat(str, Enum):
    """Output format options."""

    json = "json"
    csv = "csv"
    excel = "excel"


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _run(
    request: SchedulingRequest,
    granularity: int,
    mode: SearchMode,
    max_steps: Optional[int],
    time_limit: int,
) -> ScheduleResult:
    try:
        config = SchedulerConfig(
            granularity=granularity, mode=mode, max_steps=max_steps, time_limit=time_limit
        )
    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    scheduler = InterviewScheduler(config)
    try:
        with console.status("[bold green]Generating schedule..."):
            return scheduler.schedule(request)
    except SchedulingError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


def _report(result: ScheduleResult, verbose: bool) -> None:
    stats = result.statistics
    console.print("\n[bold]Schedule Results:[/bold]")
    console.print(f"  Candidates: {stats.total_candidates}")
    console.print(f"  Total interviews: {stats.total_interviews}")
    console.print(f"  Conflicts: {stats.total_conflicts}")
    console.print(f"  Success rate: {stats.success_rate:.1f}%")

    if result.conflicts:
        console.print(f"\n[bold yellow]Conflicts ({len(result.conflicts)}):[/bold yellow]")
        for conflict in result.conflicts[:10]:
            console.print(f"  [yellow]• {conflict.reason}[/yellow]")
        if len(result.conflicts) > 10:
            console.print(f"  [yellow]... and {len(result.conflicts) - 10} more[/yellow]")

    if verbose and stats.panel_utilization:
        console.print("\n[bold]Panel utilization by organization:[/bold]")
        for name, utilization in sorted(stats.panel_utilization.items(), key=lambda x: -x[1]):
            console.print(f"  {name}: {utilization:.1%}")


def _export(result: ScheduleResult, output: Optional[Path], format: OutputFormat) -> None:
    if output is None:
        output = Path("output/schedule")

    if format == OutputFormat.csv:
        # CSV exports to directory
        output_path = output if output.is_dir() or not output.suffix else output.parent / output.stem
    else:
        suffix = ".xlsx" if format == OutputFormat.excel else ".json"
        output_path = output if output.suffix else output.with_suffix(suffix)

    exporter = get_exporter(format.value)
    with console.status(f"[bold green]Exporting to {format.value}..."):
        exporter.export(result, output_path)

    console.print(f"\n[bold green]✓[/bold green] Exported to: {output_path}")


@app.command()
def schedule(
    input_file: Annotated[
        Path,
        typer.Argument(help="Request JSON with timeSlot, companies and students"),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option("-o", "--output", help="Output file or directory path"),
    ] = None,
    format: Annotated[
        OutputFormat,
        typer.Option("-f", "--format", help="Output format"),
    ] = OutputFormat.json,
    granularity: Annotated[
        int,
        typer.Option("--granularity", "-g", help="Slot length in minutes"),
    ] = DEFAULT_GRANULARITY,
    mode: Annotated[
        SearchMode,
        typer.Option("--mode", "-m", help="Placement strategy"),
    ] = SearchMode.GREEDY,
    max_steps: Annotated[
        Optional[int],
        typer.Option("--max-steps", help="Per-candidate search budget (greedy mode)"),
    ] = None,
    time_limit: Annotated[
        int,
        typer.Option("--time-limit", help="Solver time limit in seconds (exhaustive mode)"),
    ] = DEFAULT_TIME_LIMIT,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Show detailed output"),
    ] = False,
) -> None:
    """Generate an interview schedule from a request JSON file."""
    if not input_file.exists():
        console.print(f"[bold red]Error:[/bold red] File not found: {input_file}")
        raise typer.Exit(1)

    _setup_logging(verbose)

    try:
        request = load_request(input_file)
    except SchedulingError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    console.print(f"\n[bold]Schedule Generation for:[/bold] {input_file.name}")
    console.print(
        f"  Window: {format_time(request.window.start)} - {format_time(request.window.end)}"
    )
    console.print(f"  Organizations: {len(request.organizations)}")
    console.print(f"  Candidates: {len(request.candidates)}")

    result = _run(request, granularity, mode, max_steps, time_limit)
    _report(result, verbose)
    _export(result, output, format)


@app.command("schedule-dir")
def schedule_dir(
    config_dir: Annotated[
        Path,
        typer.Argument(help="Directory with organizations.csv and candidates.csv"),
    ],
    start: Annotated[
        str,
        typer.Option("--start", help="Window start (HH:MM or minutes)"),
    ] = "09:00",
    end: Annotated[
        str,
        typer.Option("--end", help="Window end (HH:MM or minutes)"),
    ] = "17:00",
    output: Annotated[
        Optional[Path],
        typer.Option("-o", "--output", help="Output file or directory path"),
    ] = None,
    format: Annotated[
        OutputFormat,
        typer.Option("-f", "--format", help="Output format"),
    ] = OutputFormat.json,
    granularity: Annotated[
        int,
        typer.Option("--granularity", "-g", help="Slot length in minutes"),
    ] = DEFAULT_GRANULARITY,
    mode: Annotated[
        SearchMode,
        typer.Option("--mode", "-m", help="Placement strategy"),
    ] = SearchMode.GREEDY,
    max_steps: Annotated[
        Optional[int],
        typer.Option("--max-steps", help="Per-candidate search budget (greedy mode)"),
    ] = None,
    time_limit: Annotated[
        int,
        typer.Option("--time-limit", help="Solver time limit in seconds (exhaustive mode)"),
    ] = DEFAULT_TIME_LIMIT,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Show detailed output"),
    ] = False,
) -> None:
    """Generate an interview schedule from a directory of CSV files."""
    if not config_dir.is_dir():
        console.print(f"[bold red]Error:[/bold red] Directory not found: {config_dir}")
        raise typer.Exit(1)

    _setup_logging(verbose)

    try:
        window = TimeWindow(parse_time(start), parse_time(end))
        request = ConfigLoader(config_dir).to_request(window)
    except (ValueError, SchedulingError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    if not request.candidates:
        console.print("[bold yellow]Warning:[/bold yellow] No candidates found in directory")
        raise typer.Exit(1)

    console.print(f"\n[bold]Schedule Generation for:[/bold] {config_dir}")
    console.print(f"  Organizations: {len(request.organizations)}")
    console.print(f"  Candidates: {len(request.candidates)}")

    result = _run(request, granularity, mode, max_steps, time_limit)
    _report(result, verbose)
    _export(result, output, format)


@app.command()
def show(
    input_file: Annotated[
        Path,
        typer.Argument(help="Schedule JSON produced by the schedule command"),
    ],
    student: Annotated[
        Optional[str],
        typer.Option("--student", "-s", help="Only show this student"),
    ] = None,
) -> None:
    """Print per-student interview schedules."""
    if not input_file.exists():
        console.print(f"[bold red]Error:[/bold red] File not found: {input_file}")
        raise typer.Exit(1)

    result = load_result(input_file)
    groups = group_by_candidate(result.interviews)

    if student is not None:
        if student not in groups:
            console.print(f"[bold yellow]Warning:[/bold yellow] No interviews for {student}")
            raise typer.Exit(1)
        groups = {student: groups[student]}

    for student_id, interviews in groups.items():
        table = Table(title=f"{student_id} Schedule")
        table.add_column("Company", style="cyan")
        table.add_column("Round", style="green")
        table.add_column("Start", style="blue")
        table.add_column("End", style="blue")
        table.add_column("Panel", style="magenta")

        for interview in interviews:
            table.add_row(
                interview.organization,
                str(interview.round),
                format_time(interview.interval.start),
                format_time(interview.interval.end),
                str(interview.panel + 1),
            )

        console.print(table)

    if student is None and result.conflicts:
        console.print(f"\n[bold yellow]Conflicts ({len(result.conflicts)}):[/bold yellow]")
        for conflict in result.conflicts:
            console.print(f"  [yellow]• {conflict.reason}[/yellow]")


@app.command()
def validate(
    input_file: Annotated[
        Path,
        typer.Argument(help="Request JSON file"),
    ],
    granularity: Annotated[
        int,
        typer.Option("--granularity", "-g", help="Slot length in minutes"),
    ] = DEFAULT_GRANULARITY,
) -> None:
    """Validate a request file without scheduling."""
    if not input_file.exists():
        console.print(f"[bold red]Error:[/bold red] File not found: {input_file}")
        raise typer.Exit(1)

    try:
        request = load_request(input_file)
    except SchedulingError as e:
        console.print(f"[bold red]✗ {e}[/bold red]")
        raise typer.Exit(1)

    errors: list[str] = []
    warnings: list[str] = []

    is_valid, error = validate_time_window(request.window.start, request.window.end, granularity)
    if not is_valid:
        errors.append(error or "Invalid time window")

    names: set[str] = set()
    for organization in request.organizations:
        if organization.name in names:
            errors.append(f"Duplicate organization: {organization.name}")
        names.add(organization.name)
        is_valid, error = validate_organization(
            organization.name,
            organization.duration_per_round,
            organization.num_rounds,
            organization.num_panels,
        )
        if not is_valid:
            errors.append(f"{organization.name}: {error}")

    ids: set[str] = set()
    for candidate in request.candidates:
        if candidate.id in ids:
            errors.append(f"Duplicate student: {candidate.id}")
        ids.add(candidate.id)
        is_valid, error = validate_candidate(candidate.id, list(candidate.shortlist))
        if not is_valid:
            errors.append(f"{candidate.id}: {error}")
        for name in candidate.shortlist:
            if name not in names:
                warnings.append(f"{candidate.id} shortlists unknown organization '{name}'")

    console.print(f"\n[bold]Validation Results for:[/bold] {input_file.name}")

    if errors:
        console.print("[bold red]✗ Request has issues[/bold red]")
    else:
        console.print("[bold green]✓ Request is valid[/bold green]")

    console.print(f"\n  Organizations: {len(request.organizations)}")
    console.print(f"  Students: {len(request.candidates)}")

    if errors:
        console.print(f"\n[bold red]Errors ({len(errors)}):[/bold red]")
        for message in errors:
            console.print(f"  [red]• {message}[/red]")

    if warnings:
        console.print(f"\n[bold yellow]Warnings ({len(warnings)}):[/bold yellow]")
        for message in warnings:
            console.print(f"  [yellow]• {message}[/yellow]")

    if errors:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()

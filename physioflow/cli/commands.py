"""CLI commands for PhysioFlow."""

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from physioflow.client.errors import ApiError
from physioflow.config import get_settings

app = typer.Typer(
    name="physioflow",
    help="PhysioFlow clinic API client: BHYT insurance, outcomes, checklists and offline sync",
    add_completion=False,
)
console = Console()


def get_client():
    """Get an API client configured from settings."""
    from physioflow.resources import PhysioFlowClient

    return PhysioFlowClient()


def _fail(message: str) -> None:
    console.print(f"[red]{message}[/red]")
    raise typer.Exit(1)


def _format_vnd(amount: float) -> str:
    return f"{amount:,.0f} VND"


@app.command()
def version():
    """Show version."""
    from physioflow import __version__

    console.print(f"PhysioFlow v{__version__}")


@app.command("validate-card")
def validate_card(
    card_number: str = typer.Argument(..., help="BHYT card number, e.g. DN4-0101-12345-67890"),
    offline: bool = typer.Option(False, "--offline", help="Only run the local format check"),
    output_json: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Validate a BHYT insurance card number."""
    from physioflow.insurance import validate_card_local

    if offline:
        result = validate_card_local(card_number)
    else:

        async def run():
            async with get_client() as client:
                return await client.insurance.validate(card_number)

        result = asyncio.run(run())

    if output_json:
        console.print_json(data=result.to_view())
        return

    color = "green" if result.valid else "red"
    lines = [
        f"[bold]Card:[/bold] {result.card_number}",
        f"[bold]Valid:[/bold] {result.valid}",
    ]
    if result.prefix_label:
        lines.append(f"[bold]Beneficiary:[/bold] {result.prefix_code} - {result.prefix_label}")
        lines.append(f"[bold]Default coverage:[/bold] {result.default_coverage}%")
    if result.expired:
        lines.append("[bold]Expired:[/bold] yes")
    if result.error_code:
        lines.append(f"[bold]Error:[/bold] {result.error_code}")
    if result.message:
        lines.append(f"[bold]Message:[/bold] {result.message}")
    lines.append(f"[dim]Source: {result.source}[/dim]")

    console.print(Panel("\n".join(lines), title="BHYT Card Validation", border_style=color))
    if not result.valid:
        raise typer.Exit(1)


@app.command()
def coverage(
    amount: float = typer.Argument(..., help="Total amount in VND"),
    prefix: Optional[str] = typer.Option(None, "--prefix", "-p", help="BHYT prefix code, e.g. DN"),
    patient_id: Optional[str] = typer.Option(
        None, "--patient", help="Ask the API for this patient's coverage"
    ),
):
    """Split an amount between insurer and patient.

    With --patient the API answers; if it is unreachable the local formula is used.
    """
    from physioflow.insurance import calculate_coverage_local
    from physioflow.models.insurance import Insurance

    if patient_id:

        async def run():
            async with get_client() as client:
                return await client.insurance.coverage(patient_id, amount)

        result = asyncio.run(run())
    else:
        insurance = None
        if prefix:
            insurance = Insurance(
                id="cli",
                patient_id="",
                card_number="",
                prefix_code=prefix.strip().upper(),
            )
        result = calculate_coverage_local(amount, insurance)

    table = Table(title="Coverage")
    table.add_column("Item")
    table.add_column("Value", justify="right")
    table.add_row("Total", _format_vnd(result.total_amount))
    table.add_row("Coverage", f"{result.coverage_percent:g}%")
    table.add_row("Copay", f"{result.copay_rate:g}%")
    table.add_row("Insurance pays", _format_vnd(result.insurance_pays))
    table.add_row("Patient pays", _format_vnd(result.patient_pays))
    console.print(table)
    console.print(f"[dim]Source: {result.source}[/dim]")


@app.command()
def measures():
    """List the standardized outcome measures."""
    from physioflow.outcomes import MEASURE_LIBRARY

    table = Table(title="Outcome Measures")
    table.add_column("Type")
    table.add_column("Name")
    table.add_column("Range")
    table.add_column("MCID", justify="right")
    table.add_column("Better")

    for m in MEASURE_LIBRARY:
        table.add_row(
            m.type,
            m.name,
            f"{m.min_score:g}-{m.max_score:g} {m.unit}",
            f"{m.mcid:g}",
            "higher" if m.higher_is_better else "lower",
        )

    console.print(table)


@app.command("measure-target")
def measure_target(
    measure_type: str = typer.Argument(..., help="Measure type, e.g. VAS, LEFS"),
    baseline: float = typer.Argument(..., help="Baseline score"),
):
    """Show the goal score one MCID better than baseline."""
    from physioflow.outcomes import calculate_target, get_measure_definition

    definition = get_measure_definition(measure_type)
    if definition is None:
        _fail(f"Unknown measure type: {measure_type}")

    target = calculate_target(baseline, definition)
    direction = "higher" if definition.higher_is_better else "lower"
    console.print(
        f"{definition.type} baseline {baseline:g} -> target {target:g} "
        f"(MCID {definition.mcid:g}, {direction} is better)"
    )


@app.command("checklist-progress")
def checklist_progress(
    checklist_file: Path = typer.Argument(..., help="JSON file with a visit checklist"),
):
    """Show completion progress for a visit checklist."""
    from physioflow.checklist import calculate_progress
    from physioflow.models.checklist import VisitChecklist

    if not checklist_file.exists():
        _fail(f"Checklist file not found: {checklist_file}")

    try:
        checklist = VisitChecklist.model_validate(json.loads(checklist_file.read_text()))
    except (ValueError, ValidationError) as e:
        _fail(f"Invalid checklist file: {e}")

    progress = calculate_progress(checklist)

    table = Table(title=checklist.template.name)
    table.add_column("Section")
    table.add_column("Done", justify="right")
    table.add_column("%", justify="right")
    for section in checklist.template.sections:
        sp = progress.section_progress[section.id]
        table.add_row(section.title, f"{sp.completed}/{sp.total}", f"{sp.percentage:.0f}")
    console.print(table)

    console.print(
        f"Overall: {progress.completed_items}/{progress.total_items} "
        f"({progress.total_progress:.0f}%), required "
        f"{progress.required_completed}/{progress.required_total}"
    )
    if progress.can_complete:
        console.print("[green]Ready to complete[/green]")
    else:
        console.print("[yellow]Required items missing[/yellow]")


@app.command()
def sync(
    database_url: Optional[str] = typer.Option(
        None, "--database", help="Offline queue database URL (default: settings)"
    ),
):
    """Replay mutations queued while offline."""
    from physioflow.offline import OfflineQueue, create_engine, create_session_factory, init_db

    async def run():
        engine = create_engine(database_url)
        try:
            await init_db(engine)
            queue = OfflineQueue(create_session_factory(engine))
            async with get_client() as client:
                return await queue.sync_pending(client.api)
        finally:
            await engine.dispose()

    result = asyncio.run(run())

    color = "green" if result.success else "yellow"
    console.print(f"[{color}]Synced {result.synced}, failed {result.failed}[/{color}]")
    for error in result.errors:
        console.print(f"  [red]{error}[/red]")
    if not result.success:
        raise typer.Exit(1)


@app.command("download-claim")
def download_claim(
    claim_id: str = typer.Argument(..., help="BHYT claim ID"),
    output_dir: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Directory to write the XML to"
    ),
):
    """Download a BHYT claim XML file."""

    async def run():
        async with get_client() as client:
            return await client.claims.download(claim_id, output_dir or get_settings().download_dir)

    try:
        path = asyncio.run(run())
    except ApiError as e:
        _fail(f"Download failed: {e.message}")

    console.print(f"[green]Saved {path}[/green]")

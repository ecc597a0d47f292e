from __future__ import annotations

import typer
from rich.console import Console
from rich.markup import escape

from .logging import setup_logging
from .pin_reset import FixOutcome, FixStatus, MaintenanceRunner
from .settings import load_settings

app = typer.Typer(
    add_completion=False,
    help="boathouse_maint: one-off data fixes for the boathouse database",
    rich_markup_mode="rich",
)
console = Console()


def _first_name(full_name: str) -> str:
    return (full_name.split() or [full_name])[0]


def _print_outcome(outcome: FixOutcome) -> None:
    name = outcome.athlete_name
    if outcome.status is FixStatus.CLEARED:
        console.print(f"[bold green]✅ Successfully cleared PIN reset flag for {name}[/bold green]")
        console.print(f"🔐 {_first_name(name)} can now login with the seeded PIN")
        console.print(f"[dim]rows updated: {outcome.affected}[/dim]")
    elif outcome.status is FixStatus.NOT_FOUND:
        console.print(f"[yellow]⚠️  No rows updated - {name} not found[/yellow]")
    else:
        console.print(f"[bold red]❌ Error:[/bold red] {escape(outcome.detail)}", highlight=False)


@app.command("clear-pin-reset-flag", help="Clear the PIN reset flag for Edwin Escobar")
def clear_pin_reset_flag() -> None:
    settings = load_settings()
    setup_logging(settings)

    outcome = MaintenanceRunner(settings).run()
    _print_outcome(outcome)
    if not outcome.ok:
        raise typer.Exit(code=1)


def main():
    app()

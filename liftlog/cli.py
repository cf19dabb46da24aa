"""Developer CLI for LiftLog.

Runs the API server and exposes a few plan maintenance commands that go
through the same stores as the HTTP layer.
"""

from pathlib import Path

import typer
import uvicorn
from loguru import logger
from rich.console import Console
from rich.table import Table

from liftlog.config.settings import settings
from liftlog.core.logger import setup_logger
from liftlog.db.session import check_connection, init_db
from liftlog.errors import LiftLogError
from liftlog.plans.csv_io import csv_to_plan, plan_to_csv
from liftlog.plans.store import PlanStore

app = typer.Typer(help="LiftLog workout plan tracker")
console = Console()

DEFAULT_HOST = "127.0.0.1"


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")) -> None:
    setup_logger(level="DEBUG" if verbose else settings.log_level, log_file=settings.log_file or None, json_file=settings.log_json)


@app.command()
def server(
    host: str = typer.Option(DEFAULT_HOST, "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to bind to"),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload"),
) -> None:
    """Run the FastAPI server."""
    logger.info(f"Starting FastAPI server on {host}:{port} (reload={reload})")
    uvicorn.run("liftlog.main:app", host=host, port=port, reload=reload)


@app.command("init-db")
def init_db_command() -> None:
    """Create missing tables and check the connection."""
    check_connection()
    init_db()
    console.print("[green]Database ready[/green]")


@app.command("plans")
def list_plans(
    user_id: str = typer.Option(..., "--user-id", "-u", help="Owner of the plans"),
    archived: bool = typer.Option(False, "--archived", help="List archived plans"),
) -> None:
    """List a user's active (or archived) plans."""
    table = Table("id", "name", "predecessor", "created")
    for plan in PlanStore().list(user_id, archived=archived):
        table.add_row(str(plan.id), plan.name, str(plan.predecessor_plan_id or ""), plan.created_at.isoformat())
    console.print(table)


@app.command("export-plan")
def export_plan(
    plan_id: int = typer.Argument(..., help="Plan to export"),
    user_id: str = typer.Option(..., "--user-id", "-u", help="Owner of the plan"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write to this file instead of stdout"),
) -> None:
    """Export a plan as CSV."""
    try:
        plan = PlanStore().get(plan_id, user_id)
    except LiftLogError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1) from e
    text = plan_to_csv(plan.name, plan.data if isinstance(plan.data, dict) else {})
    if output is None:
        typer.echo(text, nl=False)
        return
    output.write_text(text, encoding="utf-8")
    console.print(f"Wrote {output}")


@app.command("import-plan")
def import_plan(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="CSV file to import"),
    user_id: str = typer.Option(..., "--user-id", "-u", help="Owner of the new plan"),
) -> None:
    """Create a new active plan from a CSV file."""
    try:
        name, data = csv_to_plan(path.read_text(encoding="utf-8"), path.name)
        plan = PlanStore().create(user_id, name, data)
    except LiftLogError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1) from e
    console.print(f"[green]Imported plan {plan.id}[/green] ({len(data['weeks'])} weeks)")


@app.command("rollover")
def rollover(
    plan_id: int = typer.Argument(..., help="Plan to roll over"),
    user_id: str = typer.Option(..., "--user-id", "-u", help="Owner of the plan"),
) -> None:
    """Archive a plan and create its next version."""
    try:
        plan = PlanStore().rollover(plan_id, user_id)
    except LiftLogError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1) from e
    console.print(f"[green]Created plan {plan.id}[/green]")


if __name__ == "__main__":
    app()

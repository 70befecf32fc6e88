"""Mangle identity CLI application using Typer.

Command-line utilities for operating the identity service: schema and admin
bootstrap, inspecting the admin reset gate, and running the API server.
"""

import asyncio
from typing import Optional

import typer
import uvicorn
from rich.console import Console

from mangle_config.settings import get_settings
from mangle_identity.application.services import CredentialResetGate
from mangle_identity.infrastructure.persistence.sqlalchemy import (
    ResetStatusRepositorySQLAlchemy,
    bootstrap_admin,
    create_tables,
)
from mangle_identity.presentation.api.dependencies import (
    create_engine,
    create_session_maker,
)

app = typer.Typer(
    name="mangle-identity",
    help="Mangle user management and admin password reset CLI",
    no_args_is_help=True,
)
console = Console()


async def _init_db() -> int:
    settings = get_settings()
    engine = create_engine(settings)
    session_maker = create_session_maker(engine)
    gate = CredentialResetGate(ResetStatusRepositorySQLAlchemy(session_maker))
    try:
        await create_tables(engine)
        outcome = await bootstrap_admin(session_maker, gate, settings)
    finally:
        await engine.dispose()

    if not outcome.is_ok:
        console.print(f"[red]Bootstrap failed:[/red] {outcome.failure.message}")
        return 1

    console.print(
        f"[green]Database ready.[/green] Built-in admin: "
        f"[bold]{outcome.value.fully_qualified_name}[/bold]",
    )
    return 0


async def _reset_status() -> int:
    settings = get_settings()
    engine = create_engine(settings)
    gate = CredentialResetGate(
        ResetStatusRepositorySQLAlchemy(create_session_maker(engine)),
    )
    try:
        outcome = await gate.read_reset_status()
    finally:
        await engine.dispose()

    if not outcome.is_ok:
        console.print(f"[red]Could not read reset status:[/red] {outcome.failure.message}")
        return 1

    if outcome.value:
        console.print("[yellow]Admin password reset pending[/yellow]")
    else:
        console.print("[green]Admin password has been reset[/green]")
    return 0


@app.command("init-db")
def init_db() -> None:
    """Create missing tables and seed the built-in admin account."""
    raise typer.Exit(code=asyncio.run(_init_db()))


@app.command("reset-status")
def reset_status() -> None:
    """Show whether the built-in admin still has to reset its password."""
    raise typer.Exit(code=asyncio.run(_reset_status()))


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (default: API_HOST)"),
    port: Optional[int] = typer.Option(None, help="Port (default: API_PORT)"),
) -> None:
    """Run the user management API with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "mangle_identity.presentation.api.app:create_app",
        factory=True,
        host=host or settings.api_host,
        port=port or settings.api_port,
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()

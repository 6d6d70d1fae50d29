"""CLI principal (Typer).

Comandos:
- `lookup <CNIC>`: resuelve registros SIM contra los proveedores.
- `providers`: lista el registro en orden de prioridad.
- `doctor ...`: diagnóstico y configuración.
"""

from __future__ import annotations

import asyncio
import json
from typing import List, Optional

import typer
from rich.console import Console

from adapters.sim_sources import DEFAULT_PROVIDERS, select_providers
from cli import doctor
from cli.ui_components import build_providers_table, print_banner, render_outcome
from core.config import AppSettings
from core.domain.errors import ValidationError
from core.log_config import configure_logging
from core.services.envelope import build_envelope, validation_envelope
from core.services.resolution_pipeline import PipelineHooks, resolve

EXIT_INVALID_IDENTIFIER = 2
EXIT_UNRESOLVED = 3

app = typer.Typer(no_args_is_help=True, help="Resolve SIM-registration records for a CNIC.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def _echo_json(payload: dict) -> None:
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))


@app.command()
def lookup(
    cnic: str = typer.Argument(..., help="13-digit CNIC, without dashes."),
    as_json: bool = typer.Option(False, "--json", help="Print the JSON envelope instead of tables."),
    provider: Optional[List[str]] = typer.Option(
        None,
        "--provider",
        "-p",
        help="Restrict to these providers (repeatable). Priority order is kept.",
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ERROR."),
    no_banner: bool = typer.Option(False, "--no-banner", help="Do not print the banner."),
) -> None:
    """Look up the SIMs registered against a CNIC."""

    settings = AppSettings()
    configure_logging(log_level or settings.log_level)

    try:
        providers = select_providers(provider or settings.enabled_providers)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--provider") from exc

    if not as_json and not no_banner:
        print_banner(_console)

    try:
        if as_json:
            outcome = asyncio.run(resolve(cnic, settings=settings, providers=providers))
        else:
            with _console.status("Resolving...") as status:
                hooks = PipelineHooks(provider_start=lambda spec: status.update(f"Querying {spec.label}..."))
                outcome = asyncio.run(resolve(cnic, settings=settings, providers=providers, hooks=hooks))
    except ValidationError as exc:
        if as_json:
            _echo_json(validation_envelope(exc.message)[1])
        else:
            _console.print(f"[red]{exc.message}[/red]")
        raise typer.Exit(code=EXIT_INVALID_IDENTIFIER) from exc

    status_code, payload = build_envelope(cnic, outcome)
    if as_json:
        _echo_json(payload)
    else:
        render_outcome(_console, cnic, outcome)

    if status_code != 200:
        raise typer.Exit(code=EXIT_UNRESOLVED)


@app.command()
def providers() -> None:
    """List the providers in priority order."""

    _console.print(build_providers_table(DEFAULT_PROVIDERS))


def run() -> None:
    app()


if __name__ == "__main__":
    run()

"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
from typing import Optional
from urllib.parse import urlsplit

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from adapters.sim_sources import DEFAULT_PROVIDERS
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.domain.models import ProviderSpec

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _origin(spec: ProviderSpec) -> str:
    parts = urlsplit(spec.endpoint)
    return f"{parts.scheme}://{parts.netloc}/"


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc) or type(exc).__name__


async def _check_providers(settings: AppSettings) -> list[tuple[ProviderSpec, bool, str]]:
    # Solo la home de cada proveedor: el doctor nunca lanza una consulta real.
    results = await asyncio.gather(*(_check_http(_origin(spec), settings) for spec in DEFAULT_PROVIDERS))
    return [(spec, ok, detail) for spec, (ok, detail) in zip(DEFAULT_PROVIDERS, results)]


@app.command()
def run() -> None:
    """Run baseline diagnostics (config + provider reachability)."""

    settings = AppSettings()

    table = Table(title="SIM-RESOLVER Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s per provider call")
    table.add_row("User-Agent", "OK", settings.user_agent)
    enabled = ", ".join(settings.enabled_providers) if settings.enabled_providers else "all"
    table.add_row("Enabled providers", "OK", enabled)
    table.add_row("User config", "OK" if get_user_env_file().exists() else "OPTIONAL", str(get_user_env_file()))

    for spec, ok, detail in asyncio.run(_check_providers(settings)):
        table.add_row(f"Provider {spec.name}", "OK" if ok else "FAIL", detail)

    _console.print(table)


@app.command()
def configure(
    timeout: Optional[float] = typer.Option(None, "--timeout", min=0.1, help="Per-provider timeout (seconds)."),
    user_agent: Optional[str] = typer.Option(None, "--user-agent", help="Descriptive User-Agent."),
    providers: Optional[str] = typer.Option(None, "--providers", help="Comma-separated provider names."),
) -> None:
    """Store overrides in the user config .env (no manual editing needed)."""

    if timeout is None and user_agent is None and providers is None:
        timeout = typer.prompt("Timeout (seconds)", default=AppSettings().http_timeout_seconds, type=float)

    if providers is not None:
        known = {spec.name for spec in DEFAULT_PROVIDERS}
        names = [p.strip().lower() for p in providers.split(",") if p.strip()]
        unknown = sorted(set(names) - known)
        if unknown:
            raise typer.BadParameter(f"unknown provider(s): {', '.join(unknown)}", param_hint="--providers")
        providers = ",".join(names)

    env_path = write_user_env_vars(
        {
            "SIM_RESOLVER_HTTP_TIMEOUT_SECONDS": f"{timeout:g}" if timeout is not None else None,
            "SIM_RESOLVER_USER_AGENT": user_agent.strip() if user_agent else None,
            "SIM_RESOLVER_ENABLED_PROVIDERS": providers,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")

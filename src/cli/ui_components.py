"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import (
    AllProvidersFailed,
    Blocked,
    Empty,
    Found,
    Outcome,
    ProviderAttempt,
    ProviderSpec,
    SimRecord,
)
from core.services.envelope import OFFICIAL_LINKS, manual_check_instruction

_ATTEMPT_STYLES = {
    "found": "green",
    "empty": "yellow",
    "blocked": "magenta",
    "transport_error": "red",
    "error": "red",
}


def print_banner(console: Console) -> None:
    title = Text("SIM-RESOLVER", style="bold cyan")
    subtitle = Text("CNIC → registros SIM • múltiples fuentes", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_owner_panel(record: SimRecord, identifier: str) -> Panel:
    owner = record.owner_info
    body = Text()
    body.append("CNIC: ", style="bold")
    body.append(f"{identifier}\n")
    body.append("Name: ", style="bold")
    body.append(f"{owner.name}\n")
    body.append("Father name: ", style="bold")
    body.append(f"{owner.father_name}\n")
    body.append("Address: ", style="bold")
    body.append(owner.address)
    return Panel(body, title=Text("Owner", style="bold yellow"), border_style="yellow")


def build_networks_table(record: SimRecord) -> Table:
    """Uso por operador + fila de totales calculada para presentación."""

    table = Table(title=f"SIMs by network ({record.total_numbers} total)")
    table.add_column("Network", style="cyan", no_wrap=True)
    table.add_column("Voice + data", justify="right")
    table.add_column("Data only", justify="right")
    table.add_column("Total", justify="right", style="bold")
    for usage in record.networks:
        table.add_row(usage.network, str(usage.voice_data), str(usage.data_only), str(usage.total))
    summary = record.summary()
    table.add_section()
    table.add_row(
        "Total",
        str(summary["totalVoiceData"]),
        str(summary["totalDataOnly"]),
        str(summary["overallTotal"]),
        style="dim",
    )
    return table


def build_numbers_table(record: SimRecord) -> Table:
    table = Table(title="Numbers")
    table.add_column("Number", style="white", no_wrap=True)
    table.add_column("Network", style="cyan")
    table.add_column("Status", style="green")
    for number in record.numbers_list:
        table.add_row(number.number, number.network, number.status)
    return table


def build_attempts_table(attempts: Iterable[ProviderAttempt]) -> Table:
    table = Table(title="Provider attempts")
    table.add_column("Provider", style="cyan", no_wrap=True)
    table.add_column("Result")
    table.add_column("Details", style="dim")
    for attempt in attempts:
        style = _ATTEMPT_STYLES.get(attempt.status.value, "white")
        table.add_row(attempt.provider, Text(attempt.status.value, style=style), attempt.detail or "")
    return table


def build_providers_table(providers: Iterable[ProviderSpec]) -> Table:
    table = Table(title="Providers (priority order)")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Label")
    table.add_column("Method")
    table.add_column("Format")
    table.add_column("Endpoint", style="magenta")
    for index, spec in enumerate(providers, start=1):
        table.add_row(str(index), spec.name, spec.label, spec.method, spec.response_format, spec.endpoint)
    return table


def build_manual_check_panel(identifier: str, message: str, *, style: str = "red") -> Panel:
    body = Text(message + "\n\n")
    body.append("Manual check: ", style="bold")
    body.append(manual_check_instruction(identifier) + "\n")
    for link in OFFICIAL_LINKS:
        body.append(f"- {link}\n", style="dim")
    return Panel(body, border_style=style)


def render_outcome(console: Console, identifier: str, outcome: Outcome) -> None:
    """Pinta el resultado de `resolve` en la consola."""

    if isinstance(outcome, Found):
        console.print(build_owner_panel(outcome.record, identifier))
        console.print(build_networks_table(outcome.record))
        if outcome.record.numbers_list:
            console.print(build_numbers_table(outcome.record))
        console.print(f"[dim]Source: {outcome.provider}[/dim]")
        return

    console.print(build_attempts_table(outcome.attempts))
    if isinstance(outcome, Empty):
        console.print(
            build_manual_check_panel(
                identifier,
                "No SIMs found or unable to fetch data due to security restrictions.",
                style="yellow",
            )
        )
    elif isinstance(outcome, Blocked):
        console.print(
            build_manual_check_panel(
                identifier,
                f"Provider '{outcome.provider}' answered with an anti-automation challenge ({outcome.reason}).",
            )
        )
    elif isinstance(outcome, AllProvidersFailed):
        console.print(build_manual_check_panel(identifier, "All providers failed. Service temporarily unavailable."))

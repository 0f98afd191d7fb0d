"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en `validate` y `doctor`.
"""

from __future__ import annotations

from typing import Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import FindingKind, Infrastructure, ValidationFinding

_KIND_STYLES = {
    FindingKind.NOT_FOUND: "bold red",
    FindingKind.INVALID: "yellow",
    FindingKind.INTERNAL: "magenta",
}


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (se omite con `--no-banner`)."""

    title = Text("infra-preflight", style="bold cyan")
    subtitle = Text("VPC • DNS • Internet gateway", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_findings_table(findings: Sequence[ValidationFinding]) -> Table:
    table = Table(title="Validation findings")
    table.add_column("#", style="dim", no_wrap=True)
    table.add_column("Kind", no_wrap=True)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="white")
    table.add_column("Detail", style="dim")
    for index, finding in enumerate(findings, start=1):
        table.add_row(
            str(index),
            Text(finding.kind.value, style=_KIND_STYLES[finding.kind]),
            finding.field or "-",
            "" if finding.value is None else str(finding.value),
            finding.detail,
        )
    return table


def build_summary_panel(infra: Infrastructure, findings: Sequence[ValidationFinding]) -> Panel:
    """Panel final: válido o número de findings por tipo."""

    if not findings:
        body = Text(f"{infra.key()} ({infra.spec.region}): configuration is valid", style="green")
        return Panel(body, border_style="green")

    counts: dict[FindingKind, int] = {}
    for finding in findings:
        counts[finding.kind] = counts.get(finding.kind, 0) + 1
    body = Text(f"{infra.key()} ({infra.spec.region}): {len(findings)} finding(s)\n", style="bold")
    for kind, count in counts.items():
        body.append(f"- {kind.value}: {count}\n", style=_KIND_STYLES[kind])
    if FindingKind.INTERNAL in counts:
        body.append("\nInternal findings are usually transient; retry later.", style="dim")
    return Panel(body, border_style="red")

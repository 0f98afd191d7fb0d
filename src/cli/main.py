"""CLI principal (Typer).

Por qué aquí:
- La CLI solo cablea colaboradores (settings, secretos, cliente EC2) y
  presenta el reporte; la lógica de validación vive en `core.services`.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console

from adapters.aws import EC2ClientFactory
from adapters.json_exporter import export_report_json
from adapters.secret_store import FileSecretStore
from cli.doctor import app as doctor_app
from cli.logging_setup import configure_logging
from cli.ui_components import build_findings_table, build_summary_panel, print_banner
from core.config import AppSettings
from core.domain.models import Infrastructure, ValidationFinding
from core.services.config_validator import ConfigValidator

app = typer.Typer(no_args_is_help=True, help="Preflight checks for AWS infrastructure resources.")
app.add_typer(doctor_app, name="doctor")

_console = Console()
_log_console = Console(stderr=True)


def load_infrastructure(path: Path) -> Infrastructure:
    """Lee un recurso Infrastructure (JSON) desde disco."""

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise typer.BadParameter(f"could not read {path}: {exc}") from exc
    try:
        return Infrastructure.model_validate(data)
    except ValidationError as exc:
        raise typer.BadParameter(f"{path} is not a valid infrastructure resource:\n{exc}") from exc


async def _run_validation(
    validator: ConfigValidator,
    infra: Infrastructure,
    timeout_seconds: float,
) -> list[ValidationFinding]:
    return await asyncio.wait_for(validator.validate(infra), timeout=timeout_seconds)


@app.command()
def validate(
    infra_file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Infrastructure resource (JSON)."),
    secrets_dir: Path | None = typer.Option(None, "--secrets-dir", help="Directory with Secret manifests."),
    json_output: Path | None = typer.Option(None, "--json-output", help="Write the report as JSON."),
    no_banner: bool = typer.Option(False, "--no-banner", help="Skip the banner."),
) -> None:
    """Validate the declared network of an infrastructure resource against AWS."""

    settings = AppSettings()
    configure_logging(settings.log_level, console=_log_console)
    if not no_banner:
        print_banner(_console)

    infra = load_infrastructure(infra_file)
    validator = ConfigValidator(
        client_factory=EC2ClientFactory(settings),
        credential_resolver=FileSecretStore(secrets_dir, settings=settings),
    )

    try:
        findings = asyncio.run(_run_validation(validator, infra, settings.validation_timeout_seconds))
    except asyncio.TimeoutError:
        _console.print(
            f"[red]Validation timed out after {settings.validation_timeout_seconds:.0f}s[/red]"
        )
        raise typer.Exit(code=2)

    if findings:
        _console.print(build_findings_table(findings))
    _console.print(build_summary_panel(infra, findings))

    if json_output is not None:
        path = export_report_json(infra=infra, findings=findings, output_path=json_output)
        _console.print(f"[green]Report saved to:[/green] {path}")

    if findings:
        raise typer.Exit(code=1)


def run() -> None:
    app()

"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.aws.ec2_client import default_endpoint
from adapters.http_client import build_async_client
from core.config import AppSettings

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_endpoint(url: str, settings: AppSettings) -> tuple[bool, str]:
    # Sin firma EC2 responde con error de auth: basta con que responda.
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc) or exc.__class__.__name__


@app.command()
def run(
    region: str | None = typer.Option(None, "--region", help="Region whose EC2 endpoint is probed."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()
    region = region or settings.default_region
    endpoint = settings.ec2_endpoint_url or default_endpoint(region)

    table = Table(title="infra-preflight Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Region", "OK", region)
    table.add_row("HTTP timeout", "OK", f"{settings.http_timeout_seconds:.1f}s")
    table.add_row("Validation timeout", "OK", f"{settings.validation_timeout_seconds:.1f}s")

    secrets_ok = settings.secrets_dir.is_dir()
    table.add_row(
        "Secrets dir",
        "OK" if secrets_ok else "MISSING",
        str(settings.secrets_dir),
    )

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_endpoint(endpoint, settings))
    table.add_row("EC2 endpoint", "OK" if ok_http else "FAIL", f"{endpoint} -> {detail_http}")

    _console.print(table)

    if not secrets_ok:
        _console.print(
            "\n[yellow]Note:[/yellow] create the secrets directory or pass `--secrets-dir` to `validate`."
        )
    if not ok_http:
        raise typer.Exit(code=1)

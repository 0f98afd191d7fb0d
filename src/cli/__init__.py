"""CLI de infra-preflight (Typer + Rich)."""

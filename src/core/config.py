"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (AWS/secretos) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "infra-preflight"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "infra-preflight"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "infra-preflight"
    return Path.home() / ".config" / "infra-preflight"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="INFRA_PREFLIGHT_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request a la API de EC2 (segundos).",
    )
    validation_timeout_seconds: float = Field(
        default=120.0,
        gt=0,
        description="Timeout total de una validación lanzada desde la CLI (segundos).",
    )
    user_agent: str = Field(
        default="infra-preflight/0.1",
        min_length=1,
        description="User-Agent para las llamadas a la API de AWS.",
    )

    default_region: str = Field(
        default="eu-west-1",
        min_length=1,
        description="Región usada por `doctor` cuando no se indica otra.",
    )
    ec2_endpoint_url: str | None = Field(
        default=None,
        description="Endpoint EC2 alternativo (p.ej. LocalStack). Por defecto se deriva de la región.",
    )

    secrets_dir: Path = Field(
        default_factory=lambda: get_user_config_dir() / "secrets",
        description="Directorio con manifiestos Secret (<namespace>/<name>.json).",
    )

    log_level: str = Field(
        default="INFO",
        description="Nivel de logging para la CLI.",
    )

"""Exportación JSON del reporte de validación.

Por qué JSON:
- El controlador (o un pipeline CI) puede consumir el reporte sin parsear la
  salida de la CLI.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence

from core.domain.models import Infrastructure, ValidationFinding


def export_report_json(
    *,
    infra: Infrastructure,
    findings: Sequence[ValidationFinding],
    output_path: Path,
) -> Path:
    """Exporta el reporte a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "infrastructure": infra.key(),
        "valid": not findings,
        "findings": [finding.model_dump(mode="json") for finding in findings],
    }
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path

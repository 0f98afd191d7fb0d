"""Credenciales AWS desde manifiestos Secret en disco.

Formato esperado (`<secrets_dir>/<namespace>/<name>.json`), un Secret de
Kubernetes serializado:

    {"kind": "Secret", "metadata": {...},
     "data": {"accessKeyID": "<base64>", "secretAccessKey": "<base64>"}}

`stringData` (valores en claro) también se acepta y tiene prioridad, igual que
en la API de Kubernetes.
"""

from __future__ import annotations

import base64
import binascii
import json
from pathlib import Path

from pydantic import SecretStr

from core.config import AppSettings
from core.domain.models import Credentials, SecretReference
from core.errors import CredentialsError

ACCESS_KEY_ID = "accessKeyID"
SECRET_ACCESS_KEY = "secretAccessKey"


def _read_secret_data(path: Path) -> dict[str, str]:
    try:
        manifest = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise CredentialsError(f"secret file {path} does not exist") from exc
    except (OSError, ValueError) as exc:
        raise CredentialsError(f"could not read secret file {path}: {exc}") from exc
    if not isinstance(manifest, dict):
        raise CredentialsError(f"secret file {path} does not contain a JSON object")

    data: dict[str, str] = {}
    for key, encoded in (manifest.get("data") or {}).items():
        try:
            data[key] = base64.b64decode(str(encoded), validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as exc:
            raise CredentialsError(f"could not decode field {key!r} of secret {path}: {exc}") from exc
    for key, value in (manifest.get("stringData") or {}).items():
        data[key] = str(value)
    return data


def _required(data: dict[str, str], key: str, ref: SecretReference) -> str:
    value = data.get(key)
    if value is None:
        raise CredentialsError(f"missing {key!r} field in secret {ref.namespace}/{ref.name}")
    if not value.strip():
        raise CredentialsError(f"field {key!r} in secret {ref.namespace}/{ref.name} is empty")
    return value.strip()


class FileSecretStore:
    """Implementa `CredentialResolver` leyendo `secrets_dir`."""

    def __init__(self, secrets_dir: Path | None = None, *, settings: AppSettings | None = None) -> None:
        if secrets_dir is None:
            secrets_dir = (settings or AppSettings()).secrets_dir
        self._secrets_dir = secrets_dir

    def path_for(self, ref: SecretReference) -> Path:
        return self._secrets_dir / ref.namespace / f"{ref.name}.json"

    async def get_credentials(self, secret_ref: SecretReference) -> Credentials:
        data = _read_secret_data(self.path_for(secret_ref))
        return Credentials(
            access_key_id=_required(data, ACCESS_KEY_ID, secret_ref),
            secret_access_key=SecretStr(_required(data, SECRET_ACCESS_KEY, secret_ref)),
        )

"""Contratos de los colaboradores cloud.

Por qué Protocol:
- El validador solo depende de las capacidades que usa (leer atributos de VPC,
  leer el internet gateway, clasificar un error como "no encontrado").
- Permite sustituir el cliente EC2 real por fakes en tests sin herencia.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import Credentials, SecretReference
from core.domain.network import NetworkAttribute


@runtime_checkable
class NetworkClient(Protocol):
    """Lecturas de estado de red que necesita la validación.

    Reglas de diseño:
    - Métodos asíncronos: cada llamada es I/O y debe poder cancelarse.
    - Los errores se lanzan tal cual; el validador decide cómo reportarlos.
    """

    async def get_vpc_attribute(self, vpc_id: str, attribute: NetworkAttribute) -> bool:
        """Valor actual del atributo booleano `attribute` de la VPC."""

        ...

    async def get_vpc_internet_gateway(self, vpc_id: str) -> str:
        """ID del internet gateway adjunto a la VPC, `""` si no hay ninguno."""

        ...

    def is_not_found_error(self, error: BaseException) -> bool:
        """True si `error` indica que el recurso consultado no existe."""

        ...


@runtime_checkable
class NetworkClientFactory(Protocol):
    def new_client(self, access_key_id: str, secret_access_key: str, region: str) -> NetworkClient:
        ...


@runtime_checkable
class CredentialResolver(Protocol):
    async def get_credentials(self, secret_ref: SecretReference) -> Credentials:
        ...

"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- El recurso Infrastructure llega como JSON camelCase (estilo Kubernetes); los
  alias permiten leerlo tal cual y exponer nombres pythonic.

Nota:
- Estos modelos describen *qué* se declara y *qué* se reporta, no *cómo* se
  consulta AWS.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, SecretStr
from pydantic.config import ConfigDict


class _CamelModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class VPC(_CamelModel):
    id: str | None = Field(
        default=None,
        description="ID de una VPC existente. Ausente = la VPC se crea con la infraestructura.",
    )
    cidr: str | None = Field(
        default=None,
        description="CIDR de la VPC a crear (solo si no se declara `id`).",
    )
    gateway_endpoints: list[str] = Field(
        default_factory=list,
        alias="gatewayEndpoints",
        description="Servicios AWS con gateway endpoint en la VPC.",
    )


class Zone(_CamelModel):
    name: str = Field(..., min_length=1)
    internal: str | None = None
    public: str | None = None
    workers: str | None = None


class Networks(_CamelModel):
    vpc: VPC = Field(default_factory=VPC)
    zones: list[Zone] = Field(default_factory=list)


class InfrastructureConfig(_CamelModel):
    """Configuración de red declarada para la infraestructura AWS."""

    api_version: str | None = Field(default=None, alias="apiVersion")
    kind: str | None = None
    networks: Networks = Field(default_factory=Networks)


class ObjectMeta(_CamelModel):
    name: str = Field(..., min_length=1)
    namespace: str = Field(default="default", min_length=1)


class SecretReference(_CamelModel):
    name: str = Field(..., min_length=1)
    namespace: str = Field(..., min_length=1)


class InfrastructureSpec(_CamelModel):
    type: str = Field(default="aws")
    region: str = Field(..., min_length=1)
    secret_ref: SecretReference = Field(..., alias="secretRef")
    provider_config: dict[str, Any] | None = Field(
        default=None,
        alias="providerConfig",
        description="Documento del proveedor embebido (se decodifica a `InfrastructureConfig`).",
    )


class Infrastructure(_CamelModel):
    """Recurso Infrastructure genérico tal como lo ve el controlador."""

    metadata: ObjectMeta
    spec: InfrastructureSpec

    def key(self) -> str:
        """Clave `namespace/name` para logs y reportes."""

        return f"{self.metadata.namespace}/{self.metadata.name}"


class Credentials(BaseModel):
    access_key_id: str = Field(..., min_length=1)
    secret_access_key: SecretStr


class FindingKind(str, Enum):
    NOT_FOUND = "NotFound"
    INVALID = "Invalid"
    INTERNAL = "Internal"

    def label(self) -> str:
        return {
            FindingKind.NOT_FOUND: "Not found",
            FindingKind.INVALID: "Invalid value",
            FindingKind.INTERNAL: "Internal error",
        }[self]


class ValidationFinding(BaseModel):
    """Un problema detectado al validar la configuración declarada.

    Por qué inmutable:
    - El reporte es un valor: el controlador solo lo lee para decidir si admite,
      rechaza o reintenta la transición.
    """

    model_config = ConfigDict(frozen=True)

    kind: FindingKind
    field: str | None = Field(
        default=None,
        description="Ruta con puntos del campo afectado (p.ej. `networks.vpc.id`).",
    )
    value: Any = Field(
        default=None,
        description="Valor ofensivo (vacío en errores internos).",
    )
    detail: str = Field(default="", description="Explicación legible.")

    @classmethod
    def not_found(cls, field: str, value: Any) -> "ValidationFinding":
        return cls(kind=FindingKind.NOT_FOUND, field=field, value=value)

    @classmethod
    def invalid(cls, field: str, value: Any, detail: str) -> "ValidationFinding":
        return cls(kind=FindingKind.INVALID, field=field, value=value, detail=detail)

    @classmethod
    def internal(cls, field: str | None, error: BaseException | str) -> "ValidationFinding":
        return cls(kind=FindingKind.INTERNAL, field=field, detail=str(error))

    def __str__(self) -> str:
        prefix = f"{self.field}: " if self.field else ""
        if self.kind is FindingKind.INVALID:
            message = f"{self.kind.label()}: {self.value!r}"
            if self.detail:
                message += f": {self.detail}"
        elif self.kind is FindingKind.NOT_FOUND:
            message = f"{self.kind.label()}: {self.value!r}"
        else:
            message = f"{self.kind.label()}: {self.detail}"
        return prefix + message


def field_path(*parts: str) -> str:
    """Construye una ruta de campo con puntos (`networks.vpc.id`)."""

    return ".".join(p for p in parts if p)

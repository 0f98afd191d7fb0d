"""Extracción del providerConfig tipado desde un recurso Infrastructure."""

from __future__ import annotations

from pydantic import ValidationError

from core.domain.models import Infrastructure, InfrastructureConfig
from core.errors import ConfigExtractionError


def infrastructure_config_from_infrastructure(infra: Infrastructure) -> InfrastructureConfig:
    """Decodifica `spec.providerConfig` a `InfrastructureConfig`.

    Lanza `ConfigExtractionError` si el recurso no trae providerConfig o si el
    documento no tiene la forma esperada.
    """

    raw = infra.spec.provider_config
    if raw is None:
        raise ConfigExtractionError(
            f"provider config is not set on the infrastructure resource {infra.key()}"
        )
    try:
        return InfrastructureConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigExtractionError(
            f"could not decode provider config of infrastructure {infra.key()}: {exc}"
        ) from exc

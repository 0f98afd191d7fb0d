"""Validación de la configuración declarada contra el estado real en AWS.

This is the check that runs before an infrastructure resource is reconciled:
the declared network (an existing VPC) must exist, have DNS support and DNS
hostnames enabled, and have an internet gateway attached.

Every problem is reported as a `ValidationFinding`; nothing is raised to the
caller. A fetch failure stops the checks for that VPC, since the remaining
ones would be meaningless or fail the same way. Task cancellation is not a
validation failure and propagates.
"""

from __future__ import annotations

import logging

from core.domain.models import (
    Infrastructure,
    InfrastructureConfig,
    ValidationFinding,
    field_path,
)
from core.domain.network import NetworkAttribute
from core.interfaces.cloud import CredentialResolver, NetworkClient, NetworkClientFactory
from core.services.infrastructure_config import infrastructure_config_from_infrastructure

VPC_ID_PATH = field_path("networks", "vpc", "id")

_LOGGER_NAME = "infra_preflight.config_validator"


class ConfigValidator:
    """Valida el providerConfig de recursos Infrastructure AWS.

    Todos los colaboradores se inyectan en el constructor; la instancia no
    guarda estado entre llamadas, así que puede compartirse entre tareas.
    """

    def __init__(
        self,
        *,
        client_factory: NetworkClientFactory,
        credential_resolver: CredentialResolver,
        logger: logging.Logger | None = None,
    ) -> None:
        self._client_factory = client_factory
        self._credential_resolver = credential_resolver
        self._logger = logger or logging.getLogger(_LOGGER_NAME)

    async def validate(self, infra: Infrastructure) -> list[ValidationFinding]:
        """Valida el recurso completo: config, credenciales, cliente y red."""

        try:
            config = infrastructure_config_from_infrastructure(infra)
        except Exception as exc:
            return [ValidationFinding.internal(None, exc)]

        try:
            credentials = await self._credential_resolver.get_credentials(infra.spec.secret_ref)
        except Exception as exc:
            return [ValidationFinding.internal(None, f"could not get AWS credentials: {exc}")]

        try:
            client = self._client_factory.new_client(
                credentials.access_key_id,
                credentials.secret_access_key.get_secret_value(),
                infra.spec.region,
            )
        except Exception as exc:
            return [ValidationFinding.internal(None, f"could not create AWS client: {exc}")]

        if config.networks.vpc.id is not None:
            self._logger.info("Validating infrastructure %s (infrastructure=%s)", VPC_ID_PATH, infra.key())
        return await self.validate_config(config, client)

    async def validate_config(
        self,
        config: InfrastructureConfig,
        client: NetworkClient,
    ) -> list[ValidationFinding]:
        """Valida una config ya extraída con un cliente ya autenticado."""

        findings: list[ValidationFinding] = []
        vpc_id = config.networks.vpc.id
        if vpc_id is not None:
            findings.extend(await self._validate_vpc(client, vpc_id, VPC_ID_PATH))
        return findings

    async def _validate_vpc(
        self,
        client: NetworkClient,
        vpc_id: str,
        path: str,
    ) -> list[ValidationFinding]:
        findings: list[ValidationFinding] = []

        # Existe la VPC y ambos atributos DNS están a true.
        for attribute in NetworkAttribute.required():
            self._logger.debug("Checking %s of VPC %s", attribute.label(), vpc_id)
            try:
                enabled = await client.get_vpc_attribute(vpc_id, attribute)
            except Exception as exc:
                if client.is_not_found_error(exc):
                    findings.append(ValidationFinding.not_found(path, vpc_id))
                else:
                    findings.append(
                        ValidationFinding.internal(
                            path,
                            f"could not get VPC attribute {attribute.value} for VPC {vpc_id}: {exc}",
                        )
                    )
                self._logger.debug("Stopping checks for VPC %s after attribute fetch failure", vpc_id)
                return findings
            if not enabled:
                findings.append(
                    ValidationFinding.invalid(
                        path, vpc_id, f"VPC attribute {attribute.value} must be set to true"
                    )
                )

        # Hay un internet gateway adjunto.
        try:
            gateway_id = await client.get_vpc_internet_gateway(vpc_id)
        except Exception as exc:
            findings.append(
                ValidationFinding.internal(path, f"could not get internet gateway for VPC {vpc_id}: {exc}")
            )
            return findings
        if not gateway_id:
            findings.append(ValidationFinding.invalid(path, vpc_id, "no attached internet gateway found"))

        return findings

"""Fixtures compartidas y fakes de los colaboradores del validador."""

from __future__ import annotations

import base64
import json
from pathlib import Path
from typing import Any

import pytest
from pydantic import SecretStr

from core.domain.models import Credentials, Infrastructure, SecretReference
from core.domain.network import NetworkAttribute
from core.errors import CredentialsError

NAME = "infrastructure"
NAMESPACE = "shoot--foobar--aws"
REGION = "eu-west-1"
VPC_ID = "vpc-123456"
ACCESS_KEY_ID = "accessKeyID"
SECRET_ACCESS_KEY = "secretAccessKey"


class FakeNotFoundError(Exception):
    pass


class FakeNetworkClient:
    """Cliente con respuestas guionizadas; registra cada llamada."""

    def __init__(
        self,
        *,
        attributes: dict[NetworkAttribute, bool | Exception] | None = None,
        gateway: str | Exception = "igw-123456",
    ) -> None:
        self.attributes = attributes or {attr: True for attr in NetworkAttribute}
        self.gateway = gateway
        self.calls: list[tuple[str, ...]] = []

    async def get_vpc_attribute(self, vpc_id: str, attribute: NetworkAttribute) -> bool:
        self.calls.append(("get_vpc_attribute", vpc_id, attribute.value))
        result = self.attributes[attribute]
        if isinstance(result, Exception):
            raise result
        return result

    async def get_vpc_internet_gateway(self, vpc_id: str) -> str:
        self.calls.append(("get_vpc_internet_gateway", vpc_id))
        if isinstance(self.gateway, Exception):
            raise self.gateway
        return self.gateway

    def is_not_found_error(self, error: BaseException) -> bool:
        return isinstance(error, FakeNotFoundError)


class FakeClientFactory:
    def __init__(self, client: FakeNetworkClient | None = None, error: Exception | None = None) -> None:
        self.client = client or FakeNetworkClient()
        self.error = error
        self.calls: list[tuple[str, str, str]] = []

    def new_client(self, access_key_id: str, secret_access_key: str, region: str) -> FakeNetworkClient:
        self.calls.append((access_key_id, secret_access_key, region))
        if self.error is not None:
            raise self.error
        return self.client


class FakeCredentialResolver:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.refs: list[SecretReference] = []

    async def get_credentials(self, secret_ref: SecretReference) -> Credentials:
        self.refs.append(secret_ref)
        if self.error is not None:
            raise self.error
        return Credentials(
            access_key_id=ACCESS_KEY_ID,
            secret_access_key=SecretStr(SECRET_ACCESS_KEY),
        )


def make_infrastructure(provider_config: dict[str, Any] | None = None) -> Infrastructure:
    return Infrastructure.model_validate(
        {
            "metadata": {"name": NAME, "namespace": NAMESPACE},
            "spec": {
                "type": "aws",
                "region": REGION,
                "secretRef": {"name": NAME, "namespace": NAMESPACE},
                "providerConfig": provider_config,
            },
        }
    )


def infra_config_with_vpc(vpc_id: str | None = VPC_ID) -> dict[str, Any]:
    vpc: dict[str, Any] = {"id": vpc_id} if vpc_id is not None else {"cidr": "10.250.0.0/16"}
    return {
        "apiVersion": "aws.provider.extensions.gardener.cloud/v1alpha1",
        "kind": "InfrastructureConfig",
        "networks": {
            "vpc": vpc,
            "zones": [{"name": "eu-west-1a", "internal": "10.250.112.0/22", "public": "10.250.96.0/22", "workers": "10.250.0.0/19"}],
        },
    }


def write_secret(secrets_dir: Path, data: dict[str, str] | None = None, **manifest: Any) -> Path:
    path = secrets_dir / NAMESPACE / f"{NAME}.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    if data is None:
        data = {ACCESS_KEY_ID: ACCESS_KEY_ID, SECRET_ACCESS_KEY: SECRET_ACCESS_KEY}
    body = {
        "apiVersion": "v1",
        "kind": "Secret",
        "metadata": {"name": NAME, "namespace": NAMESPACE},
        "type": "Opaque",
        "data": {k: base64.b64encode(v.encode("utf-8")).decode("ascii") for k, v in data.items()},
    }
    body.update(manifest)
    path.write_text(json.dumps(body), encoding="utf-8")
    return path


@pytest.fixture
def network_client() -> FakeNetworkClient:
    return FakeNetworkClient()


@pytest.fixture
def infra() -> Infrastructure:
    return make_infrastructure(infra_config_with_vpc())


@pytest.fixture
def credential_error() -> CredentialsError:
    return CredentialsError("secret not found")

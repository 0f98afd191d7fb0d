"""Tests del ConfigValidator: checks de VPC y flujo completo del recurso."""

from __future__ import annotations

import asyncio
import logging

import pytest
from conftest import (
    ACCESS_KEY_ID,
    NAME,
    NAMESPACE,
    REGION,
    SECRET_ACCESS_KEY,
    VPC_ID,
    FakeClientFactory,
    FakeCredentialResolver,
    FakeNetworkClient,
    FakeNotFoundError,
    infra_config_with_vpc,
    make_infrastructure,
)

from core.domain.models import FindingKind, InfrastructureConfig
from core.domain.network import NetworkAttribute
from core.errors import CloudClientError
from core.services.config_validator import VPC_ID_PATH, ConfigValidator

DNS_SUPPORT = NetworkAttribute.ENABLE_DNS_SUPPORT
DNS_HOSTNAMES = NetworkAttribute.ENABLE_DNS_HOSTNAMES


def make_validator(
    client: FakeNetworkClient | None = None,
    *,
    factory: FakeClientFactory | None = None,
    resolver: FakeCredentialResolver | None = None,
) -> ConfigValidator:
    return ConfigValidator(
        client_factory=factory or FakeClientFactory(client),
        credential_resolver=resolver or FakeCredentialResolver(),
    )


def summary(findings):
    return [(f.kind, f.field, f.detail) for f in findings]


class TestValidateConfig:
    @pytest.mark.asyncio
    async def test_no_vpc_id_returns_empty_report_without_calls(self, network_client):
        config = InfrastructureConfig.model_validate(infra_config_with_vpc(None))

        findings = await make_validator(network_client).validate_config(config, network_client)

        assert findings == []
        assert network_client.calls == []

    @pytest.mark.asyncio
    async def test_vpc_not_found(self):
        client = FakeNetworkClient(attributes={DNS_SUPPORT: FakeNotFoundError("InvalidVpcID.NotFound")})
        config = InfrastructureConfig.model_validate(infra_config_with_vpc())

        findings = await make_validator(client).validate_config(config, client)

        assert len(findings) == 1
        assert findings[0].kind is FindingKind.NOT_FOUND
        assert findings[0].field == "networks.vpc.id"
        assert findings[0].value == VPC_ID
        assert client.calls == [("get_vpc_attribute", VPC_ID, "enableDnsSupport")]

    @pytest.mark.asyncio
    async def test_wrong_attributes_and_no_internet_gateway(self):
        client = FakeNetworkClient(attributes={DNS_SUPPORT: False, DNS_HOSTNAMES: False}, gateway="")
        config = InfrastructureConfig.model_validate(infra_config_with_vpc())

        findings = await make_validator(client).validate_config(config, client)

        assert summary(findings) == [
            (FindingKind.INVALID, VPC_ID_PATH, "VPC attribute enableDnsSupport must be set to true"),
            (FindingKind.INVALID, VPC_ID_PATH, "VPC attribute enableDnsHostnames must be set to true"),
            (FindingKind.INVALID, VPC_ID_PATH, "no attached internet gateway found"),
        ]
        assert all(f.value == VPC_ID for f in findings)

    @pytest.mark.asyncio
    async def test_both_attributes_false_with_gateway(self):
        client = FakeNetworkClient(attributes={DNS_SUPPORT: False, DNS_HOSTNAMES: False})
        config = InfrastructureConfig.model_validate(infra_config_with_vpc())

        findings = await make_validator(client).validate_config(config, client)

        assert [f.kind for f in findings] == [FindingKind.INVALID, FindingKind.INVALID]
        assert {f.field for f in findings} == {"networks.vpc.id"}

    @pytest.mark.asyncio
    async def test_valid_vpc(self, network_client):
        config = InfrastructureConfig.model_validate(infra_config_with_vpc())

        findings = await make_validator(network_client).validate_config(config, network_client)

        assert findings == []
        assert network_client.calls == [
            ("get_vpc_attribute", VPC_ID, "enableDnsSupport"),
            ("get_vpc_attribute", VPC_ID, "enableDnsHostnames"),
            ("get_vpc_internet_gateway", VPC_ID),
        ]

    @pytest.mark.asyncio
    async def test_attribute_fetch_error_is_internal_and_stops(self):
        client = FakeNetworkClient(attributes={DNS_SUPPORT: RuntimeError("test"), DNS_HOSTNAMES: True})
        config = InfrastructureConfig.model_validate(infra_config_with_vpc())

        findings = await make_validator(client).validate_config(config, client)

        assert summary(findings) == [
            (
                FindingKind.INTERNAL,
                VPC_ID_PATH,
                f"could not get VPC attribute enableDnsSupport for VPC {VPC_ID}: test",
            )
        ]
        assert len(client.calls) == 1

    @pytest.mark.asyncio
    async def test_second_attribute_error_keeps_first_finding(self):
        client = FakeNetworkClient(attributes={DNS_SUPPORT: False, DNS_HOSTNAMES: RuntimeError("throttled")})
        config = InfrastructureConfig.model_validate(infra_config_with_vpc())

        findings = await make_validator(client).validate_config(config, client)

        assert [f.kind for f in findings] == [FindingKind.INVALID, FindingKind.INTERNAL]
        assert "enableDnsHostnames" in findings[1].detail
        assert ("get_vpc_internet_gateway", VPC_ID) not in client.calls

    @pytest.mark.asyncio
    async def test_missing_internet_gateway(self):
        client = FakeNetworkClient(gateway="")
        config = InfrastructureConfig.model_validate(infra_config_with_vpc())

        findings = await make_validator(client).validate_config(config, client)

        assert summary(findings) == [(FindingKind.INVALID, VPC_ID_PATH, "no attached internet gateway found")]

    @pytest.mark.asyncio
    async def test_internet_gateway_fetch_error(self):
        client = FakeNetworkClient(gateway=FakeNotFoundError("gone"))
        config = InfrastructureConfig.model_validate(infra_config_with_vpc())

        findings = await make_validator(client).validate_config(config, client)

        assert summary(findings) == [
            (FindingKind.INTERNAL, VPC_ID_PATH, f"could not get internet gateway for VPC {VPC_ID}: gone")
        ]

    @pytest.mark.asyncio
    async def test_repeated_calls_are_identical(self):
        client = FakeNetworkClient(attributes={DNS_SUPPORT: True, DNS_HOSTNAMES: False}, gateway="")
        config = InfrastructureConfig.model_validate(infra_config_with_vpc())
        validator = make_validator(client)

        first = await validator.validate_config(config, client)
        second = await validator.validate_config(config, client)

        assert first == second
        assert len(first) == 2

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self):
        started = asyncio.Event()

        class SlowClient(FakeNetworkClient):
            async def get_vpc_attribute(self, vpc_id, attribute):
                self.calls.append(("get_vpc_attribute", vpc_id, attribute.value))
                started.set()
                await asyncio.sleep(10)
                return True

        client = SlowClient()
        config = InfrastructureConfig.model_validate(infra_config_with_vpc())
        task = asyncio.create_task(make_validator(client).validate_config(config, client))
        await started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert len(client.calls) == 1


class TestValidate:
    @pytest.mark.asyncio
    async def test_valid_infrastructure(self, infra, network_client):
        factory = FakeClientFactory(network_client)
        resolver = FakeCredentialResolver()

        findings = await make_validator(factory=factory, resolver=resolver).validate(infra)

        assert findings == []
        assert factory.calls == [(ACCESS_KEY_ID, SECRET_ACCESS_KEY, REGION)]
        assert resolver.refs[0].name == NAME
        assert resolver.refs[0].namespace == NAMESPACE

    @pytest.mark.asyncio
    async def test_missing_provider_config(self, network_client):
        infra = make_infrastructure(None)

        findings = await make_validator(network_client).validate(infra)

        assert len(findings) == 1
        assert findings[0].kind is FindingKind.INTERNAL
        assert findings[0].field is None
        assert "provider config is not set" in findings[0].detail

    @pytest.mark.asyncio
    async def test_undecodable_provider_config(self, network_client):
        infra = make_infrastructure({"networks": {"zones": [{"internal": "10.0.0.0/24"}]}})

        findings = await make_validator(network_client).validate(infra)

        assert [f.kind for f in findings] == [FindingKind.INTERNAL]
        assert "could not decode provider config" in findings[0].detail

    @pytest.mark.asyncio
    async def test_credentials_error(self, infra, credential_error):
        factory = FakeClientFactory()
        validator = make_validator(factory=factory, resolver=FakeCredentialResolver(credential_error))

        findings = await validator.validate(infra)

        assert summary(findings) == [(FindingKind.INTERNAL, None, "could not get AWS credentials: secret not found")]
        assert factory.calls == []

    @pytest.mark.asyncio
    async def test_client_factory_error(self, infra):
        factory = FakeClientFactory(error=CloudClientError("region must not be empty"))

        findings = await make_validator(factory=factory).validate(infra)

        assert summary(findings) == [
            (FindingKind.INTERNAL, None, "could not create AWS client: region must not be empty")
        ]
        assert factory.client.calls == []

    @pytest.mark.asyncio
    async def test_logs_vpc_validation(self, infra, network_client, caplog):
        with caplog.at_level(logging.INFO, logger="infra_preflight.config_validator"):
            await make_validator(network_client).validate(infra)

        assert "Validating infrastructure networks.vpc.id" in caplog.text
        assert f"{NAMESPACE}/{NAME}" in caplog.text

    @pytest.mark.asyncio
    async def test_no_vpc_id_skips_cloud_calls(self, network_client):
        infra = make_infrastructure(infra_config_with_vpc(None))

        findings = await make_validator(network_client).validate(infra)

        assert findings == []
        assert network_client.calls == []

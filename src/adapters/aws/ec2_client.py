"""Cliente EC2 (Query API) sobre httpx.

Implementa `core.interfaces.cloud.NetworkClient` con dos lecturas:
- DescribeVpcAttribute (enableDnsSupport / enableDnsHostnames)
- DescribeInternetGateways filtrando por `attachment.vpc-id`

Las respuestas son XML; se parsean con BeautifulSoup (`html.parser` pasa los
nombres de tag a minúsculas, por eso las búsquedas van en minúsculas).
"""

from __future__ import annotations

import logging

import httpx
from bs4 import BeautifulSoup

from adapters.aws.signing import SigV4Auth
from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.network import NetworkAttribute
from core.errors import CloudClientError

logger = logging.getLogger(__name__)

EC2_API_VERSION = "2016-11-15"

_NOT_FOUND_CODES = frozenset({"NotFound", "NoSuchEntity"})


class EC2APIError(CloudClientError):
    """Respuesta de error de la API de EC2 (`<Errors><Error>...`)."""

    def __init__(self, code: str, message: str, status_code: int) -> None:
        super().__init__(f"{code}: {message}" if message else code)
        self.code = code
        self.message = message
        self.status_code = status_code


def is_not_found_error(error: BaseException) -> bool:
    """True para códigos `NotFound`, `NoSuchEntity` o `*.NotFound`."""

    if not isinstance(error, EC2APIError):
        return False
    return error.code in _NOT_FOUND_CODES or error.code.endswith(".NotFound")


def _text(soup: BeautifulSoup, tag: str) -> str:
    node = soup.find(tag)
    if node is None:
        return ""
    return node.get_text(strip=True)


def _parse_error(body: str, status_code: int) -> EC2APIError:
    soup = BeautifulSoup(body, "html.parser")
    code = _text(soup, "code") or f"HTTP{status_code}"
    return EC2APIError(code, _text(soup, "message"), status_code)


def default_endpoint(region: str) -> str:
    return f"https://ec2.{region}.amazonaws.com/"


class EC2NetworkClient:
    """Lecturas de red de una región EC2 con credenciales estáticas."""

    def __init__(
        self,
        *,
        access_key_id: str,
        secret_access_key: str,
        region: str,
        settings: AppSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._endpoint = self._settings.ec2_endpoint_url or default_endpoint(region)
        self._auth = SigV4Auth(
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            region=region,
        )
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def _call(self, action: str, params: dict[str, str]) -> BeautifulSoup:
        form = {"Action": action, "Version": EC2_API_VERSION, **params}
        logger.debug("EC2 %s %s", action, params)
        async with build_async_client(
            self._settings, auth=self._auth, transport=self._transport
        ) as client:
            response = await client.post(self._endpoint, data=form)
        if response.status_code >= 400:
            raise _parse_error(response.text, response.status_code)
        return BeautifulSoup(response.text, "html.parser")

    async def get_vpc_attribute(self, vpc_id: str, attribute: NetworkAttribute) -> bool:
        soup = await self._call(
            "DescribeVpcAttribute",
            {"VpcId": vpc_id, "Attribute": attribute.value},
        )
        node = soup.find(attribute.value.lower())
        if node is None:
            raise CloudClientError(f"DescribeVpcAttribute response has no {attribute.value} element")
        value = node.find("value")
        return value is not None and value.get_text(strip=True).lower() == "true"

    async def get_vpc_internet_gateway(self, vpc_id: str) -> str:
        soup = await self._call(
            "DescribeInternetGateways",
            {"Filter.1.Name": "attachment.vpc-id", "Filter.1.Value.1": vpc_id},
        )
        for node in soup.find_all("internetgatewayid"):
            gateway_id = node.get_text(strip=True)
            if gateway_id:
                return gateway_id
        return ""

    def is_not_found_error(self, error: BaseException) -> bool:
        return is_not_found_error(error)


class EC2ClientFactory:
    """Construye `EC2NetworkClient` a partir de credenciales y región."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    def new_client(self, access_key_id: str, secret_access_key: str, region: str) -> EC2NetworkClient:
        if not access_key_id or not secret_access_key:
            raise CloudClientError("access key id and secret access key must not be empty")
        if not region:
            raise CloudClientError("region must not be empty")
        return EC2NetworkClient(
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            region=region,
            settings=self._settings,
            transport=self._transport,
        )

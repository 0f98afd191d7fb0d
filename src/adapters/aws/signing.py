"""Firma AWS Signature Version 4 como `httpx.Auth`.

Solo cubre lo que usa el cliente EC2: peticiones POST con el cuerpo en
`application/x-www-form-urlencoded` y credenciales estáticas (sin session token).
"""

from __future__ import annotations

import hashlib
import hmac
from datetime import datetime, timezone
from typing import Callable, Generator
from urllib.parse import quote

import httpx

ALGORITHM = "AWS4-HMAC-SHA256"


def _sign(key: bytes, message: str) -> bytes:
    return hmac.new(key, message.encode("utf-8"), hashlib.sha256).digest()


def signing_key(secret_access_key: str, datestamp: str, region: str, service: str) -> bytes:
    k_date = _sign(("AWS4" + secret_access_key).encode("utf-8"), datestamp)
    k_region = _sign(k_date, region)
    k_service = _sign(k_region, service)
    return _sign(k_service, "aws4_request")


def _canonical_query(request: httpx.Request) -> str:
    pairs = sorted(request.url.params.multi_items())
    return "&".join(f"{quote(k, safe='-_.~')}={quote(v, safe='-_.~')}" for k, v in pairs)


class SigV4Auth(httpx.Auth):
    """Añade `x-amz-date` y `Authorization` a cada petición."""

    requires_request_body = True

    def __init__(
        self,
        *,
        access_key_id: str,
        secret_access_key: str,
        region: str,
        service: str = "ec2",
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._access_key_id = access_key_id
        self._secret_access_key = secret_access_key
        self._region = region
        self._service = service
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        now = self._clock()
        amz_date = now.strftime("%Y%m%dT%H%M%SZ")
        datestamp = now.strftime("%Y%m%d")

        request.headers["x-amz-date"] = amz_date
        payload_hash = hashlib.sha256(request.content).hexdigest()

        signed_headers = ["host", "x-amz-date"]
        canonical_headers = "".join(
            f"{name}:{request.headers[name].strip()}\n" for name in signed_headers
        )
        canonical_request = "\n".join(
            [
                request.method,
                request.url.path or "/",
                _canonical_query(request),
                canonical_headers,
                ";".join(signed_headers),
                payload_hash,
            ]
        )

        scope = f"{datestamp}/{self._region}/{self._service}/aws4_request"
        string_to_sign = "\n".join(
            [
                ALGORITHM,
                amz_date,
                scope,
                hashlib.sha256(canonical_request.encode("utf-8")).hexdigest(),
            ]
        )
        key = signing_key(self._secret_access_key, datestamp, self._region, self._service)
        signature = hmac.new(key, string_to_sign.encode("utf-8"), hashlib.sha256).hexdigest()

        request.headers["Authorization"] = (
            f"{ALGORITHM} Credential={self._access_key_id}/{scope}, "
            f"SignedHeaders={';'.join(signed_headers)}, Signature={signature}"
        )
        yield request

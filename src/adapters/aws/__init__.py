"""Adaptadores AWS.

Por qué un paquete:
- Agrupa el cliente EC2 y la firma SigV4 que necesita.
- `EC2NetworkClient` implementa `core.interfaces.cloud.NetworkClient`.
"""

from adapters.aws.ec2_client import (
    EC2APIError,
    EC2ClientFactory,
    EC2NetworkClient,
    is_not_found_error,
)
from adapters.aws.signing import SigV4Auth

__all__ = [
    "EC2APIError",
    "EC2ClientFactory",
    "EC2NetworkClient",
    "SigV4Auth",
    "is_not_found_error",
]

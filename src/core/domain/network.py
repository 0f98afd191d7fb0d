"""Network attribute kinds checked against live VPC state.

The EC2 API names these attributes with camelCase strings. Keeping them in a
closed enum lets the validator and the AWS adapter share a single source of
truth for the wire names.
"""

from __future__ import annotations

from enum import Enum


class NetworkAttribute(str, Enum):
    """DNS-related VPC attributes that must be enabled."""

    ENABLE_DNS_SUPPORT = "enableDnsSupport"
    ENABLE_DNS_HOSTNAMES = "enableDnsHostnames"

    @classmethod
    def required(cls) -> tuple["NetworkAttribute", ...]:
        """Attributes the validator probes, in check order."""

        return (cls.ENABLE_DNS_SUPPORT, cls.ENABLE_DNS_HOSTNAMES)

    def label(self) -> str:
        """Human readable label for tables and logging."""

        return "DNS support" if self is NetworkAttribute.ENABLE_DNS_SUPPORT else "DNS hostnames"

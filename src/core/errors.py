"""Excepciones del Core.

Los colaboradores (extractor, secretos, cliente AWS) lanzan estas excepciones;
el validador las convierte en findings en el punto donde las detecta.
"""

from __future__ import annotations


class InfraPreflightError(Exception):
    """Base de todos los errores propios del proyecto."""


class ConfigExtractionError(InfraPreflightError):
    """El providerConfig del recurso no se pudo decodificar."""


class CredentialsError(InfraPreflightError):
    """La referencia a secreto no produjo credenciales utilizables."""


class CloudClientError(InfraPreflightError):
    """Fallo al construir o usar el cliente del proveedor cloud."""

"""Adaptadores concretos de los contratos del Core (AWS, secretos, exportación)."""

"""Servicios del Core: extracción de config y validación contra AWS."""

"""Core de infra-preflight: dominio, contratos y servicios de validación."""

"""Dominio: recursos declarados y findings de validación.

- `models`: Infrastructure, InfrastructureConfig, ValidationFinding (Pydantic v2).
- `network`: atributos de VPC que se comprueban contra AWS.

El dominio no conoce HTTP, EC2 ni la CLI.
"""

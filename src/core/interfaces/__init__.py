"""Contratos (Protocol) de los colaboradores externos del validador.

El Core depende de estas abstracciones; `adapters/` aporta las
implementaciones concretas (EC2 sobre httpx, secretos en disco).
"""

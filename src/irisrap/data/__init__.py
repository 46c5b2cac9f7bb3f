# src/irisrap/data/__init__.py
"""Carregamento da tabela de entrada (dataset de referência ou arquivo)."""

from .load import fingerprint, load_iris, load_table  # noqa: F401

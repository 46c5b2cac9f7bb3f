# src/irisrap/report/__init__.py
"""Geração do relatório da análise (Markdown)."""

from .report_md import REQUIRED_SECTIONS, generate_report_md  # noqa: F401

# src/irisrap/pipeline/__init__.py
"""Runner linear do pipeline do irisrap."""

from .run import STAGES, run_pipeline  # noqa: F401

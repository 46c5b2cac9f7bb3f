# tests/conftest.py
"""
Fixtures compartilhados para testes do irisrap.

Este módulo define fixtures reutilizáveis que fornecem:
- uma tabela pequena e determinística (categorias A/B/C, medida `x`)
- o schema correspondente
- o dataset iris de referência
- configurações YAML de exemplo (defaults + local)
- um RunContext controlado

Invariantes:
    - Nenhuma fixture executa o pipeline
    - Nenhuma fixture realiza I/O (arquivos ficam a cargo de `tmp_path`)
    - Dados retornados são sempre novas instâncias (sem estado compartilhado)
"""

from datetime import datetime, timezone

import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def abc_schema():
    """Schema da tabela de exemplo: categoria `category`, medida `x`."""
    from irisrap.core.schema import TableSchema

    return TableSchema.from_names("category", ["x"])


@pytest.fixture
def abc_table() -> pd.DataFrame:
    """
    Tabela de 6 linhas, categorias A, A, B, B, B, C e uma medida `x`
    com dois valores ausentes.

    Média dos valores observados de A e B: (1 + 3 + 4) / 3 = 8/3.
    """
    return pd.DataFrame(
        {
            "category": ["A", "A", "B", "B", "B", "C"],
            "x": [1.0, np.nan, 3.0, 4.0, np.nan, 10.0],
        }
    )


@pytest.fixture
def iris_table() -> pd.DataFrame:
    from irisrap.data import load_iris

    return load_iris()


@pytest.fixture
def config_defaults_yaml() -> str:
    """Conteúdo típico de `config.defaults.yaml`."""
    return """\
dataset:
  source: iris
  path: null
analysis:
  categories: null
  on_undefined: "nan"
report:
  filename: report.md
  dpi: 100
"""


@pytest.fixture
def config_local_yaml() -> str:
    """Override local: seleciona duas categorias e muda o dpi."""
    return """\
analysis:
  categories: [setosa, versicolor]
report:
  dpi: 72
"""


@pytest.fixture
def pipeline_config() -> dict:
    """Configuração já resolvida, equivalente a `config/config.defaults.yaml`."""
    return {
        "dataset": {"source": "iris", "path": None},
        "schema": {
            "category": "species",
            "measurements": ["sepal_length", "sepal_width", "petal_length", "petal_width"],
        },
        "analysis": {"categories": None, "on_undefined": "nan"},
        "report": {"filename": "report.md", "figure": "boxplots.png", "dpi": 50},
    }


@pytest.fixture
def dummy_ctx(pipeline_config):
    """RunContext determinístico (run_id e created_at fixos)."""
    from irisrap.core.run_context import RunContext

    return RunContext(
        run_id="run-test-001",
        created_at=datetime(2026, 1, 16, 0, 0, 0, tzinfo=timezone.utc),
        config=pipeline_config,
        meta={"source": "pytest"},
    )

# src/irisrap/__init__.py
"""
irisrap: pipeline analítico reprodutível sobre o dataset iris.

O núcleo são três funções puras, compostas de forma linear:

    table = load_iris()
    cleaned = clean(table, categories=["setosa", "versicolor"])
    stats = summarize(cleaned)
    chart = plot(cleaned)

Em volta delas o pacote oferece:
    - core.schema   → schema declarado (coluna de categoria + medidas)
    - core.config   → configuração YAML/JSON com deep-merge e hashing
    - data          → carregamento do dataset de referência ou de arquivo
    - report        → geração do report.md
    - pipeline      → runner linear (load → clean → summarize/plot → report)

Limites explícitos:
    - Não há engine de orquestração, concorrência ou persistência além
      dos arquivos de saída de cada run
"""

from .analysis import BoxplotChart, clean, distinct_categories, plot, summarize, to_long
from .core.errors import IrisRapError, PreconditionError, SchemaValidationError, UndefinedStatisticError
from .core.schema import IRIS_SCHEMA, ColumnSpec, TableSchema

__version__ = "0.1.0"

__all__ = [
    "BoxplotChart",
    "ColumnSpec",
    "IRIS_SCHEMA",
    "IrisRapError",
    "PreconditionError",
    "SchemaValidationError",
    "TableSchema",
    "UndefinedStatisticError",
    "clean",
    "distinct_categories",
    "plot",
    "summarize",
    "to_long",
]

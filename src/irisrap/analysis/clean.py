"""
Limpeza da tabela: filtro por categoria + imputação de medidas ausentes.

Regras (v1):
- O filtro mantém exatamente as linhas cuja categoria pertence ao conjunto
  pedido (igualdade exata de string); nenhuma linha é criada e a ordem
  original é preservada.
- `categories=None` significa "sem filtro". Quem precisar do conjunto
  explícito de categorias resolve antes com `distinct_categories`.
- A imputação atua apenas nas colunas de medida declaradas no schema e usa
  a média dos valores observados da coluna no conjunto JÁ FILTRADO,
  calculada a cada chamada.
- Coluna com valores ausentes e nenhum valor observado após o filtro não
  tem média definida: `UndefinedStatisticError`, sem fallback.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional

import pandas as pd

from irisrap.core.errors import PreconditionError, UndefinedStatisticError, missing_columns, not_a_table
from irisrap.core.schema import IRIS_SCHEMA, TableSchema


def distinct_categories(table: Any, *, schema: TableSchema = IRIS_SCHEMA) -> List[str]:
    """Rótulos distintos da coluna de categoria, em ordem de primeira aparição.

    Rótulos ausentes (NaN/None) não fazem parte do resultado.
    """
    if not isinstance(table, pd.DataFrame):
        raise not_a_table(received=table, operation="distinct_categories")
    if schema.category_name not in table.columns:
        raise missing_columns(columns=[schema.category_name], operation="distinct_categories")

    return [str(c) for c in pd.unique(table[schema.category_name].dropna())]


def _resolve_categories(categories: Optional[Iterable[str]]) -> Optional[List[str]]:
    if categories is None:
        return None
    # uma string isolada seria iterada caractere a caractere
    if isinstance(categories, str):
        raise PreconditionError(
            "categories must be an iterable of labels, not a single string",
            details={"categories": categories},
            hint=f"Use categories=[{categories!r}].",
        )
    return list(categories)


def clean(
    table: pd.DataFrame,
    categories: Optional[Iterable[str]] = None,
    *,
    schema: TableSchema = IRIS_SCHEMA,
) -> pd.DataFrame:
    """Filtra `table` por categoria e imputa medidas ausentes pela média.

    Args:
        table: tabela com as colunas declaradas em `schema`.
        categories: rótulos a manter; `None` mantém todas as linhas.
        schema: colunas de categoria e de medida.

    Returns:
        Nova tabela (índice 0..n-1) sem valores ausentes nas medidas.

    Raises:
        PreconditionError: entrada não tabular ou sem as colunas declaradas.
        UndefinedStatisticError: medida sem nenhum valor observado a imputar.
    """
    schema.check(table, operation="clean")
    allowed = _resolve_categories(categories)

    out = table.copy()
    if allowed is not None:
        out = out[out[schema.category_name].isin(allowed)]
    out = out.reset_index(drop=True)

    for name in schema.measurement_names:
        values = out[name].astype(float)
        missing = values.isna()
        if missing.any():
            observed = values[~missing]
            if observed.empty:
                raise UndefinedStatisticError(
                    f"cannot impute column '{name}': no observed values after filtering",
                    details={
                        "column": name,
                        "rows": int(len(values)),
                        "categories": allowed,
                    },
                    hint="Widen the category selection or drop the column from the schema.",
                )
            values = values.fillna(float(observed.mean()))
        out[name] = values

    return out

"""
Sumarização por categoria: média, desvio padrão amostral e contagem.

Saída: um DataFrame com uma linha por rótulo de categoria presente na
entrada, ordenado lexicograficamente pelo rótulo. Colunas:

    <categoria>, <medida>_mean, <medida>_sd (para cada medida), n

Linhas sem rótulo de categoria (NaN/None) formam um grupo próprio, com
rótulo ausente, na última linha. `plot` desenha o mesmo grupo como a
caixa `NA`.

O desvio padrão usa denominador n-1. Com menos de duas observações ele
não é definido; a política é escolhida pelo chamador:

- on_undefined="nan"   → `<medida>_sd` recebe NaN (padrão)
- on_undefined="raise" → `UndefinedStatisticError` com as categorias afetadas
"""

from __future__ import annotations

from typing import Dict, List

import pandas as pd

from irisrap.core.errors import UndefinedStatisticError
from irisrap.core.schema import IRIS_SCHEMA, TableSchema


ON_UNDEFINED_POLICIES = ("nan", "raise")


def _undefined_sd_groups(grouped, names: List[str]) -> Dict[str, List[str]]:
    out: Dict[str, List[str]] = {}
    for name in names:
        observed = grouped[name].count()
        short = [str(label) for label, n in observed.items() if n < 2]
        if short:
            out[name] = short
    return out


def summarize(
    table: pd.DataFrame,
    *,
    schema: TableSchema = IRIS_SCHEMA,
    on_undefined: str = "nan",
) -> pd.DataFrame:
    """Calcula média, desvio padrão amostral e contagem por categoria.

    Valores ausentes são ignorados no cálculo de média e desvio padrão;
    `n` conta linhas (observadas ou não) de cada categoria.

    Raises:
        PreconditionError: entrada não tabular ou sem as colunas declaradas.
        UndefinedStatisticError: `on_undefined="raise"` e alguma categoria
            tem menos de duas observações em alguma medida.
        ValueError: política `on_undefined` desconhecida.
    """
    if on_undefined not in ON_UNDEFINED_POLICIES:
        raise ValueError(f"on_undefined must be one of {ON_UNDEFINED_POLICIES}, got: {on_undefined!r}")

    schema.check(table, operation="summarize")
    category = schema.category_name
    names = schema.measurement_names

    work = table[[category, *names]].copy()
    work[names] = work[names].astype(float)

    grouped = work.groupby(category, sort=True, dropna=False, observed=True)

    if on_undefined == "raise":
        undefined = _undefined_sd_groups(grouped, names)
        if undefined:
            raise UndefinedStatisticError(
                "sample standard deviation needs at least two observations",
                details={"groups_by_column": undefined},
                hint="Use on_undefined='nan' to report NaN for these groups.",
            )

    columns: Dict[str, pd.Series] = {}
    for name in names:
        columns[f"{name}_mean"] = grouped[name].mean()
        columns[f"{name}_sd"] = grouped[name].std(ddof=1)
    columns["n"] = grouped.size()

    out = pd.DataFrame(columns)
    out.index.name = category
    return out.reset_index()

"""
Visualização: boxplots facetados por medida.

`to_long` converte a tabela para o formato longo (uma linha por par
linha × medida, com as colunas `<categoria>`, `measurement`, `value`).
`plot` desenha uma faceta por medida (na ordem do schema), cada uma com
um boxplot por categoria. Todas as facetas usam a mesma ordem de
categorias no eixo x; o eixo y é independente em cada faceta.

Linhas sem rótulo de categoria (NaN/None) não são descartadas: formam
uma caixa própria, `NA_LABEL`, desenhada depois das categorias ordenadas.
É a mesma política de `summarize`, que dá a elas uma linha própria ao fim
da tabela.

O gráfico é montado sobre `matplotlib.figure.Figure`, sem estado global
do pyplot, e nada é gravado em disco aqui: salvar é decisão do chamador
(`BoxplotChart.save`).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple, Union

import matplotlib
import pandas as pd
from matplotlib.figure import Figure

from irisrap.core.schema import IRIS_SCHEMA, TableSchema


DEFAULT_TITLE = "Iris Measurements by Species"
DEFAULT_SUBTITLE = "Boxplots of Sepal/Petal dimensions"

MEASUREMENT_COLUMN = "measurement"
VALUE_COLUMN = "value"
NA_LABEL = "NA"


@dataclass(frozen=True)
class BoxplotChart:
    """Gráfico pronto para renderização.

    - figure: figura matplotlib com uma faceta por medida
    - long_table: dados em formato longo usados no desenho
    - facets: nomes das medidas, na ordem das facetas
    - categories: rótulos no eixo x, na ordem desenhada
    """

    figure: Figure
    long_table: pd.DataFrame
    facets: Tuple[str, ...]
    categories: Tuple[str, ...]

    def save(self, path: Union[str, Path], *, dpi: int = 100) -> Path:
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        self.figure.savefig(out, dpi=dpi)
        return out


def to_long(table: pd.DataFrame, *, schema: TableSchema = IRIS_SCHEMA) -> pd.DataFrame:
    """Formato longo: len(table) × len(medidas) linhas, medidas na ordem do schema."""
    schema.check(table, operation="to_long")
    category = schema.category_name

    return pd.melt(
        table[schema.columns],
        id_vars=[category],
        value_vars=schema.measurement_names,
        var_name=MEASUREMENT_COLUMN,
        value_name=VALUE_COLUMN,
    )


def plot(
    table: pd.DataFrame,
    *,
    schema: TableSchema = IRIS_SCHEMA,
    title: str = DEFAULT_TITLE,
    subtitle: str = DEFAULT_SUBTITLE,
    ncols: int = 2,
) -> BoxplotChart:
    """Monta os boxplots facetados de todas as medidas por categoria.

    Raises:
        PreconditionError: entrada não tabular ou sem as colunas declaradas.
    """
    schema.check(table, operation="plot")
    long_table = to_long(table, schema=schema)
    category = schema.category_name

    unlabelled = long_table[category].isna()
    labels = long_table[category].astype(object).where(~unlabelled, NA_LABEL).astype(str)
    categories = tuple(sorted(labels[~unlabelled].unique()))
    if unlabelled.any() and NA_LABEL not in categories:
        categories += (NA_LABEL,)
    facets = tuple(schema.measurement_names)

    ncols = max(1, min(ncols, len(facets)))
    nrows = math.ceil(len(facets) / ncols)

    fig = Figure(figsize=(4.5 * ncols, 3.5 * nrows + 0.8), layout="constrained")
    axes = fig.subplots(nrows, ncols, squeeze=False)
    palette = matplotlib.colormaps["tab10"]

    for i, ax in enumerate(axes.flat):
        if i >= len(facets):
            ax.set_visible(False)
            continue

        name = facets[i]
        facet = long_table[long_table[MEASUREMENT_COLUMN] == name]
        facet_labels = labels.loc[facet.index]

        ax.set_title(name)
        ax.set_xlabel(category)
        ax.set_ylabel(VALUE_COLUMN)
        ax.grid(axis="y", alpha=0.3)
        for side in ("top", "right"):
            ax.spines[side].set_visible(False)

        if not categories:
            continue

        data = [
            facet.loc[facet_labels == label, VALUE_COLUMN].dropna().to_numpy(dtype=float)
            for label in categories
        ]
        boxes = ax.boxplot(data, patch_artist=True)
        for j, patch in enumerate(boxes["boxes"]):
            patch.set_facecolor(palette(j % palette.N))
            patch.set_alpha(0.8)
        ax.set_xticks(range(1, len(categories) + 1))
        ax.set_xticklabels(categories)

    fig.suptitle(f"{title}\n{subtitle}")

    return BoxplotChart(
        figure=fig,
        long_table=long_table,
        facets=facets,
        categories=categories,
    )

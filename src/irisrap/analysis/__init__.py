# src/irisrap/analysis/__init__.py
"""
Funções de análise do irisrap.

Três funções puras, compostas de forma linear:

    clean(table, categories)  → filtra por categoria e imputa medidas ausentes
    summarize(table)          → média, desvio padrão amostral e contagem por categoria
    plot(table)               → boxplots facetados por medida

Nenhuma delas muta a entrada, mantém cache ou realiza I/O.
"""

from .clean import clean, distinct_categories  # noqa: F401
from .plot import BoxplotChart, plot, to_long  # noqa: F401
from .summarize import summarize  # noqa: F401

"""
src/irisrap/report/report_md.py

Gerador de `report.md` (v1): relatório da análise do iris.

Regras:
- O relatório é derivado EXCLUSIVAMENTE dos insumos recebidos (tabela de
  sumário, caminho do gráfico, metadados da run). Não recalcula nada.
- Mesmos insumos => mesmo report.md (ordenação estável, formatação fixa).
- Não grava arquivo: o runner decide onde salvar.

Estrutura mínima obrigatória:
# Iris Analysis Report

## Summary Statistics
## Measurements by Species
## Data Provenance
## Execution Metadata
"""

from __future__ import annotations

import json
import math
from typing import Any, Dict, List, Optional

import pandas as pd

from irisrap.core.schema import IRIS_SCHEMA, TableSchema


REQUIRED_SECTIONS: List[str] = [
    "# Iris Analysis Report",
    "## Summary Statistics",
    "## Measurements by Species",
    "## Data Provenance",
    "## Execution Metadata",
]


def _as_pretty_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, sort_keys=True, indent=2, default=str)


def _fmt(value: Any) -> str:
    if value is None:
        return "NA"
    if isinstance(value, float):
        if math.isnan(value):
            return "NA"
        return f"{value:.3f}"
    return str(value)


def _markdown_table(summary: pd.DataFrame, columns: List[str]) -> List[str]:
    lines = [
        "| " + " | ".join(columns) + " |",
        "| " + " | ".join("---" for _ in columns) + " |",
    ]
    for record in summary[columns].to_dict(orient="records"):
        lines.append("| " + " | ".join(_fmt(record[c]) for c in columns) + " |")
    return lines


def generate_report_md(
    summary: pd.DataFrame,
    *,
    schema: TableSchema = IRIS_SCHEMA,
    figure_path: Optional[str] = None,
    run: Optional[Dict[str, Any]] = None,
    inputs: Optional[Dict[str, Any]] = None,
    warnings: Optional[Dict[str, List[str]]] = None,
    title: str = "Iris Analysis Report",
) -> str:
    """Gera o conteúdo completo do report.md a partir do sumário da análise.

    `summary` é a saída de `summarize` (uma linha por categoria).
    """
    if not isinstance(summary, pd.DataFrame):
        raise ValueError("summary must be a pandas DataFrame (output of summarize)")

    category = schema.category_name
    columns = [category]
    for name in schema.measurement_names:
        columns += [f"{name}_mean", f"{name}_sd"]
    columns.append("n")

    absent = [c for c in columns if c not in summary.columns]
    if absent:
        raise ValueError(f"summary is missing columns: {', '.join(absent)}")

    run = run or {}
    inputs = inputs or {}

    lines: List[str] = []

    lines.append("# Iris Analysis Report\n")
    if title != "Iris Analysis Report":
        lines.append(f"_{title}_\n")

    # Summary Statistics
    lines.append("## Summary Statistics")
    if summary.empty:
        lines.append("No rows left after cleaning; nothing to summarize.")
    else:
        total = int(summary["n"].sum())
        lines.append(
            f"Mean and sample standard deviation (n-1) of each measurement by `{category}` "
            f"over {total} rows. `NA` marks an undefined statistic."
        )
        lines.append("")
        lines.extend(_markdown_table(summary, columns))
    lines.append("")

    # Measurements by Species
    lines.append("## Measurements by Species")
    if figure_path:
        lines.append(f"![Boxplots of measurements by {category}]({figure_path})")
    else:
        lines.append("No chart was produced for this run.")
    lines.append("")

    # Data Provenance
    lines.append("## Data Provenance")
    source = inputs.get("dataset_source", "<unknown>")
    lines.append(f"- **Dataset**: `{source}`")
    if inputs.get("dataset_sha256"):
        lines.append(f"- **Dataset SHA-256**: `{inputs['dataset_sha256']}`")
    if inputs.get("categories") is not None:
        lines.append(f"- **Categories**: {', '.join(f'`{c}`' for c in inputs['categories'])}")
    else:
        lines.append("- **Categories**: all (no filtering)")
    if inputs.get("config_hash"):
        lines.append(f"- **Config Hash**: `{inputs['config_hash']}`")
    if warnings:
        lines.append("")
        lines.append("Warnings:")
        for stage_id in sorted(warnings):
            for message in warnings[stage_id]:
                lines.append(f"- `{stage_id}`: {message}")
    lines.append("")

    # Execution Metadata
    lines.append("## Execution Metadata")
    lines.append("```json")
    lines.append(_as_pretty_json(run))
    lines.append("```")

    content = "\n".join(lines) + "\n"

    for sec in REQUIRED_SECTIONS:
        if sec not in content:
            raise RuntimeError(f"Report generation failed: missing required section: {sec}")

    return content

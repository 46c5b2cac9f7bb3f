"""
Runner linear do pipeline do irisrap.

Estágios (ordem fixa, sem DAG nem planner):

    data.load → analysis.clean → analysis.summarize → analysis.plot → export.report

Cada estágio:
- lê os artefatos de que precisa do RunContext e publica os seus
- registra eventos estruturados (`ctx.log`) de início e fim
- produz um `StageResult`

Fail fast: a primeira falha registra o estágio como FAILED, loga o erro,
grava o `manifest.json` e re-levanta a exceção original. Nenhum fallback.

Saídas em `run_dir`:
    artifacts/summary.csv
    artifacts/boxplots.png
    artifacts/report.md
    manifest.json
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from irisrap import __version__
from irisrap.analysis import clean, distinct_categories, plot, summarize
from irisrap.core.config import compute_config_hash
from irisrap.core.manifest import build_manifest, save_manifest
from irisrap.core.run_context import RunContext
from irisrap.core.schema import IRIS_SCHEMA, TableSchema, validate_schema
from irisrap.core.types import StageResult, StageStatus
from irisrap.data import fingerprint, load_iris, load_table
from irisrap.report import generate_report_md


STAGES: List[str] = [
    "data.load",
    "analysis.clean",
    "analysis.summarize",
    "analysis.plot",
    "export.report",
]

StageOutput = Tuple[str, Dict[str, Any], Dict[str, str]]


def _section(config: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = config.get(key) if isinstance(config, dict) else None
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"Invalid config: '{key}' must be a mapping")
    return value


def _schema_from_config(config: Dict[str, Any]) -> TableSchema:
    raw = config.get("schema") if isinstance(config, dict) else None
    if raw is None:
        return IRIS_SCHEMA
    return validate_schema(raw)


def _categories_from_config(config: Dict[str, Any]) -> Optional[List[str]]:
    categories = _section(config, "analysis").get("categories")
    if categories is None:
        return None
    if not isinstance(categories, list) or not all(isinstance(c, str) for c in categories):
        raise ValueError("Invalid config: analysis.categories must be a list of strings or null")
    return categories


# -----------------------------------------------------------------------------
# Estágios
# -----------------------------------------------------------------------------

def _stage_load(ctx: RunContext) -> StageOutput:
    dataset = _section(ctx.config, "dataset")
    source = dataset.get("source", "iris")

    if source == "iris":
        table = load_iris()
        inputs = {"dataset_source": "iris (scikit-learn bundled dataset)"}
    elif source == "file":
        path = dataset.get("path")
        table = load_table(path)
        sha256, size_bytes = fingerprint(path)
        inputs = {"dataset_source": str(path), "dataset_sha256": sha256, "dataset_bytes": size_bytes}
    else:
        raise ValueError(f"Invalid config: dataset.source must be 'iris' or 'file', got: {source!r}")

    ctx.meta["inputs"].update(inputs)
    ctx.set_artifact("data.raw", table)
    return f"loaded {len(table)} rows", {"rows": int(len(table)), "columns": int(table.shape[1])}, {}


def _stage_clean(ctx: RunContext) -> StageOutput:
    schema: TableSchema = ctx.get_artifact("schema")
    raw = ctx.get_artifact("data.raw")
    categories = _categories_from_config(ctx.config)

    if categories is not None:
        present = set(distinct_categories(raw, schema=schema))
        for label in categories:
            if label not in present:
                ctx.add_warning(step_id="analysis.clean", message=f"category '{label}' not present in the data")

    cleaned = clean(raw, categories, schema=schema)
    ctx.set_artifact("data.clean", cleaned)

    selected = raw if categories is None else raw[raw[schema.category_name].isin(categories)]
    metrics = {
        "rows_in": int(len(raw)),
        "rows_out": int(len(cleaned)),
        "values_imputed": int(selected[schema.measurement_names].isna().sum().sum()),
    }
    return f"kept {len(cleaned)} of {len(raw)} rows", metrics, {}


def _stage_summarize(ctx: RunContext) -> StageOutput:
    schema: TableSchema = ctx.get_artifact("schema")
    cleaned = ctx.get_artifact("data.clean")
    policy = _section(ctx.config, "analysis").get("on_undefined", "nan")

    summary = summarize(cleaned, schema=schema, on_undefined=policy)
    ctx.set_artifact("data.summary", summary)

    sd_columns = [f"{name}_sd" for name in schema.measurement_names]
    undefined = summary.loc[summary[sd_columns].isna().any(axis=1), schema.category_name]
    for label in undefined:
        ctx.add_warning(
            step_id="analysis.summarize",
            message=f"standard deviation undefined (NaN) for category '{label}'",
        )

    rel_path = "artifacts/summary.csv"
    out_path = Path(ctx.meta["run_dir"]) / rel_path
    out_path.parent.mkdir(parents=True, exist_ok=True)
    summary.to_csv(out_path, index=False)

    return f"{len(summary)} categories summarized", {"categories": int(len(summary))}, {"summary_csv": rel_path}


def _stage_plot(ctx: RunContext) -> StageOutput:
    schema: TableSchema = ctx.get_artifact("schema")
    cleaned = ctx.get_artifact("data.clean")
    report_cfg = _section(ctx.config, "report")

    kwargs: Dict[str, Any] = {}
    for key in ("title", "subtitle"):
        if report_cfg.get(key):
            kwargs[key] = str(report_cfg[key])

    chart = plot(cleaned, schema=schema, **kwargs)
    ctx.set_artifact("data.chart", chart)

    rel_path = f"artifacts/{report_cfg.get('figure', 'boxplots.png')}"
    chart.save(Path(ctx.meta["run_dir"]) / rel_path, dpi=int(report_cfg.get("dpi", 100)))

    metrics = {"facets": len(chart.facets), "long_rows": int(len(chart.long_table))}
    return f"{len(chart.facets)} facets drawn", metrics, {"boxplots": rel_path}


def _stage_report(ctx: RunContext) -> StageOutput:
    schema: TableSchema = ctx.get_artifact("schema")
    summary = ctx.get_artifact("data.summary")
    report_cfg = _section(ctx.config, "report")

    filename = report_cfg.get("filename", "report.md")
    if not isinstance(filename, str) or not filename.strip():
        raise ValueError("Invalid config: report.filename must be a non-empty string")

    figure = ctx.results["analysis.plot"].artifacts["boxplots"]
    content = generate_report_md(
        summary,
        schema=schema,
        # report.md e a figura ficam no mesmo diretório
        figure_path=Path(figure).name,
        run={
            "run_id": ctx.run_id,
            "started_at": ctx.created_at.isoformat(),
            "irisrap_version": __version__,
            "stages": [r.to_dict() for r in ctx.results.values()],
        },
        inputs=ctx.meta["inputs"],
        warnings=ctx.warnings,
        title=str(report_cfg.get("title") or "Iris Analysis Report"),
    )

    rel_path = f"artifacts/{filename}"
    out_path = Path(ctx.meta["run_dir"]) / rel_path
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(content, encoding="utf-8")

    return "report.md written", {"bytes": out_path.stat().st_size}, {"report_md": rel_path}


_STAGE_FUNCS: Dict[str, Callable[[RunContext], StageOutput]] = {
    "data.load": _stage_load,
    "analysis.clean": _stage_clean,
    "analysis.summarize": _stage_summarize,
    "analysis.plot": _stage_plot,
    "export.report": _stage_report,
}


# -----------------------------------------------------------------------------
# Runner
# -----------------------------------------------------------------------------

def _run_stage(ctx: RunContext, stage_id: str) -> StageResult:
    ctx.log(step_id=stage_id, level="info", message="stage started")
    try:
        summary, metrics, artifacts = _STAGE_FUNCS[stage_id](ctx)
    except Exception as e:
        ctx.log(
            step_id=stage_id,
            level="error",
            message=f"{stage_id} failed",
            error_type=e.__class__.__name__,
            error_message=str(e) or "error",
        )
        ctx.record(
            StageResult(
                stage_id=stage_id,
                status=StageStatus.FAILED,
                summary=str(e) or f"{stage_id} failed",
            )
        )
        raise

    result = StageResult(
        stage_id=stage_id,
        status=StageStatus.SUCCESS,
        summary=summary,
        metrics=metrics,
        artifacts=artifacts,
    )
    ctx.record(result)
    ctx.log(step_id=stage_id, level="info", message=summary, **metrics)
    return result


def run_pipeline(
    config: Dict[str, Any],
    *,
    run_dir: Path,
    run_id: Optional[str] = None,
) -> RunContext:
    """Executa o pipeline completo e retorna o RunContext da run.

    Args:
        config: configuração efetiva (ver `config/config.defaults.yaml`).
        run_dir: diretório de saída da run (criado se não existir).
        run_id: identificador da run; gerado quando omitido.

    Raises:
        Qualquer exceção de estágio, re-levantada após gravar o manifest.
    """
    run_dir = Path(run_dir)
    run_dir.mkdir(parents=True, exist_ok=True)

    ctx = RunContext(
        run_id=run_id or uuid.uuid4().hex,
        created_at=datetime.now(timezone.utc),
        config=config,
        meta={"run_dir": str(run_dir), "inputs": {}},
    )

    try:
        config_hash = compute_config_hash(config)
        ctx.meta["inputs"]["config_hash"] = config_hash
        ctx.meta["inputs"]["categories"] = _categories_from_config(config)
        ctx.set_artifact("schema", _schema_from_config(config))
        ctx.log(step_id="run", level="info", message="run started", config_hash=config_hash)

        for stage_id in STAGES:
            _run_stage(ctx, stage_id)

        ctx.log(step_id="run", level="info", message="run finished")
    except Exception as e:
        # falhas de estágio já foram logadas em _run_stage
        if not any(r.status == StageStatus.FAILED for r in ctx.results.values()):
            ctx.log(
                step_id="run",
                level="error",
                message="run failed",
                error_type=e.__class__.__name__,
                error_message=str(e) or "error",
            )
        raise
    finally:
        save_manifest(build_manifest(ctx, version=__version__), run_dir / "manifest.json")

    return ctx

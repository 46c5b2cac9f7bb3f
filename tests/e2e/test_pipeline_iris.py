# tests/e2e/test_pipeline_iris.py
"""
Testes end-to-end do runner linear sobre o dataset iris.

Validam que uma run completa:
- executa todos os estágios em ordem, com SUCCESS
- grava summary.csv, boxplots.png, report.md e manifest.json
- em caso de falha, registra o estágio como FAILED, grava o manifest
  e re-levanta a exceção original
"""

from __future__ import annotations

import copy
import json

import pandas as pd
import pytest

from irisrap.core.errors import PreconditionError, UndefinedStatisticError
from irisrap.core.types import StageStatus
from irisrap.pipeline import STAGES, run_pipeline


def test_pipeline_happy_path(tmp_path, pipeline_config):
    ctx = run_pipeline(pipeline_config, run_dir=tmp_path, run_id="e2e-001")

    assert list(ctx.results) == STAGES
    assert all(r.status == StageStatus.SUCCESS for r in ctx.results.values())

    artifacts = tmp_path / "artifacts"
    assert (artifacts / "boxplots.png").exists()
    report = (artifacts / "report.md").read_text(encoding="utf-8")
    assert "# Iris Analysis Report" in report
    assert "![Boxplots of measurements by species](boxplots.png)" in report

    summary = pd.read_csv(artifacts / "summary.csv")
    assert summary["species"].tolist() == ["setosa", "versicolor", "virginica"]
    assert summary["n"].tolist() == [50, 50, 50]

    manifest = json.loads((tmp_path / "manifest.json").read_text(encoding="utf-8"))
    assert manifest["run"]["run_id"] == "e2e-001"
    assert manifest["run"]["status"] == "success"
    assert len(manifest["inputs"]["config_hash"]) == 64
    assert set(manifest["stages"]) == set(STAGES)
    assert manifest["stages"]["analysis.plot"]["metrics"]["long_rows"] == 600
    assert all(ev["run_id"] == "e2e-001" for ev in manifest["events"])


def test_pipeline_with_category_selection(tmp_path, pipeline_config):
    config = copy.deepcopy(pipeline_config)
    config["analysis"]["categories"] = ["setosa", "virginica", "unknown"]

    ctx = run_pipeline(config, run_dir=tmp_path)

    summary = ctx.get_artifact("data.summary")
    assert summary["species"].tolist() == ["setosa", "virginica"]
    assert ctx.results["analysis.clean"].metrics["rows_out"] == 100
    assert ctx.warnings["analysis.clean"] == ["category 'unknown' not present in the data"]


def test_pipeline_from_csv_imputes_and_fingerprints(tmp_path):
    data = tmp_path / "in.csv"
    data.write_text("group,x\nA,1\nA,\nB,3\nB,4\nB,\nC,10\n", encoding="utf-8")
    config = {
        "dataset": {"source": "file", "path": str(data)},
        "schema": {"category": "group", "measurements": ["x"]},
        "analysis": {"categories": ["A", "B"], "on_undefined": "nan"},
        "report": {"dpi": 40},
    }

    ctx = run_pipeline(config, run_dir=tmp_path / "run")

    cleaned = ctx.get_artifact("data.clean")
    assert cleaned["x"].tolist() == pytest.approx([1.0, 8 / 3, 3.0, 4.0, 8 / 3])
    assert ctx.results["analysis.clean"].metrics["values_imputed"] == 2
    assert len(ctx.meta["inputs"]["dataset_sha256"]) == 64


def test_pipeline_single_row_group_warns_with_nan_policy(tmp_path):
    data = tmp_path / "in.csv"
    data.write_text("group,x\nA,1\nA,2\nC,10\n", encoding="utf-8")
    config = {
        "dataset": {"source": "file", "path": str(data)},
        "schema": {"category": "group", "measurements": ["x"]},
        "report": {"dpi": 40},
    }

    ctx = run_pipeline(config, run_dir=tmp_path / "run")

    assert ctx.warnings["analysis.summarize"] == ["standard deviation undefined (NaN) for category 'C'"]


def test_pipeline_failing_stage_is_recorded_and_reraised(tmp_path):
    data = tmp_path / "in.csv"
    data.write_text("group,x\nA,1\nA,2\nC,10\n", encoding="utf-8")
    config = {
        "dataset": {"source": "file", "path": str(data)},
        "schema": {"category": "group", "measurements": ["x"]},
        "analysis": {"on_undefined": "raise"},
    }
    run_dir = tmp_path / "run"

    with pytest.raises(UndefinedStatisticError):
        run_pipeline(config, run_dir=run_dir, run_id="e2e-fail")

    manifest = json.loads((run_dir / "manifest.json").read_text(encoding="utf-8"))
    assert manifest["run"]["status"] == "failed"
    assert manifest["stages"]["analysis.summarize"]["status"] == "failed"
    assert "analysis.plot" not in manifest["stages"]
    errors = [ev for ev in manifest["events"] if ev["level"] == "error"]
    assert len(errors) == 1
    assert errors[0]["error_type"] == "UndefinedStatisticError"


def test_pipeline_schema_not_matching_table(tmp_path, pipeline_config):
    config = copy.deepcopy(pipeline_config)
    config["schema"] = {"category": "species", "measurements": ["stem_length"]}

    with pytest.raises(PreconditionError, match="stem_length"):
        run_pipeline(config, run_dir=tmp_path)

    manifest = json.loads((tmp_path / "manifest.json").read_text(encoding="utf-8"))
    assert manifest["stages"]["data.load"]["status"] == "success"
    assert manifest["stages"]["analysis.clean"]["status"] == "failed"


def test_pipeline_missing_dataset_file(tmp_path):
    config = {"dataset": {"source": "file", "path": str(tmp_path / "absent.csv")}}

    with pytest.raises(FileNotFoundError):
        run_pipeline(config, run_dir=tmp_path / "run")

    manifest = json.loads((tmp_path / "run" / "manifest.json").read_text(encoding="utf-8"))
    assert manifest["stages"]["data.load"]["status"] == "failed"

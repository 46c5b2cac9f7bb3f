from __future__ import annotations

from datetime import datetime, timezone

from irisrap.core.manifest import build_manifest, load_manifest, save_manifest
from irisrap.core.types import StageResult, StageStatus


def test_manifest_reflects_context(dummy_ctx):
    dummy_ctx.meta["inputs"] = {"config_hash": "h"}
    dummy_ctx.record(StageResult(stage_id="data.load", status=StageStatus.SUCCESS, summary="ok"))
    dummy_ctx.log(step_id="data.load", level="info", message="ok")

    manifest = build_manifest(
        dummy_ctx,
        version="0.0.0",
        finished_at=datetime(2026, 1, 16, 0, 0, 5, tzinfo=timezone.utc),
    )

    assert manifest["run"] == {
        "run_id": "run-test-001",
        "started_at": "2026-01-16T00:00:00+00:00",
        "finished_at": "2026-01-16T00:00:05+00:00",
        "irisrap_version": "0.0.0",
        "status": "success",
    }
    assert manifest["inputs"] == {"config_hash": "h"}
    assert manifest["stages"]["data.load"]["status"] == "success"
    assert len(manifest["events"]) == 1


def test_manifest_status_failed_when_a_stage_failed(dummy_ctx):
    dummy_ctx.record(StageResult(stage_id="data.load", status=StageStatus.FAILED, summary="boom"))
    assert build_manifest(dummy_ctx, version="0.0.0")["run"]["status"] == "failed"


def test_manifest_save_and_load(tmp_path, dummy_ctx):
    manifest = build_manifest(dummy_ctx, version="0.0.0")
    path = tmp_path / "nested" / "manifest.json"

    save_manifest(manifest, path)

    assert load_manifest(path) == manifest

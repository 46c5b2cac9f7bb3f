# src/irisrap/core/manifest.py
"""
Manifest v1: registro de rastreabilidade de uma execução do irisrap.

O `manifest.json` consolida, ao final de cada run (com sucesso ou não):
    - run: run_id, started_at, finished_at, irisrap_version, status
    - inputs: config_hash, origem do dataset, sha256 (quando lido de arquivo)
    - stages: StageResult de cada estágio, em ordem de execução
    - warnings: warnings não fatais por estágio
    - events: Event Log estruturado do RunContext

Invariantes:
    - A serialização é determinística para o mesmo conteúdo (`sort_keys`)
    - Timestamps são ISO 8601 em UTC
    - O manifest não altera o RunContext

Limites explícitos:
    - Não emite eventos
    - Não aplica versionamento ou migração de schema
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from .run_context import RunContext
from .types import StageStatus


def _iso(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat()


def build_manifest(
    ctx: RunContext,
    *,
    version: str,
    finished_at: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Monta o dicionário serializável do manifest a partir do RunContext."""
    failed = any(r.status == StageStatus.FAILED for r in ctx.results.values())
    finished_at = finished_at or datetime.now(timezone.utc)

    return {
        "manifest_version": "1.0",
        "run": {
            "run_id": ctx.run_id,
            "started_at": _iso(ctx.created_at),
            "finished_at": _iso(finished_at),
            "irisrap_version": version,
            "status": StageStatus.FAILED.value if failed else StageStatus.SUCCESS.value,
        },
        "inputs": dict(ctx.meta.get("inputs") or {}),
        "stages": {stage_id: r.to_dict() for stage_id, r in ctx.results.items()},
        "warnings": {k: list(v) for k, v in ctx.warnings.items()},
        "events": [dict(e) for e in ctx.events],
    }


def save_manifest(manifest: Dict[str, Any], path: Path) -> None:
    """Persiste o manifest em JSON (chaves ordenadas, indentado)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(manifest, ensure_ascii=False, indent=2, sort_keys=True, default=str),
        encoding="utf-8",
    )


def load_manifest(path: Path) -> Dict[str, Any]:
    """Carrega um manifest persistido."""
    return json.loads(path.read_text(encoding="utf-8"))

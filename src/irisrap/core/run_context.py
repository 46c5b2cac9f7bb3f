# src/irisrap/core/run_context.py
"""
RunContext: contexto de execução de uma run do pipeline do irisrap.

O RunContext é o meio pelo qual o runner:
- guarda artefatos intermediários (tabela bruta, limpa, sumário, gráfico)
- registra logs estruturados de execução (eventos)
- coleta warnings não fatais por estágio
- acumula o `StageResult` de cada estágio

Princípios:
- Isolamento por execução (cada run possui seu próprio contexto)
- As funções de análise (`clean`, `summarize`, `plot`) não conhecem o
  RunContext: o log é responsabilidade exclusiva do runner
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List

from .types import StageResult


@dataclass
class RunContext:
    """
    Contexto de execução compartilhado de uma run.

    Campos:
    - run_id: identificador único da execução
    - created_at: timestamp UTC de criação do contexto
    - config: configuração efetiva (defaults + local deep-merge)
    - meta: metadados da execução (ex.: run_dir, config_hash)
    - warnings: warnings por stage_id
    - events: log estruturado de eventos
    - results: StageResult por stage_id, em ordem de execução
    """

    run_id: str
    created_at: datetime
    config: Dict[str, Any]
    meta: Dict[str, Any] = field(default_factory=dict)

    warnings: Dict[str, List[str]] = field(default_factory=dict)
    events: List[Dict[str, Any]] = field(default_factory=list)
    results: Dict[str, StageResult] = field(default_factory=dict)

    _artifacts: Dict[str, Any] = field(default_factory=dict, repr=False)

    # -----------------------------
    # Artifact store
    # -----------------------------
    def set_artifact(self, key: str, value: Any) -> None:
        self._artifacts[key] = value

    def has_artifact(self, key: str) -> bool:
        return key in self._artifacts

    def get_artifact(self, key: str) -> Any:
        if key not in self._artifacts:
            raise KeyError(key)
        return self._artifacts[key]

    # -----------------------------
    # Stage results
    # -----------------------------
    def record(self, result: StageResult) -> None:
        self.results[result.stage_id] = result

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, step_id: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "step_id": step_id,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, step_id: str, message: str) -> None:
        if step_id not in self.warnings:
            self.warnings[step_id] = []
        self.warnings[step_id].append(message)

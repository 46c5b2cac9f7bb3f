# src/irisrap/core/types.py
"""
Tipos canônicos dos estágios do pipeline do irisrap.

O pipeline é uma sequência linear e fixa de estágios (load → clean →
summarize/plot → report). Cada estágio produz um `StageResult` imutável,
que é consolidado no `manifest.json` da execução.

Invariantes:
    - Enums possuem valores textuais estáveis (serializáveis em JSON)
    - `StageResult` é imutável
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict


class StageStatus(str, Enum):
    """Estado final de um estágio."""
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class StageResult:
    """
    Resultado imutável da execução de um estágio.

    Campos:
        - stage_id: identificador do estágio (ex.: `analysis.clean`)
        - status: estado final
        - summary: resumo textual curto
        - metrics: contagens/valores numéricos produzidos
        - artifacts: caminhos relativos ao run_dir de arquivos gerados
    """
    stage_id: str
    status: StageStatus
    summary: str
    metrics: Dict[str, Any] = field(default_factory=dict)
    artifacts: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stage_id": self.stage_id,
            "status": self.status.value,
            "summary": self.summary,
            "metrics": dict(self.metrics),
            "artifacts": dict(self.artifacts),
        }

"""
irisrap: Exceções canônicas (v1)

Taxonomia de erros do núcleo de análise (clean / summarize / plot) e do
schema declarado das tabelas.

Regras:
- Erros são locais, síncronos e não recuperáveis por retry.
- Cada exceção carrega uma mensagem curta e `details` estruturados
  (serializáveis) para diagnóstico e para o `manifest.json`.
- Nenhuma decisão implícita: o núcleo não mascara nem registra erros;
  apenas os levanta para o chamador.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class IrisRapError(Exception):
    """Base para exceções do irisrap.

    Importante:
    - `details` contém apenas dados estruturados
    - `hint` sugere onde corrigir (opcional)
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[Dict[str, Any]] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = dict(details or {})
        self.hint = hint

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Representação serializável do erro."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "details": dict(self.details),
            "hint": self.hint,
        }


# ---------------------------------------------------------------------------
# Pré-condições de entrada
# ---------------------------------------------------------------------------

class PreconditionError(IrisRapError):
    """Entrada não é tabular, ou não possui as colunas declaradas no schema."""


# ---------------------------------------------------------------------------
# Estatísticas indefinidas
# ---------------------------------------------------------------------------

class UndefinedStatisticError(IrisRapError):
    """Estatística sem observações suficientes.

    Casos:
    - imputação de uma coluna sem nenhum valor observado após o filtro
    - desvio padrão amostral de grupo com uma única observação, quando o
      chamador pede `on_undefined="raise"`
    """


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

class SchemaValidationError(IrisRapError):
    """Schema declarado (ex.: seção `schema:` da config) é estruturalmente inválido."""


def missing_columns(
    *,
    columns: list,
    operation: str,
) -> PreconditionError:
    return PreconditionError(
        f"missing required column(s) for {operation}: {', '.join(columns)}",
        details={"missing_columns": list(columns), "operation": operation},
        hint="Load a table with the declared schema or pass a schema matching the table.",
    )


def not_a_table(*, received: Any, operation: str) -> PreconditionError:
    return PreconditionError(
        f"{operation} expects a pandas DataFrame, got {type(received).__name__}",
        details={"received_type": type(received).__name__, "operation": operation},
    )

# src/irisrap/core/config/merge.py
"""
Deep-merge de configuração (defaults + overrides locais).

Política de merge (v1):
    - dict + dict → merge recursivo por chave
    - list        → sobrescrita total (ex.: `analysis.categories`)
    - None        → sobrescreve ou é sobrescrito sem conflito de tipo
    - escalar     → sobrescrita direta
    - conflito de tipos → `ConfigTypeConflictError`

O merge é puramente funcional: nenhum dos inputs é mutado.
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Combina `base` e `override` em um novo dicionário.

    `None` é tratado como "valor não definido": em `defaults.yaml` chaves
    como `analysis.categories: null` podem receber uma lista no override
    local, e vice-versa, sem que isso seja considerado conflito de tipo.

    Args:
        base: configuração base (defaults).
        override: overrides explícitos.

    Returns:
        Dict[str, Any]: nova configuração resultante.

    Raises:
        ConfigTypeConflictError: se uma mesma chave tiver tipos incompatíveis.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            "Deep-merge requires dicts at the root level, got: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[str, Any] = deepcopy(base)

    for key, override_value in override.items():
        if key not in result:
            result[key] = deepcopy(override_value)
            continue

        base_value = result[key]

        if isinstance(base_value, dict) and isinstance(override_value, dict):
            result[key] = deep_merge(base_value, override_value)
            continue

        # list -> sobrescrita total
        if isinstance(override_value, list):
            result[key] = deepcopy(override_value)
            continue

        if base_value is None or override_value is None:
            result[key] = deepcopy(override_value)
            continue

        if type(base_value) is not type(override_value):
            raise ConfigTypeConflictError(
                f"Type conflict for key '{key}': "
                f"{type(base_value).__name__} vs {type(override_value).__name__}"
            )

        result[key] = deepcopy(override_value)

    return result

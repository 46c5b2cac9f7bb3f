# src/irisrap/core/config/loader.py
"""
Loader de configuração do irisrap.

A configuração efetiva é resolvida a partir de:
    - um arquivo de defaults (obrigatório), tipicamente
      `config/config.defaults.yaml`
    - um arquivo local de overrides (opcional), tipicamente
      `config/config.local.yaml`

Ambos são YAML (`.yaml`/`.yml`). Um arquivo vazio vale `{}`.

Limites explícitos:
    - Não valida semântica (schema, categorias, política de NaN)
    - Não persiste a configuração nem o hash
"""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml  # PyYAML

from .errors import (
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .merge import deep_merge


YAML_SUFFIXES = (".yaml", ".yml")


def _read_yaml(path: Path, *, required: bool) -> Optional[Dict[str, Any]]:
    if not path.exists():
        if required:
            raise DefaultsNotFoundError(f"Config file not found: {path}")
        return None

    if path.suffix.lower() not in YAML_SUFFIXES:
        raise UnsupportedConfigFormatError(
            f"Unsupported config format: {path.suffix or '(none)'} (expected one of {YAML_SUFFIXES})"
        )

    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(f"{path.name}: config root must be a mapping, got {type(data).__name__}")
    return data


def load_config(
    *,
    defaults_path: str,
    local_path: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Carrega os defaults e aplica por cima o override local, se existir.

    Raises:
        DefaultsNotFoundError: arquivo de defaults ausente.
        UnsupportedConfigFormatError: extensão diferente de `.yaml`/`.yml`.
        InvalidConfigRootTypeError: raiz do YAML não é um mapeamento.
        ConfigTypeConflictError: conflito de tipos no merge.
    """
    effective = _read_yaml(Path(defaults_path), required=True)

    if local_path is not None:
        local = _read_yaml(Path(local_path), required=False)
        if local is not None:
            effective = deep_merge(effective, local)

    return effective

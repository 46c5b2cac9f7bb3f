# src/irisrap/core/config/hashing.py
"""
Hash da configuração efetiva, gravado no `manifest.json` e no relatório.

Duas runs com o mesmo hash partiram da mesma configuração, qualquer que
seja a ordem das chaves nos arquivos YAML.
"""

import hashlib
import json
from typing import Any, Dict


def compute_config_hash(config: Dict[str, Any]) -> str:
    """SHA-256 (hex) do JSON canônico da configuração.

    Escalares que o YAML produz e o JSON não conhece (ex.: datas) entram
    no hash pela sua forma textual.

    Raises:
        TypeError: se `config` não for um dicionário.
    """
    if not isinstance(config, dict):
        raise TypeError(f"Config to hash must be a dict, got: {type(config).__name__}")

    canonical = json.dumps(config, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()

# src/irisrap/core/config/__init__.py
"""
Camada de configuração do irisrap.

Responsável por carregar, mesclar e identificar (hash) a configuração
de uma execução do pipeline de análise do iris.

A configuração é:
    - declarativa (YAML ou JSON)
    - determinística (mesma entrada, mesma configuração final)
    - separada da lógica de análise

Limites explícitos:
    - Não valida a semântica de `schema` ou `analysis` (isso é feito
      por `irisrap.core.schema` e pelo runner)
    - Não executa o pipeline
"""

from .errors import (  # noqa: F401
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash  # noqa: F401
from .loader import load_config  # noqa: F401
from .merge import deep_merge  # noqa: F401

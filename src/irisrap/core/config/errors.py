# src/irisrap/core/config/errors.py
"""
Exceções da camada de configuração do irisrap.

Representam violações estruturais da configuração, nunca erros de
análise. Todas herdam de `ConfigError`, o que permite ao CLI capturá-las
de forma genérica e encerrar a execução com mensagem clara.

Invariantes:
    - Nenhuma exceção aqui representa erro de domínio (limpeza,
      sumarização ou gráfico)
    - Não há fallback: erro de configuração interrompe a execução
"""


class ConfigError(Exception):
    """Exceção base para erros de configuração."""


class DefaultsNotFoundError(ConfigError):
    """
    Arquivo de configuração base (defaults) não encontrado.

    O arquivo de defaults é obrigatório; nenhum default é inventado
    quando ele está ausente.
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Extensão de arquivo de configuração não suportada.

    Formatos aceitos: `.yaml` e `.yml`. O formato nunca é
    inferido pelo conteúdo.
    """


class InvalidConfigRootTypeError(ConfigError):
    """O conteúdo raiz da configuração não é um mapeamento (`dict`)."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge.

    Exemplo:
        - base:     {"analysis": {"on_undefined": "nan"}}
        - override: {"analysis": "raise"}

    Nenhum merge parcial é produzido em caso de conflito.
    """

# src/irisrap/core/__init__.py
"""
Core do irisrap.

Reúne as peças independentes de análise:
    - schema       → colunas declaradas (categoria + medidas)
    - errors       → taxonomia de exceções
    - config       → carregamento, merge e hashing de configuração
    - run_context  → contexto de execução e log estruturado
    - types        → StageStatus / StageResult

Limites explícitos:
    - Não contém as transformações de dados (ver `irisrap.analysis`)
    - Não realiza I/O de dados
"""

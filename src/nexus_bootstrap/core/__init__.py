"""
Core do nexus-bootstrap.

Este pacote reúne o motor de provisionamento, independente das
ferramentas concretas (registry, docker, dotnet) que os Steps invocam.

Componentes principais:
    - config     → resolução de configuração (merge, hashing, endpoints)
    - pipeline   → protocolo de Step, tipos e contexto de execução
    - engine     → montagem (Builder) e execução (Executor) do pipeline
    - errors     → payload canônico de erro
    - exceptions → taxonomia de exceções tipadas

Limites explícitos:
    - Não contém retry, rollback ou execução paralela
    - Não persiste estado entre execuções
"""

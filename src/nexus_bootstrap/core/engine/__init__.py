"""
Engine do nexus-bootstrap.

Este pacote contém a montagem e a execução do pipeline de provisionamento.

Componentes principais:
    - builder  → traduz a descrição de solução em um Pipeline ordenado
    - executor → executa o Pipeline em sequência, com fail-fast

Princípios fundamentais:
    - Montagem e execução são responsabilidades separadas
    - A ordem de execução é exatamente a ordem montada
    - Nenhum rollback: efeitos de Steps concluídos permanecem após falha

Invariantes:
    - Cada Step é executado no máximo uma vez por run
    - Nenhum Step executa após o primeiro FAILED
"""

from .builder import PREFIX_LENGTH, SUFFIX_LENGTH, Collaborators, Pipeline, PipelineBuilder
from .executor import ExecutionState, PipelineExecutor, RunResult

__all__ = [
    "PREFIX_LENGTH",
    "SUFFIX_LENGTH",
    "Collaborators",
    "ExecutionState",
    "Pipeline",
    "PipelineBuilder",
    "PipelineExecutor",
    "RunResult",
]

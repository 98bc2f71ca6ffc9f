"""
# Pipeline Core (nexus-bootstrap)

Este pacote define os **contratos canônicos** e as **estruturas fundamentais**
do pipeline de provisionamento.

## Componentes

- **types**
  - `RunMode`: modo de execução da run (local, containerizado)
  - `Outcome`: último desfecho registrado no contexto
  - `StepStatus`: estados finais de execução de um Step
  - `StepKind`: classificação semântica de Steps
  - `StepResult`: resultado imutável da execução de um Step
  - `PolicyRecord`: policy criada no service registry

- **step**
  - `Step` (Protocol): `applicable(run_mode)` + `run(ctx)`

- **context**
  - `ExecutionContext`: credenciais, policies, desfecho, log e warnings

## Princípios Fundamentais

- Steps **não conhecem** o Builder nem o Executor
- Comunicação entre Steps ocorre **apenas via ExecutionContext**
- Coleções do contexto são **append-only**
"""

from .context import ContextMutationError, ExecutionContext
from .step import Step
from .types import Outcome, PolicyRecord, RunMode, StepKind, StepResult, StepStatus

__all__ = [
    "ContextMutationError",
    "ExecutionContext",
    "Outcome",
    "PolicyRecord",
    "RunMode",
    "Step",
    "StepKind",
    "StepResult",
    "StepStatus",
]

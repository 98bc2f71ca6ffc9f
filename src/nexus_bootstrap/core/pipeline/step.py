# src/nexus_bootstrap/core/pipeline/step.py
"""
Contrato canônico de Step do nexus-bootstrap.

Um Step é a menor unidade executável do pipeline de provisionamento:
uma operação autocontida (chamar o service registry, reescrever um
arquivo de configuração, invocar uma ferramenta externa) acompanhada
de um predicado que diz se ela se aplica ao modo da run.

Responsabilidades de um Step:
    - declarar a quais modos de execução se aplica
    - executar sua unidade de trabalho lendo apenas do contexto e
      de colaboradores injetados na construção
    - escrever resultados (tokens, policies) de volta no contexto
    - produzir um StepResult imutável

Princípios fundamentais:
    - Steps não conhecem o Executor nem o Builder
    - Steps não controlam a ordem de execução
    - Conformidade é garantida por duck typing (@runtime_checkable)

Limites explícitos:
    - Não define retry nem rollback
    - Não decide políticas de execução (fail-fast, skip)
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .context import ExecutionContext
from .types import RunMode, StepKind, StepResult


@runtime_checkable
class Step(Protocol):
    """
    Contrato canônico de um Step de provisionamento.

    Atributos obrigatórios:
        - id: identificador estável, usado em diagnósticos e relatório
        - kind: classificação semântica (`StepKind`)

    Métodos obrigatórios:
        - applicable(run_mode): predicado puro avaliado pelo Executor
        - run(ctx): executa a unidade de trabalho e devolve StepResult

    Decisões arquiteturais:
        - Steps são stateless entre runs; configuração necessária para
          a chamada externa é capturada na construção
        - O protocolo não impõe herança, apenas conformidade estrutural

    Invariantes:
        - `run` só é chamado quando `applicable` retorna True
        - `run` é chamado no máximo uma vez por execução
    """
    id: str
    kind: StepKind

    def applicable(self, run_mode: RunMode) -> bool:
        """Indica se o Step se aplica ao modo da run."""
        ...

    def run(self, ctx: ExecutionContext) -> StepResult:
        """Executa o Step uma única vez usando o contexto compartilhado."""
        ...

# src/nexus_bootstrap/core/pipeline/types.py
"""
Tipos canônicos do pipeline de provisionamento do nexus-bootstrap.

Este módulo define as estruturas e enums fundamentais que padronizam
a comunicação entre Steps, Executor, Builder e relatório de execução.

Os tipos aqui definidos representam:
    - o modo de execução da run (local ou containerizado)
    - o último desfecho registrado no contexto
    - estados finais de execução de Steps
    - classificação semântica de Steps
    - resultado imutável produzido por um Step
    - registro de policy criada no service registry

Princípios fundamentais:
    - Tipos são estáveis e serializáveis
    - Nenhuma lógica de execução vive neste módulo

Invariantes:
    - Enums possuem valores textuais canônicos
    - StepResult e PolicyRecord são imutáveis

Limites explícitos:
    - Não executa Steps
    - Não monta pipelines
    - Não realiza I/O
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class RunMode(str, Enum):
    """
    Modo de execução de uma run de provisionamento.

    O modo é fixado na criação do contexto e nunca muda durante a run.
    Cada Step declara, via predicado, a quais modos se aplica.

    Modos definidos:
        - LOCAL: serviços executam como processos no host; infraestrutura
          (registry, banco, telemetria) sobe via compose
        - CONTAINERIZED: serviços e infraestrutura executam em containers
    """
    LOCAL = "local"
    CONTAINERIZED = "containerized"


class Outcome(str, Enum):
    """
    Último desfecho registrado no contexto de execução.

    `PENDING` é o valor inicial; cada Step aplicável, ao terminar,
    move o valor para `SUCCESS` ou `FAILURE`. É a única fonte de
    verdade para a continuidade do pipeline.
    """
    PENDING = "pending"
    SUCCESS = "success"
    FAILURE = "failure"


class StepKind(str, Enum):
    """
    Tipos semânticos de Steps no pipeline.

    Valores puramente informativos: o Executor não decide nada com base
    no `kind`, que existe apenas para relatório e leitura.

    Tipos definidos:
        - INFRASTRUCTURE: rede, certificados, ferramentas externas
        - REGISTRY: registro no service registry (tokens globais)
        - COMPONENT: componentes fixos do framework (gateway, dashboard)
        - SERVICE: serviços declarados pela solução
        - ENVIRONMENT: regeneração de arquivos de ambiente e compose
    """
    INFRASTRUCTURE = "infrastructure"
    REGISTRY = "registry"
    COMPONENT = "component"
    SERVICE = "service"
    ENVIRONMENT = "environment"


class StepStatus(str, Enum):
    """
    Estados finais possíveis da execução de um Step.

    Estados definidos:
        - SUCCESS: execução concluída com sucesso
        - SKIPPED: sucesso sem efeito (recurso opcional ausente) ou
          Step não aplicável ao modo da run
        - FAILED: execução interrompida por erro; aborta o pipeline

    Invariantes:
        - O status final de um Step é exatamente um dos valores definidos
        - Apenas FAILED interrompe o pipeline
    """
    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class PolicyRecord:
    """Policy criada no service registry (id + nome), usada no relatório."""
    id: str
    name: str


@dataclass(frozen=True)
class StepResult:
    """
    Resultado imutável da execução de um Step.

    Campos:
        - step_id: identificador do Step
        - kind: tipo semântico do Step
        - status: estado final da execução
        - summary: resumo textual
        - warnings: avisos não fatais (ex.: arquivo opcional ausente)
        - artifacts: referências a artefatos produzidos (ex.: caminhos)
        - payload: dados adicionais (ex.: `error` em caso de falha)

    Invariantes:
        - Uma instância nunca é alterada após criada; enriquecimento
          é feito via `dataclasses.replace`
    """
    step_id: str
    kind: StepKind
    status: StepStatus
    summary: str
    warnings: List[str] = field(default_factory=list)
    artifacts: Dict[str, str] = field(default_factory=dict)
    payload: Dict[str, Any] = field(default_factory=dict)

    @property
    def failed(self) -> bool:
        return self.status == StepStatus.FAILED

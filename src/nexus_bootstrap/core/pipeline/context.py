# src/nexus_bootstrap/core/pipeline/context.py
"""
Contexto de execução compartilhado do pipeline de provisionamento.

Este módulo define o `ExecutionContext`, a estrutura canônica passada a
todos os Steps durante uma run do nexus-bootstrap.

O ExecutionContext é o único meio permitido de:
    - ler o modo de execução da run
    - publicar o token global obtido do service registry
    - acumular tokens emitidos por serviço
    - acumular policies criadas (para o relatório final)
    - registrar o último desfecho de Step
    - registrar eventos de log estruturados e warnings por Step

Princípios fundamentais:
    - Um contexto por invocação; nunca persistido
    - Coleções são append-only e preservam a ordem de criação
    - Mutação só é permitida enquanto um Step está em execução

Invariantes:
    - `global_token` é escrito no máximo uma vez
    - `service_tokens` e `policy_records` nunca perdem nem reordenam entradas
    - Logs sempre incluem `run_id` e `step_id`

Limites explícitos:
    - Não executa Steps
    - Não decide políticas de execução
    - Não persiste dados
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .types import Outcome, PolicyRecord, RunMode


class ContextMutationError(RuntimeError):
    """
    Exceção levantada quando o contexto é mutado fora das regras.

    Ocorre quando:
        - uma mutação acontece sem Step ativo
        - o token global é escrito pela segunda vez
        - um token de serviço já emitido é reescrito
    """


@dataclass
class ExecutionContext:
    """
    Contexto de execução compartilhado de uma run de provisionamento.

    O contexto consolida:
        - identidade da run (run_id, created_at)
        - modo de execução (`run_mode`), fixo para a run
        - configuração efetiva resolvida
        - credenciais acumuladas (token global, tokens por serviço)
        - policies criadas, em ordem de criação
        - último desfecho (`last_outcome`)
        - eventos de log e warnings por Step

    Decisões arquiteturais:
        - O Executor abre e fecha a janela de mutação de cada Step
          (`begin_step` / `end_step`); fora dela, mutadores falham
        - Acesso de leitura às coleções é feito por visões imutáveis
        - Log e warnings não são estado de provisionamento e podem
          ser escritos também pelo Executor

    Limites explícitos:
        - Não executa Steps
        - Não valida semântica de tokens ou policies
        - Não persiste dados automaticamente
    """
    run_id: str
    run_mode: RunMode
    config: Dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    meta: Dict[str, Any] = field(default_factory=dict)

    last_outcome: Outcome = field(default=Outcome.PENDING, init=False)
    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    _global_token: Optional[str] = field(default=None, init=False, repr=False)
    _service_tokens: Dict[str, str] = field(default_factory=dict, init=False, repr=False)
    _policy_records: List[PolicyRecord] = field(default_factory=list, init=False, repr=False)
    _current_step: Optional[str] = field(default=None, init=False, repr=False)

    # -----------------------------
    # Janela de execução
    # -----------------------------
    @property
    def current_step(self) -> Optional[str]:
        return self._current_step

    def begin_step(self, step_id: str) -> None:
        if self._current_step is not None:
            raise ContextMutationError(
                f"Step '{step_id}' iniciado enquanto '{self._current_step}' ainda executa"
            )
        self._current_step = step_id

    def end_step(self) -> None:
        self._current_step = None

    def _require_active_step(self, operation: str) -> None:
        if self._current_step is None:
            raise ContextMutationError(f"{operation} exige um Step em execução")

    # -----------------------------
    # Credenciais
    # -----------------------------
    @property
    def global_token(self) -> Optional[str]:
        return self._global_token

    def set_global_token(self, token: str) -> None:
        self._require_active_step("set_global_token")
        if self._global_token is not None:
            raise ContextMutationError("global_token já foi definido nesta run")
        self._global_token = token

    @property
    def service_tokens(self) -> Mapping[str, str]:
        return MappingProxyType(self._service_tokens)

    def add_service_token(self, service_name: str, token: str) -> None:
        self._require_active_step("add_service_token")
        if service_name in self._service_tokens:
            raise ContextMutationError(f"Token já emitido para o serviço '{service_name}'")
        self._service_tokens[service_name] = token

    # -----------------------------
    # Policies
    # -----------------------------
    @property
    def policy_records(self) -> Tuple[PolicyRecord, ...]:
        return tuple(self._policy_records)

    def add_policy_record(self, record: PolicyRecord) -> None:
        self._require_active_step("add_policy_record")
        self._policy_records.append(record)

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, step_id: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "step_id": step_id,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, step_id: str, message: str) -> None:
        if step_id not in self.warnings:
            self.warnings[step_id] = []
        self.warnings[step_id].append(message)

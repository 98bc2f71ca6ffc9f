# src/nexus_bootstrap/core/engine/executor.py
"""
Executor do pipeline de provisionamento do nexus-bootstrap.

Política de execução (fail-fast, sem rollback):
- Steps executam estritamente em sequência, na ordem do Pipeline.
- Steps não aplicáveis ao modo da run são pulados sem chamar `run` e
  sem alterar `ctx.last_outcome`.
- FAILED encerra imediatamente a execução; nenhum Step posterior roda.
- SUCCESS e SKIPPED (sucesso sem efeito) movem `last_outcome` para SUCCESS.
- Exceções não tratadas (inclusive em `applicable` e na abertura da
  janela do Step) são capturadas na fronteira do Step, registradas no
  log do contexto e convertidas em FAILED com payload estruturado.

O Executor nunca inspeciona o detalhe do erro: apenas o status.
Efeitos externos de Steps já concluídos permanecem após uma falha.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional

from nexus_bootstrap.core.errors import engine_configuration_error, unexpected_step_error
from nexus_bootstrap.core.pipeline.context import ExecutionContext
from nexus_bootstrap.core.pipeline.step import Step
from nexus_bootstrap.core.pipeline.types import Outcome, StepKind, StepResult, StepStatus

from .builder import Pipeline

NOT_APPLICABLE = "run_mode"


def _not_applicable(result: StepResult) -> bool:
    return result.status == StepStatus.SKIPPED and result.payload.get("reason") == NOT_APPLICABLE


class ExecutionState(str, Enum):
    """Estados do Executor. ABORTED e COMPLETED são terminais."""
    RUNNING = "running"
    ABORTED = "aborted"
    COMPLETED = "completed"


@dataclass(frozen=True)
class RunResult:
    """Resultado agregado de uma execução do pipeline."""

    ctx: ExecutionContext
    state: ExecutionState
    steps: List[StepResult] = field(default_factory=list)
    failed_step: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.state == ExecutionState.COMPLETED and self.ctx.last_outcome != Outcome.FAILURE

    @property
    def last_completed_step(self) -> Optional[str]:
        """Último Step que de fato executou sem falhar (pulos por modo não contam)."""
        done = [r.step_id for r in self.steps if r.status != StepStatus.FAILED and not _not_applicable(r)]
        return done[-1] if done else None


class PipelineExecutor:
    """Executor canônico do nexus-bootstrap (sequencial, fail-fast)."""

    def __init__(self, pipeline: Pipeline):
        self.pipeline = pipeline

    def _mk_result(self, *, step: Step, status: StepStatus, summary: str, payload=None) -> StepResult:
        kind = getattr(step, "kind", None) or StepKind.INFRASTRUCTURE
        return StepResult(
            step_id=step.id,
            kind=kind,
            status=status,
            summary=summary,
            payload=dict(payload or {}),
        )

    def _merge_ctx_warnings(self, ctx: ExecutionContext, result: StepResult) -> StepResult:
        """Retorna uma NOVA instância com warnings do contexto (sem duplicatas)."""
        merged: List[str] = []
        for msg in list(result.warnings) + list(ctx.warnings.get(result.step_id, [])):
            if msg not in merged:
                merged.append(msg)
        return replace(result, warnings=merged)

    def _unexpected_failure(self, step: Step, ctx: ExecutionContext, exc: Exception) -> StepResult:
        error = unexpected_step_error(
            step=step.id,
            exc_type=exc.__class__.__name__,
            exc_message=str(exc),
        )
        ctx.log(
            step_id=step.id,
            level="ERROR",
            message=error.message,
            exc_type=exc.__class__.__name__,
            exc_message=str(exc),
        )
        return self._mk_result(
            step=step,
            status=StepStatus.FAILED,
            summary=error.message,
            payload={"error": error.to_dict()},
        )

    def _run_step(self, step: Step, ctx: ExecutionContext) -> StepResult:
        try:
            ctx.begin_step(step.id)
            result = step.run(ctx)
            if not isinstance(result, StepResult):
                error = engine_configuration_error(
                    details={
                        "step": step.id,
                        "expected": "StepResult",
                        "received": type(result).__name__,
                    }
                )
                ctx.log(step_id=step.id, level="ERROR", message=error.message)
                return self._mk_result(
                    step=step,
                    status=StepStatus.FAILED,
                    summary=error.message,
                    payload={"error": error.to_dict()},
                )
            return self._merge_ctx_warnings(ctx, result)

        except Exception as e:
            return self._unexpected_failure(step, ctx, e)
        finally:
            ctx.end_step()

    def _skip_or_run(self, step: Step, ctx: ExecutionContext) -> StepResult:
        try:
            applicable = step.applicable(ctx.run_mode)
        except Exception as e:
            return self._unexpected_failure(step, ctx, e)

        if not applicable:
            ctx.log(
                step_id=step.id,
                level="INFO",
                message="skipped: not applicable",
                run_mode=ctx.run_mode.value,
            )
            return self._mk_result(
                step=step,
                status=StepStatus.SKIPPED,
                summary=f"not applicable to run mode '{ctx.run_mode.value}'",
                payload={"reason": NOT_APPLICABLE},
            )

        ctx.log(step_id=step.id, level="INFO", message="started")
        return self._run_step(step, ctx)

    def execute(self, ctx: ExecutionContext) -> RunResult:
        results: List[StepResult] = []

        for step in self.pipeline:
            result = self._skip_or_run(step, ctx)
            results.append(result)
            if _not_applicable(result):
                continue

            if result.status == StepStatus.FAILED:
                ctx.last_outcome = Outcome.FAILURE
                ctx.log(step_id=step.id, level="ERROR", message="failed", summary=result.summary)
                return RunResult(
                    ctx=ctx,
                    state=ExecutionState.ABORTED,
                    steps=results,
                    failed_step=step.id,
                )

            ctx.last_outcome = Outcome.SUCCESS
            ctx.log(step_id=step.id, level="INFO", message=result.status.value, summary=result.summary)

        return RunResult(ctx=ctx, state=ExecutionState.COMPLETED, steps=results)

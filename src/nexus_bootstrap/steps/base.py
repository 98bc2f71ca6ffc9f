"""Base comum dos Steps de provisionamento.

Responsabilidades:
- predicado de aplicabilidade a partir de `run_modes`
- fronteira do Step: exceções tipadas viram StepResult
    - OptionalResourceAbsent → SKIPPED (sucesso sem efeito)
    - demais NexusException  → FAILED com payload["error"]
- helpers de resultado para as subclasses

Exceções não tipadas atravessam `run` e são convertidas pelo Executor.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, List, Optional

from nexus_bootstrap.core.errors import from_exception
from nexus_bootstrap.core.exceptions import NexusException, OptionalResourceAbsent
from nexus_bootstrap.core.pipeline.context import ExecutionContext
from nexus_bootstrap.core.pipeline.types import RunMode, StepKind, StepResult, StepStatus

ALL_MODES: FrozenSet[RunMode] = frozenset(RunMode)


class ProvisioningStep:
    """Step concreto; subclasses implementam `execute`."""

    id: str = "step"
    kind: StepKind = StepKind.INFRASTRUCTURE
    run_modes: FrozenSet[RunMode] = ALL_MODES

    def applicable(self, run_mode: RunMode) -> bool:
        return run_mode in self.run_modes

    def execute(self, ctx: ExecutionContext) -> StepResult:  # pragma: no cover
        raise NotImplementedError

    def run(self, ctx: ExecutionContext) -> StepResult:
        try:
            return self.execute(ctx)
        except OptionalResourceAbsent as e:
            ctx.log(step_id=self.id, level="INFO", message=e.message, details=dict(e.details))
            return self._skipped(e.message)
        except NexusException as e:
            error = from_exception(e, step=self.id)
            ctx.log(step_id=self.id, level="ERROR", message=error.message, error_type=error.type)
            return StepResult(
                step_id=self.id,
                kind=self.kind,
                status=StepStatus.FAILED,
                summary=error.message,
                payload={"error": error.to_dict()},
            )

    # -----------------------------
    # Helpers de resultado
    # -----------------------------
    def _success(
        self,
        summary: str,
        *,
        artifacts: Optional[Dict[str, str]] = None,
        warnings: Optional[Iterable[str]] = None,
        payload: Optional[Dict] = None,
    ) -> StepResult:
        return StepResult(
            step_id=self.id,
            kind=self.kind,
            status=StepStatus.SUCCESS,
            summary=summary,
            warnings=list(warnings or []),
            artifacts=dict(artifacts or {}),
            payload=dict(payload or {}),
        )

    def _skipped(self, summary: str, warnings: Optional[List[str]] = None) -> StepResult:
        return StepResult(
            step_id=self.id,
            kind=self.kind,
            status=StepStatus.SKIPPED,
            summary=summary,
            warnings=list(warnings or []),
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"

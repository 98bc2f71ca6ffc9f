"""
nexus-bootstrap: Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros do nexus-bootstrap.
Erros de Step são registrados no `StepResult.payload["error"]` e devem ser:

- explícitos
- serializáveis
- acionáveis (com dica ao operador)

O Executor nunca inspeciona o detalhe do erro: apenas o status do Step.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from .exceptions import (
    ConfigSchemaMismatch,
    ExternalServiceFailure,
    MissingRequiredResource,
    NexusException,
    OptionalResourceAbsent,
)


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NexusErrorPayload:
    """
    Payload canônico de erro do nexus-bootstrap.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

MISSING_REQUIRED_RESOURCE = "MISSING_REQUIRED_RESOURCE"
OPTIONAL_RESOURCE_ABSENT = "OPTIONAL_RESOURCE_ABSENT"
CONFIG_SCHEMA_MISMATCH = "CONFIG_SCHEMA_MISMATCH"
EXTERNAL_SERVICE_FAILURE = "EXTERNAL_SERVICE_FAILURE"

# Engine / Execução
UNEXPECTED_STEP_ERROR = "UNEXPECTED_STEP_ERROR"
ENGINE_CONFIGURATION_ERROR = "ENGINE_CONFIGURATION_ERROR"

_TYPE_BY_EXCEPTION = (
    (MissingRequiredResource, MISSING_REQUIRED_RESOURCE),
    (OptionalResourceAbsent, OPTIONAL_RESOURCE_ABSENT),
    (ConfigSchemaMismatch, CONFIG_SCHEMA_MISMATCH),
    (ExternalServiceFailure, EXTERNAL_SERVICE_FAILURE),
)


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def from_exception(exc: NexusException, *, step: Optional[str] = None) -> NexusErrorPayload:
    """Converte uma exceção tipada no payload canônico correspondente."""
    error_type = ENGINE_CONFIGURATION_ERROR
    for exc_cls, code in _TYPE_BY_EXCEPTION:
        if isinstance(exc, exc_cls):
            error_type = code
            break

    details = dict(exc.details or {})
    details.setdefault("step", step)
    details.setdefault("exception_class", exc.__class__.__name__)
    return NexusErrorPayload(
        type=error_type,
        message=exc.message,
        details=details,
        hint=exc.hint,
    )


def unexpected_step_error(
    *,
    step: Optional[str] = None,
    exc_type: Optional[str] = None,
    exc_message: Optional[str] = None,
    hint: str = "Verifique o log da run. O ambiente pode estar parcialmente provisionado; nenhum rollback é aplicado.",
) -> NexusErrorPayload:
    return NexusErrorPayload(
        type=UNEXPECTED_STEP_ERROR,
        message="Falha inesperada durante a execução do Step",
        details={
            "step": step,
            "exc_type": exc_type,
            "exc_message": exc_message,
        },
        hint=hint,
    )


def engine_configuration_error(
    *,
    message: str = "Step retornou tipo inválido",
    details: Optional[Dict[str, Any]] = None,
    hint: str = "Ajuste o Step para retornar StepResult",
) -> NexusErrorPayload:
    return NexusErrorPayload(
        type=ENGINE_CONFIGURATION_ERROR,
        message=message,
        details=details or {},
        hint=hint,
    )

"""
nexus-bootstrap: Canonical Exceptions (v1)

Este módulo define exceções tipadas internas do nexus-bootstrap.

Objetivo:
- Permitir que Steps e colaboradores levantem exceções semânticas tipadas
- Facilitar o mapeamento determinístico para NexusErrorPayload
- Separar falhas fatais (Failure) de ausências opcionais (skip)

Regras:
- Exceções carregam apenas dados estruturados (serializáveis) em `details`.
- Steps convertem estas exceções em StepResult na fronteira do Step.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class NexusException(Exception):
    """Base class para exceções internas do nexus-bootstrap.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message


# ---------------------------------------------------------------------------
# Recursos
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MissingRequiredResource(NexusException):
    """Arquivo obrigatório (ex.: regras de acesso `rules.hcl`) não existe. Fatal."""


@dataclass(frozen=True)
class OptionalResourceAbsent(NexusException):
    """Arquivo opcional a reescrever não existe. Não fatal: o Step segue com skip."""


@dataclass(frozen=True)
class ConfigSchemaMismatch(NexusException):
    """Arquivo de configuração existe mas não contém o campo esperado."""


# ---------------------------------------------------------------------------
# Colaboradores externos
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ExternalServiceFailure(NexusException):
    """Colaborador externo rejeitou a chamada ou está inacessível. Fatal."""


@dataclass(frozen=True)
class RegistryRequestError(ExternalServiceFailure):
    """Service registry respondeu não-2xx ou a requisição falhou no transporte."""


@dataclass(frozen=True)
class ToolInvocationError(ExternalServiceFailure):
    """Ferramenta externa (docker, dotnet) terminou com código de saída não-zero."""


@dataclass(frozen=True)
class TemplateDownloadError(ExternalServiceFailure):
    """Download ou extração de um arquivo de template falhou."""

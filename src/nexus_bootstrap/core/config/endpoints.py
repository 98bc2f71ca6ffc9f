# src/nexus_bootstrap/core/config/endpoints.py
"""Endpoints escritos nos arquivos de configuração, resolvidos por modo de execução."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from nexus_bootstrap.core.pipeline.types import RunMode

from .errors import ConfigError


@dataclass(frozen=True)
class Endpoints:
    registry_url: str
    telemetry_endpoint: str
    discovery_host: str

    @classmethod
    def for_mode(cls, config: Dict[str, Any], run_mode: RunMode) -> "Endpoints":
        section = ((config or {}).get("endpoints") or {}).get(run_mode.value)
        if not isinstance(section, dict):
            raise ConfigError(f"Seção 'endpoints.{run_mode.value}' ausente na configuração")
        try:
            return cls(
                registry_url=section["registry"],
                telemetry_endpoint=section["telemetry"],
                discovery_host=section["discovery_host"],
            )
        except KeyError as e:
            raise ConfigError(f"Chave ausente em 'endpoints.{run_mode.value}': {e.args[0]}") from e

# src/nexus_bootstrap/solution/loader.py
"""
Leitura da descrição de solução (YAML/JSON) para os tipos de `model`.

O mapeamento é direto: não há validação de esquema além de chaves
obrigatórias ausentes, que viram `SolutionLoadError`. `base_path`
assume o diretório do arquivo quando não declarado.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Union

from nexus_bootstrap.core.config.errors import ConfigError
from nexus_bootstrap.core.config.loader import load_mapping_file

from .model import ComponentDescriptor, FrameworkDescriptor, ServiceDescriptor, SolutionDescription


class SolutionLoadError(ConfigError):
    """Descrição de solução sem uma chave obrigatória."""


def _component(data: Dict[str, Any], where: str) -> ComponentDescriptor:
    try:
        return ComponentDescriptor(
            service_name=data["service_name"],
            consul_config_directory=data["consul_config_directory"],
            app_settings_config_path=data.get("app_settings_config_path"),
            ocelot_directory=data.get("ocelot_directory"),
        )
    except (KeyError, TypeError) as e:
        raise SolutionLoadError(f"Componente '{where}' inválido: {e}") from e


def _service(data: Dict[str, Any], index: int) -> ServiceDescriptor:
    try:
        return ServiceDescriptor(
            name=data["name"],
            https_port=int(data["https_port"]),
            http_port=int(data["http_port"]),
            db_port=int(data["db_port"]),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise SolutionLoadError(f"Serviço #{index + 1} inválido: {e}") from e


def load_solution(path: Union[str, Path]) -> SolutionDescription:
    """Carrega a descrição de solução preservando a ordem dos serviços."""
    solution_file = Path(path)
    data = load_mapping_file(solution_file)

    framework = data.get("framework") or {}
    if "solution_name" not in data:
        raise SolutionLoadError("Chave obrigatória ausente: solution_name")
    if "api_gateway" not in framework or "health_checks_dashboard" not in framework:
        raise SolutionLoadError("framework exige 'api_gateway' e 'health_checks_dashboard'")

    discovery = framework.get("discovery_server")
    base_path = Path(data.get("base_path") or solution_file.resolve().parent)

    return SolutionDescription(
        solution_name=data["solution_name"],
        base_path=base_path,
        framework=FrameworkDescriptor(
            api_gateway=_component(framework["api_gateway"], "api_gateway"),
            health_checks_dashboard=_component(
                framework["health_checks_dashboard"], "health_checks_dashboard"
            ),
            discovery_server=_component(discovery, "discovery_server") if discovery else None,
        ),
        services=tuple(_service(s, i) for i, s in enumerate(data.get("services") or [])),
    )

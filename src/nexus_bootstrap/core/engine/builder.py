# src/nexus_bootstrap/core/engine/builder.py
"""
Montagem do pipeline de provisionamento a partir da descrição de solução.

Este módulo traduz uma `SolutionDescription` em uma sequência linear e
imutável de Steps, pronta para o `PipelineExecutor`.

Ordem canônica:
    1. prefixo fixo: rede/ambiente → certificado → discovery server →
       API gateway → dashboard de health checks
    2. um Step por serviço declarado, na ordem exata da descrição
    3. sufixo fixo: regeneração do `.env` → invocação do compose

Decisões arquiteturais:
    - A ordem é significativa e nunca alterada (sem ordenação, sem
      deduplicação): Steps posteriores assumem artefatos dos anteriores
    - Zero serviços produz apenas prefixo + sufixo, sem erro
    - Colaboradores são injetados nos Steps na construção

Invariantes:
    - len(pipeline) == PREFIX_LENGTH + len(services) + SUFFIX_LENGTH
    - Steps de serviço são contíguos e seguem a ordem declarada

Limites explícitos:
    - Não executa Steps
    - Não avalia aplicabilidade por modo de execução
    - Não valida a descrição de solução
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, List, Tuple

from nexus_bootstrap.core.pipeline.step import Step
from nexus_bootstrap.solution.model import SolutionDescription
from nexus_bootstrap.steps import (
    ComposeStep,
    DevCertsStep,
    DiscoveryServerStep,
    EnvironmentUpdateStep,
    NetworkInitStep,
    RegistryProvisioningStep,
)

PREFIX_LENGTH = 5
SUFFIX_LENGTH = 2


@dataclass(frozen=True)
class Pipeline:
    """Sequência ordenada e imutável de Steps, descartável após uma execução."""

    steps: Tuple[Step, ...]

    def __iter__(self) -> Iterator[Step]:
        return iter(self.steps)

    def __len__(self) -> int:
        return len(self.steps)

    def __getitem__(self, index: int) -> Step:
        return self.steps[index]

    @property
    def step_ids(self) -> List[str]:
        return [s.id for s in self.steps]


@dataclass(frozen=True)
class Collaborators:
    """Dependências externas injetadas nos Steps."""

    registry: Any
    docker: Any
    certificates: Any


class PipelineBuilder:
    """
    Constrói o `Pipeline` de uma solução.

    Args:
        solution: descrição de solução (framework fixo + serviços ordenados)
        config: configuração efetiva (rede, certificados, compose, ...)
        collaborators: cliente do registry e ferramentas externas
    """

    def __init__(self, solution: SolutionDescription, config: Dict[str, Any], collaborators: Collaborators):
        self.solution = solution
        self.config = config or {}
        self.collaborators = collaborators

    def _section(self, name: str) -> Dict[str, Any]:
        return self.config.get(name) or {}

    def _prefix(self) -> List[Step]:
        base = self.solution.base_path
        framework = self.solution.framework
        certs = self._section("certificates")
        discovery = framework.discovery_server

        return [
            NetworkInitStep(self.collaborators.docker, self._section("network").get("name", "consul_external")),
            DevCertsStep(
                self.collaborators.certificates,
                base / certs.get("output", "devcerts/aspnetapp.pfx"),
                certs.get("password", "dev123"),
            ),
            DiscoveryServerStep(
                self.collaborators.registry,
                configured_token=self._section("registry").get("token"),
                app_config_file=discovery.app_config_file(base) if discovery else None,
            ),
            RegistryProvisioningStep.for_component(
                "gateway.provision", framework.api_gateway, base, self.collaborators.registry
            ),
            RegistryProvisioningStep.for_component(
                "dashboard.provision", framework.health_checks_dashboard, base, self.collaborators.registry
            ),
        ]

    def _services(self) -> List[Step]:
        return [
            RegistryProvisioningStep.for_service(service, self.solution.base_path, self.collaborators.registry)
            for service in self.solution.services
        ]

    def _suffix(self) -> List[Step]:
        base = self.solution.base_path
        compose = self._section("compose")
        return [
            EnvironmentUpdateStep(
                base / Path(self._section("environment").get("file", ".env")),
                network_name=self._section("network").get("name", "consul_external"),
                certificate_password=self._section("certificates").get("password", "dev123"),
            ),
            ComposeStep(
                self.collaborators.docker,
                working_dir=base,
                files_by_mode=compose.get("files") or {},
                project_name=compose.get("project_name"),
            ),
        ]

    def build(self) -> Pipeline:
        return Pipeline(steps=tuple(self._prefix() + self._services() + self._suffix()))

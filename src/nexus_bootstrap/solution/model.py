# src/nexus_bootstrap/solution/model.py
"""
Descrição de solução consumida pelo PipelineBuilder.

Uma solução é formada por componentes fixos do framework (discovery
server, API gateway, dashboard de health checks) e por uma lista
ordenada de serviços declarados. A ordem da lista é significativa:
o Builder emite um Step por serviço exatamente nessa ordem.

Os caminhos derivados seguem o layout do template de solução:

    <base>/services/<kebab>-api/consul/rules.hcl
    <base>/services/<kebab>-api/consul/app-config.json
    <base>/services/<kebab>-api/src/<Pascal>.Api/appsettings.Development.json
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from . import naming

RULES_FILE = "rules.hcl"
APP_CONFIG_FILE = "app-config.json"
OCELOT_GLOBAL_FILE = "ocelot.global.json"
APP_SETTINGS_FILE = "appsettings.Development.json"


def service_root_folder(base_path: Path, service_name: str) -> Path:
    """`<base>/services/<kebab>-api`: pasta do serviço no layout da solução."""
    return Path(base_path) / "services" / naming.kebab_and_api(service_name)


@dataclass(frozen=True)
class ComponentDescriptor:
    """Componente fixo do framework que recebe policy e token próprios."""

    service_name: str
    consul_config_directory: str
    app_settings_config_path: Optional[str] = None
    ocelot_directory: Optional[str] = None

    def rules_file(self, base_path: Path) -> Path:
        return base_path / self.consul_config_directory / RULES_FILE

    def app_config_file(self, base_path: Path) -> Path:
        return base_path / self.consul_config_directory / APP_CONFIG_FILE

    def app_settings_file(self, base_path: Path) -> Optional[Path]:
        if not self.app_settings_config_path:
            return None
        return base_path / self.app_settings_config_path

    def ocelot_file(self, base_path: Path) -> Optional[Path]:
        if not self.ocelot_directory:
            return None
        return base_path / self.ocelot_directory / OCELOT_GLOBAL_FILE


@dataclass(frozen=True)
class FrameworkDescriptor:
    api_gateway: ComponentDescriptor
    health_checks_dashboard: ComponentDescriptor
    discovery_server: Optional[ComponentDescriptor] = None


@dataclass(frozen=True)
class ServiceDescriptor:
    """Serviço declarado pela solução (nome + portas)."""

    name: str
    https_port: int
    http_port: int
    db_port: int

    @property
    def kebab_name(self) -> str:
        return naming.kebab_without_api(self.name)

    @property
    def folder_name(self) -> str:
        return naming.kebab_and_api(self.name)

    @property
    def project_name(self) -> str:
        return naming.pascal_and_dot_api(self.name)

    def root_folder(self, base_path: Path) -> Path:
        return service_root_folder(base_path, self.name)

    def project_folder(self, base_path: Path) -> Path:
        return self.root_folder(base_path) / "src" / self.project_name

    def as_component(self, base_path: Path) -> ComponentDescriptor:
        """Projeta o serviço no mesmo formato dos componentes fixos."""
        root = self.root_folder(base_path).relative_to(base_path)
        project = self.project_folder(base_path).relative_to(base_path)
        return ComponentDescriptor(
            service_name=self.folder_name,
            consul_config_directory=str(root / "consul"),
            app_settings_config_path=str(project / APP_SETTINGS_FILE),
        )


@dataclass(frozen=True)
class SolutionDescription:
    solution_name: str
    base_path: Path
    framework: FrameworkDescriptor
    services: Tuple[ServiceDescriptor, ...] = field(default_factory=tuple)

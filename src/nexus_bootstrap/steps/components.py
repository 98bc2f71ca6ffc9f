"""Steps que provisionam artefatos de acesso no service registry.

Fluxo de um `RegistryProvisioningStep` (gateway, dashboard e cada serviço):

1. ler `rules.hcl` do diretório consul do componente (obrigatório)
2. criar a policy com o token global; registrar em `ctx.policy_records`
3. emitir o token do componente; registrar em `ctx.service_tokens`
4. reescrever `app-config.json` (token + telemetria) e publicar no KV
5. reescrever `ocelot.global.json` (apenas gateway)
6. reescrever `appsettings` (URL + token do KV)

Arquivos dos passos 4–6 são opcionais: ausência vira warning e o Step
continua. Falha do registry em qualquer passo aborta o Step (FAILED);
policies e tokens já criados permanecem no registry.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

from nexus_bootstrap.clients.consul import ConsulClient
from nexus_bootstrap.core.config.endpoints import Endpoints
from nexus_bootstrap.core.exceptions import MissingRequiredResource, OptionalResourceAbsent
from nexus_bootstrap.core.pipeline.context import ExecutionContext
from nexus_bootstrap.core.pipeline.types import StepKind, StepResult
from nexus_bootstrap.rewriting.json_files import (
    AppConfigUpdate,
    AppSettingsUpdate,
    ConfigUpdate,
    OcelotGlobalUpdate,
    rewrite_json_file,
)
from nexus_bootstrap.solution.model import ComponentDescriptor, ServiceDescriptor

from .base import ProvisioningStep


class RegistryProvisioningStep(ProvisioningStep):
    kind = StepKind.COMPONENT

    def __init__(
        self,
        *,
        step_id: str,
        scope: str,
        registry: ConsulClient,
        rules_file: Path,
        app_config_file: Optional[Path] = None,
        app_settings_file: Optional[Path] = None,
        ocelot_file: Optional[Path] = None,
        kind: Optional[StepKind] = None,
    ):
        self.id = step_id
        self.scope = scope
        self.registry = registry
        self.rules_file = Path(rules_file)
        self.app_config_file = app_config_file
        self.app_settings_file = app_settings_file
        self.ocelot_file = ocelot_file
        if kind is not None:
            self.kind = kind

    @classmethod
    def for_component(
        cls,
        step_id: str,
        component: ComponentDescriptor,
        base_path: Path,
        registry: ConsulClient,
        kind: StepKind = StepKind.COMPONENT,
    ) -> "RegistryProvisioningStep":
        return cls(
            step_id=step_id,
            scope=component.service_name,
            registry=registry,
            rules_file=component.rules_file(base_path),
            app_config_file=component.app_config_file(base_path),
            app_settings_file=component.app_settings_file(base_path),
            ocelot_file=component.ocelot_file(base_path),
            kind=kind,
        )

    @classmethod
    def for_service(
        cls,
        service: ServiceDescriptor,
        base_path: Path,
        registry: ConsulClient,
    ) -> "RegistryProvisioningStep":
        return cls.for_component(
            f"service.{service.kebab_name}",
            service.as_component(base_path),
            base_path,
            registry,
            kind=StepKind.SERVICE,
        )

    def _read_rules(self) -> str:
        if not self.rules_file.exists():
            raise MissingRequiredResource(
                message=f"Regras de acesso ausentes para '{self.scope}'",
                details={"file": str(self.rules_file), "scope": self.scope},
                hint="Crie o rules.hcl no diretório consul do componente",
            )
        return self.rules_file.read_text(encoding="utf-8")

    def _rewrite(self, ctx: ExecutionContext, name: str, path: Optional[Path], update: ConfigUpdate,
                 artifacts: Dict[str, str]) -> Optional[str]:
        if path is None:
            return None
        try:
            text = rewrite_json_file(path, update)
        except OptionalResourceAbsent as e:
            ctx.add_warning(step_id=self.id, message=e.message)
            return None
        artifacts[name] = str(path)
        return text

    def execute(self, ctx: ExecutionContext) -> StepResult:
        credential = ctx.global_token
        if not credential:
            raise MissingRequiredResource(
                message="Token global indisponível",
                details={"scope": self.scope},
                hint="O Step discovery.register precisa executar antes",
            )

        rules = self._read_rules()

        policy = self.registry.create_policy(credential, rules, self.scope)
        if policy.id:
            ctx.add_policy_record(policy)

        token = self.registry.create_token(credential, self.scope, policy.name)
        ctx.add_service_token(self.scope, token)

        endpoints = Endpoints.for_mode(ctx.config, ctx.run_mode)
        artifacts: Dict[str, str] = {}

        app_config = self._rewrite(
            ctx,
            "app_config",
            self.app_config_file,
            AppConfigUpdate(consul_token=token, telemetry_endpoint=endpoints.telemetry_endpoint),
            artifacts,
        )
        if app_config is not None:
            self.registry.put_key_value(self.scope, app_config, credential)

        self._rewrite(
            ctx,
            "ocelot",
            self.ocelot_file,
            OcelotGlobalUpdate(discovery_host=endpoints.discovery_host, token=token),
            artifacts,
        )
        self._rewrite(
            ctx,
            "app_settings",
            self.app_settings_file,
            AppSettingsUpdate(kv_url=endpoints.registry_url, kv_token=token),
            artifacts,
        )

        return self._success(
            f"policy '{policy.name}' and token issued for '{self.scope}'",
            artifacts=artifacts,
            payload={
                "scope": self.scope,
                "policy": {"id": policy.id, "name": policy.name},
                "kv_published": app_config is not None,
            },
        )

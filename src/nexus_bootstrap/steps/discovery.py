"""Step `discovery.register`: obtém o token global do service registry.

O token global é a credencial usada por todos os Steps seguintes para
criar policies, tokens e entradas KV. Ele vem de `registry.token` na
configuração (cluster já inicializado) ou do bootstrap de ACL do
registry. É escrito uma única vez no contexto.

Quando a solução declara um componente `discovery_server`, o seu
`app-config.json` recebe o token global e o endpoint de telemetria.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from nexus_bootstrap.clients.consul import ConsulClient
from nexus_bootstrap.core.config.endpoints import Endpoints
from nexus_bootstrap.core.exceptions import OptionalResourceAbsent
from nexus_bootstrap.core.pipeline.context import ExecutionContext
from nexus_bootstrap.core.pipeline.types import StepKind, StepResult
from nexus_bootstrap.rewriting.json_files import AppConfigUpdate, rewrite_json_file

from .base import ProvisioningStep


class DiscoveryServerStep(ProvisioningStep):
    id = "discovery.register"
    kind = StepKind.REGISTRY

    def __init__(
        self,
        registry: ConsulClient,
        *,
        configured_token: Optional[str] = None,
        app_config_file: Optional[Path] = None,
    ):
        self.registry = registry
        self.configured_token = configured_token
        self.app_config_file = Path(app_config_file) if app_config_file else None

    def execute(self, ctx: ExecutionContext) -> StepResult:
        if self.configured_token:
            token, source = self.configured_token, "config"
        else:
            token, source = self.registry.bootstrap_acl(), "acl_bootstrap"
        ctx.set_global_token(token)
        ctx.log(step_id=self.id, level="INFO", message="global token acquired", source=source)

        artifacts = {}
        if self.app_config_file is not None:
            endpoints = Endpoints.for_mode(ctx.config, ctx.run_mode)
            try:
                rewrite_json_file(
                    self.app_config_file,
                    AppConfigUpdate(consul_token=token, telemetry_endpoint=endpoints.telemetry_endpoint),
                )
                artifacts["app_config"] = str(self.app_config_file)
            except OptionalResourceAbsent as e:
                ctx.add_warning(step_id=self.id, message=e.message)

        return self._success(
            f"global token acquired from {source}",
            artifacts=artifacts,
            payload={"token_source": source},
        )

"""Steps de infraestrutura: rede, certificado de desenvolvimento, `.env` e compose.

Prefixo fixo (início do pipeline):
- `environment.network`    → garante a rede docker compartilhada
- `certificates.generate`  → exporta o certificado HTTPS (apenas LOCAL:
  em modo containerizado o certificado é produzido no build da imagem)

Sufixo fixo (fim do pipeline):
- `environment.update`     → regrava o `.env` com tokens e endpoints
- `compose.up`             → sobe a stack com os arquivos do modo da run
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Sequence

from nexus_bootstrap.core.config.endpoints import Endpoints
from nexus_bootstrap.core.exceptions import MissingRequiredResource
from nexus_bootstrap.core.pipeline.context import ExecutionContext
from nexus_bootstrap.core.pipeline.types import RunMode, StepKind, StepResult
from nexus_bootstrap.rewriting.env_file import rewrite_env_file
from nexus_bootstrap.solution.naming import env_var_prefix
from nexus_bootstrap.tooling.certificates import DevCertsGenerator
from nexus_bootstrap.tooling.docker import DockerCli

from .base import ProvisioningStep


class NetworkInitStep(ProvisioningStep):
    id = "environment.network"
    kind = StepKind.INFRASTRUCTURE

    def __init__(self, docker: DockerCli, network_name: str):
        self.docker = docker
        self.network_name = network_name

    def execute(self, ctx: ExecutionContext) -> StepResult:
        created = self.docker.ensure_network(self.network_name)
        ctx.log(step_id=self.id, level="INFO", message="network ready", network=self.network_name, created=created)
        state = "created" if created else "already present"
        return self._success(
            f"network '{self.network_name}' {state}",
            payload={"network": self.network_name, "created": created},
        )


class DevCertsStep(ProvisioningStep):
    id = "certificates.generate"
    kind = StepKind.INFRASTRUCTURE
    run_modes = frozenset({RunMode.LOCAL})

    def __init__(self, certificates: DevCertsGenerator, output: Path, password: str):
        self.certificates = certificates
        self.output = Path(output)
        self.password = password

    def execute(self, ctx: ExecutionContext) -> StepResult:
        path = self.certificates.export(self.output, self.password)
        return self._success("development certificate exported", artifacts={"certificate": str(path)})


class EnvironmentUpdateStep(ProvisioningStep):
    """Regrava o `.env`; arquivo ausente resulta em SKIPPED."""

    id = "environment.update"
    kind = StepKind.ENVIRONMENT

    def __init__(self, env_file: Path, *, network_name: str, certificate_password: str):
        self.env_file = Path(env_file)
        self.network_name = network_name
        self.certificate_password = certificate_password

    def _values(self, ctx: ExecutionContext) -> Dict[str, str]:
        endpoints = Endpoints.for_mode(ctx.config, ctx.run_mode)
        values = {
            "NETWORK_NAME": self.network_name,
            "CONSUL_URL": endpoints.registry_url,
            "TELEMETRY_ENDPOINT": endpoints.telemetry_endpoint,
            "CERTIFICATE_PASSWORD": self.certificate_password,
        }
        for service_name, token in ctx.service_tokens.items():
            values[f"{env_var_prefix(service_name)}_CONSUL_TOKEN"] = token
        return values

    def execute(self, ctx: ExecutionContext) -> StepResult:
        written = rewrite_env_file(self.env_file, self._values(ctx))
        return self._success(
            f"{len(written)} environment variables written",
            artifacts={"env_file": str(self.env_file)},
            payload={"keys": written},
        )


class ComposeStep(ProvisioningStep):
    id = "compose.up"
    kind = StepKind.ENVIRONMENT

    def __init__(
        self,
        docker: DockerCli,
        *,
        working_dir: Path,
        files_by_mode: Dict[str, Sequence[str]],
        project_name: Optional[str] = None,
    ):
        self.docker = docker
        self.working_dir = Path(working_dir)
        self.files_by_mode = {k: list(v or []) for k, v in (files_by_mode or {}).items()}
        self.project_name = project_name

    def execute(self, ctx: ExecutionContext) -> StepResult:
        files: List[str] = self.files_by_mode.get(ctx.run_mode.value, [])
        if not files:
            raise MissingRequiredResource(
                message=f"Nenhum arquivo de compose configurado para '{ctx.run_mode.value}'",
                details={"config_key": f"compose.files.{ctx.run_mode.value}"},
            )

        missing = [f for f in files if not (self.working_dir / f).exists()]
        if missing:
            raise MissingRequiredResource(
                message="Arquivo de compose ausente",
                details={"missing": missing, "working_dir": str(self.working_dir)},
                hint="Confirme que a solução foi gerada a partir do template",
            )

        self.docker.compose_up(files, cwd=self.working_dir, project_name=self.project_name)
        return self._success(f"compose started ({', '.join(files)})", payload={"files": files})

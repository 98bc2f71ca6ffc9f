# tests/conftest.py
"""
Fixtures compartilhados para testes do nexus-bootstrap.

Este módulo define fixtures reutilizáveis que fornecem:
- configuração mínima e determinística (endpoints por modo, compose, rede)
- contexto de execução controlado (ExecutionContext)
- Steps dummy com contador de chamadas para testes do Executor
- colaboradores falsos (registry, docker, certificados) para Steps reais
- uma solução materializada em disco (`tmp_path`) no layout do template

Decisões arquiteturais:
    - Steps e colaboradores dummy utilizam duck typing em vez de herança
    - Fixtures retornam *classes* quando o teste precisa parametrizar
      comportamento (status, modos, falhas)
    - Imports do pacote são realizados de forma lazy para melhorar a
      clareza de erros durante falhas de import

Invariantes:
    - Nenhuma fixture acessa rede nem invoca processos externos
    - I/O de filesystem ocorre apenas dentro de `tmp_path`

Limites explícitos:
    - Não substituir testes do cliente HTTP real (ver tests/clients)
    - Não conter lógica condicional complexa
"""

import json

import pytest


# =====================================================
# Config fixtures
# =====================================================

@pytest.fixture
def project_like_config_defaults_yaml() -> str:
    """
    YAML de defaults semelhante ao `config.defaults.yaml` empacotado.

    Usado por:
        - Testes do loader de config
        - Testes de deep-merge (defaults + local)
    """
    return """\
network:
  name: consul_external
registry:
  url: http://localhost:8500
  token: null
compose:
  files:
    local:
      - docker-compose.yml
"""


@pytest.fixture
def project_like_config_local_yaml() -> str:
    """YAML de override local: token pré-existente e outra rede."""
    return """\
network:
  name: nexus_dev
registry:
  token: local-management-token
"""


@pytest.fixture
def dummy_config() -> dict:
    """
    Configuração mínima já resolvida para execução de Steps e Executor.

    Invariantes:
        - Contém endpoints para os dois modos de execução
        - Não depende de arquivos nem de variáveis de ambiente
    """
    return {
        "network": {"name": "consul_external"},
        "certificates": {"output": "devcerts/aspnetapp.pfx", "password": "dev123"},
        "registry": {"url": "http://localhost:8500", "token": None},
        "endpoints": {
            "local": {
                "registry": "http://localhost:8500",
                "telemetry": "http://localhost:4317",
                "discovery_host": "localhost",
            },
            "containerized": {
                "registry": "http://consul:8500",
                "telemetry": "http://otel-collector:4317",
                "discovery_host": "consul",
            },
        },
        "compose": {
            "project_name": None,
            "files": {
                "local": ["docker-compose.yml"],
                "containerized": ["docker-compose.yml", "docker-compose.services.yml"],
            },
        },
        "environment": {"file": ".env"},
    }


@pytest.fixture
def make_ctx(dummy_config):
    """
    Factory de ExecutionContext determinístico.

    Retorna uma função `make_ctx(run_mode="local", **overrides)` para que
    testes escolham o modo de execução sem duplicar a construção.
    """
    from nexus_bootstrap.core.pipeline.context import ExecutionContext
    from nexus_bootstrap.core.pipeline.types import RunMode

    def _make(run_mode="local", **overrides):
        return ExecutionContext(
            run_id=overrides.pop("run_id", "run-test-001"),
            run_mode=RunMode(run_mode),
            config=overrides.pop("config", dummy_config),
            meta={"source": "pytest"},
            **overrides,
        )

    return _make


@pytest.fixture
def dummy_ctx(make_ctx):
    """ExecutionContext em modo LOCAL."""
    return make_ctx()


@pytest.fixture
def active_ctx(dummy_ctx):
    """ExecutionContext com a janela de mutação de um Step já aberta."""
    dummy_ctx.begin_step("test.step")
    return dummy_ctx


# =====================================================
# Steps dummy (Executor)
# =====================================================

@pytest.fixture
def DummyStep():
    """
    Fixture factory que fornece uma implementação duck-typed de Step.

    A classe retornada:
    - expõe `id`, `kind`, `applicable(run_mode)` e `run(ctx)`
    - conta chamadas de `run` em `calls`
    - devolve o status pedido na construção, ou levanta `raises`
    - opcionalmente registra um token de serviço e uma policy

    Usado por:
        - Testes do Executor (fail-fast, skip por modo, desfecho)
    """
    from nexus_bootstrap.core.pipeline.types import (
        PolicyRecord,
        RunMode,
        StepKind,
        StepResult,
        StepStatus,
    )

    class _DummyStep:
        def __init__(
            self,
            step_id="dummy",
            status=StepStatus.SUCCESS,
            modes=None,
            raises=None,
            token_for=None,
            creates_policy=False,
        ):
            self.id = step_id
            self.kind = StepKind.INFRASTRUCTURE
            self.status = status
            self.modes = set(modes) if modes else set(RunMode)
            self.raises = raises
            self.token_for = token_for
            self.creates_policy = creates_policy
            self.calls = 0

        def applicable(self, run_mode):
            return run_mode in self.modes

        def run(self, ctx):
            self.calls += 1
            if self.raises is not None:
                raise self.raises
            if self.token_for:
                ctx.add_service_token(self.token_for, f"token-{self.token_for}")
            if self.creates_policy:
                ctx.add_policy_record(PolicyRecord(id=f"pol-{self.id}", name=self.id))
            return StepResult(
                step_id=self.id,
                kind=self.kind,
                status=self.status,
                summary=f"dummy {self.status.value}",
            )

    return _DummyStep


# =====================================================
# Colaboradores falsos (Steps reais)
# =====================================================

@pytest.fixture
def FakeRegistry():
    """
    Fixture factory de um registry em memória.

    - `fail_on`: mapa operação → exceção (ou callable(scope) → exceção|None)
    - registra chamadas em `calls` como tuplas (operação, scope)
    """
    from nexus_bootstrap.core.pipeline.types import PolicyRecord

    class _FakeRegistry:
        def __init__(self, fail_on=None, bootstrap_token="global-token"):
            self.fail_on = dict(fail_on or {})
            self.bootstrap_token = bootstrap_token
            self.calls = []
            self.kv = {}

        def _maybe_fail(self, operation, scope):
            failure = self.fail_on.get(operation)
            if callable(failure) and not isinstance(failure, BaseException):
                failure = failure(scope)
            if failure is not None:
                raise failure

        def bootstrap_acl(self):
            self.calls.append(("bootstrap_acl", None))
            self._maybe_fail("bootstrap_acl", None)
            return self.bootstrap_token

        def create_policy(self, credential, rules, scope):
            self.calls.append(("create_policy", scope))
            self._maybe_fail("create_policy", scope)
            return PolicyRecord(id=f"id-{scope}", name=f"{scope}")

        def create_token(self, credential, scope, policy_name):
            self.calls.append(("create_token", scope))
            self._maybe_fail("create_token", scope)
            return f"token-{scope}"

        def put_key_value(self, scope, payload, credential):
            self.calls.append(("put_key_value", scope))
            self._maybe_fail("put_key_value", scope)
            self.kv[scope] = payload

    return _FakeRegistry


@pytest.fixture
def fake_docker():
    class _FakeDocker:
        def __init__(self):
            self.networks = []
            self.compose_calls = []

        def ensure_network(self, name):
            self.networks.append(name)
            return True

        def compose_up(self, files, *, cwd, project_name=None):
            self.compose_calls.append({"files": list(files), "cwd": cwd, "project_name": project_name})

    return _FakeDocker()


@pytest.fixture
def fake_certificates():
    class _FakeCerts:
        def __init__(self):
            self.exports = []

        def export(self, output, password):
            self.exports.append((output, password))
            return output

    return _FakeCerts()


# =====================================================
# Solução materializada em disco
# =====================================================

def _write_json(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def _write_component(base, consul_dir, app_settings=None, ocelot_dir=None):
    consul = base / consul_dir
    consul.mkdir(parents=True, exist_ok=True)
    (consul / "rules.hcl").write_text('key_prefix "config/" { policy = "read" }\n', encoding="utf-8")
    _write_json(
        consul / "app-config.json",
        {"Consul": {"Token": ""}, "TelemetrySettings": {"Endpoint": ""}, "Other": 1},
    )
    if app_settings:
        _write_json(base / app_settings, {"ConsulKV": {"Url": "", "Token": ""}, "Logging": {"Level": "Debug"}})
    if ocelot_dir:
        _write_json(
            base / ocelot_dir / "ocelot.global.json",
            {"GlobalConfiguration": {"ServiceDiscoveryProvider": {"Host": "", "Port": 8500, "Token": ""}}},
        )


@pytest.fixture
def make_solution(tmp_path):
    """
    Factory que materializa uma solução no layout do template e devolve
    a `SolutionDescription` correspondente.

    `make_solution(["orders", "billing"])` cria gateway, dashboard,
    `.env`, `docker-compose*.yml` e, para cada serviço, `rules.hcl`,
    `app-config.json` e `appsettings.Development.json`.
    """
    from nexus_bootstrap.solution.model import (
        ComponentDescriptor,
        FrameworkDescriptor,
        ServiceDescriptor,
        SolutionDescription,
    )

    def _make(service_names=(), with_env=True):
        base = tmp_path / "shop"
        base.mkdir(exist_ok=True)
        gateway = ComponentDescriptor(
            service_name="api-gateway",
            consul_config_directory="framework/api-gateway/consul",
            app_settings_config_path="framework/api-gateway/src/appsettings.Development.json",
            ocelot_directory="framework/api-gateway/src/Ocelot",
        )
        dashboard = ComponentDescriptor(
            service_name="health-checks-dashboard",
            consul_config_directory="framework/health-checks-dashboard/consul",
            app_settings_config_path="framework/health-checks-dashboard/src/appsettings.Development.json",
        )
        _write_component(
            base, gateway.consul_config_directory, gateway.app_settings_config_path, gateway.ocelot_directory
        )
        _write_component(base, dashboard.consul_config_directory, dashboard.app_settings_config_path)

        services = []
        for i, name in enumerate(service_names):
            svc = ServiceDescriptor(name=name, https_port=5001 + i * 10, http_port=5000 + i * 10, db_port=5432 + i)
            component = svc.as_component(base)
            _write_component(base, component.consul_config_directory, component.app_settings_config_path)
            services.append(svc)

        if with_env:
            (base / ".env").write_text("# generated\nNETWORK_NAME=old\n", encoding="utf-8")
        (base / "docker-compose.yml").write_text("services: {}\n", encoding="utf-8")
        (base / "docker-compose.services.yml").write_text("services: {}\n", encoding="utf-8")

        return SolutionDescription(
            solution_name="Shop",
            base_path=base,
            framework=FrameworkDescriptor(api_gateway=gateway, health_checks_dashboard=dashboard),
            services=tuple(services),
        )

    return _make

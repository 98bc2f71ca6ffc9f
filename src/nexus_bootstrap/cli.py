"""CLI do nexus-bootstrap.

Comandos:
- `run`          → monta e executa o pipeline de provisionamento da solução
- `new`          → baixa o template de solução e as bibliotecas (fora do pipeline)
- `add-service`  → baixa o template de serviço para `services/<kebab>-api`

Código de saída: 0 em sucesso, 1 em falha de configuração ou de Step.
"""

from __future__ import annotations

import argparse
import sys
import uuid
from pathlib import Path
from typing import List, Optional

from nexus_bootstrap.clients.consul import ConsulClient
from nexus_bootstrap.core.config import ConfigError, compute_config_hash, load_config
from nexus_bootstrap.core.engine import Collaborators, PipelineBuilder, PipelineExecutor
from nexus_bootstrap.core.exceptions import NexusException
from nexus_bootstrap.core.pipeline import ExecutionContext, RunMode
from nexus_bootstrap.report import render_events, render_run_report
from nexus_bootstrap.solution import load_solution, service_root_folder
from nexus_bootstrap.tooling import DevCertsGenerator, DockerCli, ProcessRunner, TemplateProvisioner


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nexus-bootstrap",
        description="Provisiona o ambiente de desenvolvimento de uma solução multi-serviço",
    )
    parser.add_argument("--config", type=Path, default=None, help="Override local de configuração (YAML/JSON)")
    parser.add_argument("--defaults", type=Path, default=None, help="Arquivo de defaults alternativo")
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Executa o pipeline de provisionamento")
    run.add_argument("--solution", type=Path, default=Path("nexus.yaml"), help="Descrição da solução")
    run.add_argument("--mode", choices=[m.value for m in RunMode], default=RunMode.LOCAL.value)
    run.add_argument("--verbose", action="store_true", help="Imprime o log de eventos da run")

    new = sub.add_parser("new", help="Baixa o template de solução e as bibliotecas")
    new.add_argument("name", help="Nome da solução")
    new.add_argument("--directory", type=Path, default=None, help="Destino (padrão: ./<nome>)")

    add = sub.add_parser("add-service", help="Baixa o template de serviço para a solução")
    add.add_argument("name", help="Nome do serviço")
    add.add_argument("--directory", type=Path, default=None, help="Raiz da solução (padrão: diretório atual)")
    return parser


def _run(args: argparse.Namespace, config: dict) -> int:
    solution = load_solution(args.solution)
    ctx = ExecutionContext(
        run_id=str(uuid.uuid4()),
        run_mode=RunMode(args.mode),
        config=config,
        meta={"solution": solution.solution_name, "config_hash": compute_config_hash(config)},
    )

    runner = ProcessRunner()
    with ConsulClient.from_config(config) as registry:
        collaborators = Collaborators(
            registry=registry,
            docker=DockerCli(runner),
            certificates=DevCertsGenerator(runner),
        )
        pipeline = PipelineBuilder(solution, config, collaborators).build()
        result = PipelineExecutor(pipeline).execute(ctx)

    if args.verbose:
        print(render_events(ctx.events))
        print()
    print(render_run_report(result))
    return 0 if result.success else 1


def _new(args: argparse.Namespace, config: dict) -> int:
    destination = args.directory or Path.cwd() / args.name
    provisioner = TemplateProvisioner.from_config(config)
    print("Downloading solution template")
    provisioner.download_solution_template(args.name, destination)
    print("Downloading libraries")
    provisioner.download_libraries(destination / "libraries")
    print(f"Solution created at {destination}")
    return 0


def _add_service(args: argparse.Namespace, config: dict) -> int:
    destination = service_root_folder(args.directory or Path.cwd(), args.name)
    if destination.exists():
        print(f"error: {destination} already exists", file=sys.stderr)
        return 1
    provisioner = TemplateProvisioner.from_config(config)
    print("Downloading service template")
    provisioner.download_service_template(destination)
    print(f"Service created at {destination}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = _parser().parse_args(argv)
    try:
        config = load_config(defaults_path=args.defaults, local_path=args.config)
        if args.command == "run":
            return _run(args, config)
        if args.command == "add-service":
            return _add_service(args, config)
        return _new(args, config)
    except ConfigError as e:
        print(f"configuration error: {e}", file=sys.stderr)
        return 1
    except NexusException as e:
        print(f"error: {e.message}", file=sys.stderr)
        if e.hint:
            print(f"hint: {e.hint}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

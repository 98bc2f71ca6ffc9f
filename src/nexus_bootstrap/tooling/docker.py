# src/nexus_bootstrap/tooling/docker.py
"""Operações de docker consumidas pelos Steps de infraestrutura e compose."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence, Union

from .process import ProcessRunner


class DockerCli:
    def __init__(self, runner: Optional[ProcessRunner] = None):
        self.runner = runner or ProcessRunner()

    def network_exists(self, name: str) -> bool:
        completed = self.runner.run(["docker", "network", "inspect", name], check=False)
        return completed.returncode == 0

    def ensure_network(self, name: str) -> bool:
        """Cria a rede se necessário. Retorna True quando a rede foi criada agora."""
        if self.network_exists(name):
            return False
        self.runner.run(["docker", "network", "create", name])
        return True

    def compose_up(
        self,
        files: Sequence[Union[str, Path]],
        *,
        cwd: Union[str, Path],
        project_name: Optional[str] = None,
    ) -> None:
        args = ["docker", "compose"]
        for f in files:
            args += ["-f", str(f)]
        if project_name:
            args += ["-p", project_name]
        args += ["up", "-d", "--build"]
        self.runner.run(args, cwd=cwd)

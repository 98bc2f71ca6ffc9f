# src/nexus_bootstrap/tooling/certificates.py
"""Geração do certificado HTTPS de desenvolvimento via `dotnet dev-certs`."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from .process import ProcessRunner


class DevCertsGenerator:
    def __init__(self, runner: Optional[ProcessRunner] = None):
        self.runner = runner or ProcessRunner()

    def export(self, output: Union[str, Path], password: str) -> Path:
        target = Path(output)
        target.parent.mkdir(parents=True, exist_ok=True)
        self.runner.run(["dotnet", "dev-certs", "https", "-ep", str(target), "-p", password])
        return target

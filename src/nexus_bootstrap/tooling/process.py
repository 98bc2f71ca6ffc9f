# src/nexus_bootstrap/tooling/process.py
"""
Invocação bloqueante de ferramentas externas (docker, dotnet).

`ProcessRunner.run` devolve o `CompletedProcess` com stdout/stderr em
texto. Código de saída não-zero, ou executável ausente no PATH, vira
`ToolInvocationError` com o comando e a saída de erro em `details`.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Optional, Sequence, Union

from nexus_bootstrap.core.exceptions import ToolInvocationError


class ProcessRunner:
    def run(
        self,
        args: Sequence[str],
        *,
        cwd: Optional[Union[str, Path]] = None,
        check: bool = True,
    ) -> subprocess.CompletedProcess:
        command = [str(a) for a in args]
        try:
            completed = subprocess.run(
                command,
                cwd=str(cwd) if cwd is not None else None,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError as e:
            raise ToolInvocationError(
                message=f"Ferramenta não encontrada: {command[0]}",
                details={"command": command},
                hint=f"Instale '{command[0]}' e garanta que está no PATH",
            ) from e

        if check and completed.returncode != 0:
            raise ToolInvocationError(
                message=f"'{' '.join(command[:3])}' terminou com código {completed.returncode}",
                details={
                    "command": command,
                    "returncode": completed.returncode,
                    "stderr": (completed.stderr or "")[-2000:],
                },
            )
        return completed

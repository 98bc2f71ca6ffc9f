# src/nexus_bootstrap/rewriting/env_file.py
"""
Reescrita do arquivo `.env` lido pelo compose.

Toda linha `KEY=VALUE` cuja chave aparece em `values` tem o valor
substituído no lugar, inclusive chaves repetidas (o compose usa a
última atribuição). Chaves novas são acrescentadas ao final, na ordem
recebida. Comentários, linhas em branco e demais chaves são preservados.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Mapping, Union

from nexus_bootstrap.core.exceptions import OptionalResourceAbsent


def rewrite_env_file(path: Union[str, Path], values: Mapping[str, str]) -> List[str]:
    """Atualiza o arquivo e devolve as chaves escritas, em ordem."""
    file = Path(path)
    if not file.exists():
        raise OptionalResourceAbsent(
            message=f"Arquivo de ambiente ausente: {file.name}",
            details={"file": str(file)},
            hint="Gere o .env a partir do template da solução",
        )

    replaced = set()
    lines: List[str] = []
    for line in file.read_text(encoding="utf-8").splitlines():
        key, sep, _ = line.partition("=")
        key = key.strip()
        if sep and not key.startswith("#") and key in values:
            lines.append(f"{key}={values[key]}")
            replaced.add(key)
        else:
            lines.append(line)

    lines.extend(f"{key}={value}" for key, value in values.items() if key not in replaced)
    file.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return list(values.keys())

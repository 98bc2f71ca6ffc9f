# src/nexus_bootstrap/rewriting/json_files.py
"""
Reescrita tipada de arquivos de configuração JSON gerados pelo template.

Cada tipo de arquivo tem uma classe de atualização com os valores a
substituir e o mapa `FIELD_PATHS` (atributo → caminho no documento).
`rewrite_json_file` aplica a atualização com read-modify-write:

- arquivo ausente          → `OptionalResourceAbsent` (Step segue com skip)
- raiz/pai ausente no JSON → `ConfigSchemaMismatch`   (Step falha)
- caso contrário           → arquivo reescrito com indentação e o texto
                             resultante é devolvido (usado no upload KV)

Apenas o último segmento de cada caminho é criado/sobrescrito; os pais
precisam existir, para que um arquivo renomeado ou de outro tipo não
seja silenciosamente transformado.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, ClassVar, Dict, Tuple, Union

from nexus_bootstrap.core.exceptions import ConfigSchemaMismatch, OptionalResourceAbsent

FieldPath = Tuple[str, ...]


@dataclass(frozen=True)
class ConfigUpdate:
    """Base das atualizações tipadas; subclasses declaram `FIELD_PATHS`."""

    FIELD_PATHS: ClassVar[Dict[str, FieldPath]] = {}

    def assignments(self):
        for f in fields(self):
            yield self.FIELD_PATHS[f.name], getattr(self, f.name)


@dataclass(frozen=True)
class AppConfigUpdate(ConfigUpdate):
    """`consul/app-config.json`: token do serviço e endpoint de telemetria."""

    consul_token: str
    telemetry_endpoint: str

    FIELD_PATHS: ClassVar[Dict[str, FieldPath]] = {
        "consul_token": ("Consul", "Token"),
        "telemetry_endpoint": ("TelemetrySettings", "Endpoint"),
    }


@dataclass(frozen=True)
class OcelotGlobalUpdate(ConfigUpdate):
    """`ocelot.global.json` do API gateway: provider de service discovery."""

    discovery_host: str
    token: str

    FIELD_PATHS: ClassVar[Dict[str, FieldPath]] = {
        "discovery_host": ("GlobalConfiguration", "ServiceDiscoveryProvider", "Host"),
        "token": ("GlobalConfiguration", "ServiceDiscoveryProvider", "Token"),
    }


@dataclass(frozen=True)
class AppSettingsUpdate(ConfigUpdate):
    """`appsettings.*.json`: acesso ao KV do registry."""

    kv_url: str
    kv_token: str

    FIELD_PATHS: ClassVar[Dict[str, FieldPath]] = {
        "kv_url": ("ConsulKV", "Url"),
        "kv_token": ("ConsulKV", "Token"),
    }


def _assign(document: Dict[str, Any], path: FieldPath, value: Any, file: Path) -> None:
    node: Any = document
    for depth, key in enumerate(path[:-1]):
        child = node.get(key) if isinstance(node, dict) else None
        if not isinstance(child, dict):
            raise ConfigSchemaMismatch(
                message=f"Campo '{'.'.join(path[: depth + 1])}' ausente em {file.name}",
                details={"file": str(file), "field": ".".join(path)},
                hint="Regenere o arquivo a partir do template ou corrija a estrutura",
            )
        node = child
    node[path[-1]] = value


def rewrite_json_file(path: Union[str, Path], update: ConfigUpdate) -> str:
    """Aplica `update` ao arquivo e devolve o JSON reescrito."""
    file = Path(path)
    if not file.exists():
        raise OptionalResourceAbsent(
            message=f"Arquivo opcional ausente: {file.name}",
            details={"file": str(file)},
        )

    with file.open("r", encoding="utf-8-sig") as f:
        try:
            document = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigSchemaMismatch(
                message=f"JSON inválido em {file.name}",
                details={"file": str(file), "line": e.lineno, "column": e.colno},
            ) from e

    if not isinstance(document, dict):
        raise ConfigSchemaMismatch(
            message=f"Raiz de {file.name} deve ser um objeto JSON",
            details={"file": str(file), "root_type": type(document).__name__},
        )

    for field_path, value in update.assignments():
        _assign(document, field_path, value, file)

    text = json.dumps(document, indent=2, ensure_ascii=False)
    file.write_text(text + "\n", encoding="utf-8")
    return text

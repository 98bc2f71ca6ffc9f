# src/nexus_bootstrap/core/config/loader.py
"""
Loader de configuração do nexus-bootstrap.

Fontes, em ordem de prioridade crescente:
    1. defaults: obrigatório; quando nenhum caminho é informado usa o
       `config.defaults.yaml` empacotado ao lado do código
    2. override local: opcional; ignorado se o arquivo não existir

Ambos podem ser YAML (`.yaml`/`.yml`) ou JSON (`.json`). O resultado
é o deep-merge dos dois (ver `merge.py`).

Invariantes:
    - O retorno é sempre um `dict` novo; arquivos vazios valem `{}`
    - A mesma leitura é usada pela descrição de solução

Limites explícitos:
    - Não conhece chaves de domínio (endpoints, compose, registry)
    - Não lê variáveis de ambiente
"""

import json
from pathlib import Path
from typing import Any, Callable, Dict, IO, Optional, Union

import yaml  # PyYAML

from .errors import (
    DefaultsNotFoundError,
    InvalidConfigFileError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .merge import deep_merge

PACKAGED_DEFAULTS = Path(__file__).resolve().parents[2] / "config.defaults.yaml"

_READERS: Dict[str, Callable[[IO[str]], Any]] = {
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
    ".json": json.load,
}


def load_mapping_file(path: Path) -> Dict[str, Any]:
    """
    Lê um arquivo YAML/JSON cuja raiz deve ser um mapa.

    Raises:
        DefaultsNotFoundError: arquivo inexistente.
        UnsupportedConfigFormatError: extensão fora de `.yaml`, `.yml`, `.json`.
        InvalidConfigFileError: YAML/JSON malformado.
        InvalidConfigRootTypeError: raiz que não é um mapa.
    """
    path = Path(path)
    if not path.exists():
        raise DefaultsNotFoundError(f"Arquivo não encontrado: {path}")

    reader = _READERS.get(path.suffix.lower())
    if reader is None:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix or '(sem extensão)'} em {path.name}")

    try:
        with path.open("r", encoding="utf-8") as f:
            data = reader(f)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise InvalidConfigFileError(f"{path.name}: sintaxe inválida ({e.__class__.__name__}: {e})") from e

    data = {} if data is None else data
    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(f"{path.name}: raiz deve ser um mapa, não {type(data).__name__}")
    return data


def load_config(
    *,
    defaults_path: Optional[Union[str, Path]] = None,
    local_path: Optional[Union[str, Path]] = None,
) -> Dict[str, Any]:
    """Resolve a configuração efetiva da run (defaults + override local)."""
    effective = load_mapping_file(Path(defaults_path) if defaults_path is not None else PACKAGED_DEFAULTS)

    local = Path(local_path) if local_path is not None else None
    if local is None or not local.exists():
        return effective
    return deep_merge(effective, load_mapping_file(local))

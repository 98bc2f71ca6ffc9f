# src/nexus_bootstrap/core/config/merge.py
"""
Deep-merge determinístico da configuração (defaults + override local).

Regras por tipo do valor no override:
    - mapa sobre mapa      → merge recursivo
    - lista                → substitui a lista base inteira (ex.: compose.files.local)
    - escalar              → substitui o valor base
    - base `null`/ausente  → aceita qualquer valor (ex.: registry.token)
    - tipos divergentes    → ConfigTypeConflictError com o caminho pontuado

Entradas nunca são mutadas.
"""

from copy import deepcopy
from typing import Any, Dict, Tuple

from .errors import ConfigTypeConflictError


def _dotted(path: Tuple[str, ...]) -> str:
    return ".".join(path) or "<raiz>"


def _merge_at(base: Dict[str, Any], override: Dict[str, Any], path: Tuple[str, ...]) -> Dict[str, Any]:
    merged = deepcopy(base)
    for key, incoming in override.items():
        current = merged.get(key)
        here = path + (str(key),)

        if current is None:
            merged[key] = deepcopy(incoming)
        elif isinstance(current, dict) and isinstance(incoming, dict):
            merged[key] = _merge_at(current, incoming, here)
        elif isinstance(incoming, list) or type(current) is type(incoming):
            merged[key] = deepcopy(incoming)
        else:
            raise ConfigTypeConflictError(
                f"Conflito de tipo em '{_dotted(here)}': "
                f"{type(current).__name__} (defaults) vs {type(incoming).__name__} (override)"
            )
    return merged


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Combina `base` com `override` e devolve um novo dicionário.

    Raises:
        ConfigTypeConflictError: raiz não-dict ou tipos divergentes em uma chave.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge exige mapas na raiz: {type(base).__name__} vs {type(override).__name__}"
        )
    return _merge_at(base, override, ())

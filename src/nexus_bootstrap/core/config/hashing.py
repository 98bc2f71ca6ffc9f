# src/nexus_bootstrap/core/config/hashing.py
"""
Impressão digital da configuração efetiva de uma run.

O valor vai para `ctx.meta["config_hash"]` e para o relatório final,
permitindo dizer se duas runs usaram a mesma configuração sem expor
tokens ou senhas presentes nela.

Forma canônica: JSON com chaves ordenadas, sem espaços, UTF-8 literal;
digest SHA-256 em hexadecimal.
"""

import hashlib
import json
from typing import Any, Dict


def _canonical_bytes(config: Dict[str, Any]) -> bytes:
    text = json.dumps(config, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return text.encode("utf-8")


def compute_config_hash(config: Dict[str, Any]) -> str:
    """SHA-256 (hex, 64 caracteres) da forma canônica de `config`."""
    if not isinstance(config, dict):
        raise TypeError(f"compute_config_hash espera dict, recebeu {type(config).__name__}")
    return hashlib.sha256(_canonical_bytes(config)).hexdigest()

# src/nexus_bootstrap/solution/naming.py
"""
Convenções de nome de serviços da solução.

Um nome bruto ("Orders", "orders-api", "OrderHistoryApi") é quebrado em
palavras minúsculas e recomposto nas variantes usadas pelo template:
pastas em kebab-case com sufixo `-api`, projetos em PascalCase com
sufixo `.Api` e variáveis de ambiente em SNAKE_CASE maiúsculo.
"""

from __future__ import annotations

import re
from typing import List

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_SEPARATORS = re.compile(r"[^A-Za-z0-9]+")


def split_words(raw: str) -> List[str]:
    words: List[str] = []
    for chunk in _SEPARATORS.split(raw or ""):
        if chunk:
            words.extend(w.lower() for w in _CAMEL_BOUNDARY.split(chunk) if w)
    return words


def _without_api(raw: str) -> List[str]:
    words = split_words(raw)
    if len(words) > 1 and words[-1] == "api":
        words = words[:-1]
    return words


def snake_case(raw: str) -> str:
    return "_".join(split_words(raw))


def kebab_without_api(raw: str) -> str:
    return "-".join(_without_api(raw))


def kebab_and_api(raw: str) -> str:
    return kebab_without_api(raw) + "-api"


def pascal_and_dot_api(raw: str) -> str:
    return "".join(w.capitalize() for w in _without_api(raw)) + ".Api"


def env_var_prefix(raw: str) -> str:
    """`order-history-api` → `ORDER_HISTORY_API`."""
    return snake_case(raw).upper()

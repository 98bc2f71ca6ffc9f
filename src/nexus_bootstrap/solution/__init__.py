"""
Descrição de solução do nexus-bootstrap.

Modelo tipado (framework fixo + serviços declarados em ordem), convenções
de nome herdadas do template e leitura a partir de YAML/JSON.
"""

from .loader import SolutionLoadError, load_solution
from .model import (
    ComponentDescriptor,
    FrameworkDescriptor,
    ServiceDescriptor,
    SolutionDescription,
    service_root_folder,
)

__all__ = [
    "ComponentDescriptor",
    "FrameworkDescriptor",
    "ServiceDescriptor",
    "SolutionDescription",
    "SolutionLoadError",
    "load_solution",
    "service_root_folder",
]

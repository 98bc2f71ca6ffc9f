# src/nexus_bootstrap/core/config/__init__.py

"""
Camada de configuração do nexus-bootstrap.

Responsabilidades do pacote:
    - Carregamento de arquivos de configuração (defaults + overrides locais)
    - Resolução de configuração final via deep-merge determinístico
    - Hash canônico da configuração efetiva (exibido no relatório)
    - Resolução dos endpoints por modo de execução

Princípios fundamentais:
    - Configuração não contém lógica de provisionamento
    - Overrides são sempre explícitos
    - Conflitos estruturais são tratados como erro
"""

from .endpoints import Endpoints
from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigFileError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .loader import load_config, load_mapping_file
from .merge import deep_merge

__all__ = [
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "Endpoints",
    "InvalidConfigFileError",
    "InvalidConfigRootTypeError",
    "UnsupportedConfigFormatError",
    "compute_config_hash",
    "deep_merge",
    "load_config",
    "load_mapping_file",
]

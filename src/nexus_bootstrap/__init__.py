# src/nexus_bootstrap/__init__.py
"""
nexus-bootstrap: provisionamento de ambiente de desenvolvimento multi-serviço.

A partir de uma descrição de solução, o nexus-bootstrap monta e executa um
pipeline ordenado que:
    - prepara a rede docker e o certificado HTTPS de desenvolvimento
    - obtém o token global do service registry (Consul)
    - cria policies e tokens para gateway, dashboard e cada serviço
    - reescreve os arquivos de configuração gerados com esses artefatos
    - regrava o `.env` e sobe a stack via compose

Arquitetura em alto nível:
    - core.pipeline → ExecutionContext, Step, tipos
    - core.engine   → PipelineBuilder e PipelineExecutor (fail-fast)
    - steps         → Steps concretos
    - clients, rewriting, tooling → colaboradores injetados nos Steps
"""

from .core.engine import PipelineBuilder, PipelineExecutor, RunResult
from .core.pipeline import ExecutionContext, RunMode

__version__ = "0.1.0"

__all__ = [
    "ExecutionContext",
    "PipelineBuilder",
    "PipelineExecutor",
    "RunMode",
    "RunResult",
    "__version__",
]

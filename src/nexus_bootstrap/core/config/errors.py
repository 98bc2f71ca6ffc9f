# src/nexus_bootstrap/core/config/errors.py
"""
Exceções canônicas da camada de configuração do nexus-bootstrap.

As exceções aqui definidas representam violações estruturais da
configuração (arquivo ausente, formato desconhecido, raiz inválida,
conflito de tipos no merge). Elas são levantadas antes de qualquer
Step executar e, portanto, nunca passam pelo Executor.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa falha de Step
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração.

    Permite captura genérica pelo CLI, que encerra com código 1
    antes de montar o pipeline.
    """


class DefaultsNotFoundError(ConfigError):
    """
    Arquivo de configuração base (defaults) não encontrado.

    Decisões arquiteturais:
        - O arquivo de defaults é obrigatório
        - Não há inferência de defaults a partir de outra fonte
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Formato de arquivo não suportado pelo loader.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """Conteúdo raiz do arquivo não é um dicionário (`dict`)."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"network": {"name": "consul_external"}}
        - override: {"network": "bridge"}

    Nenhum merge parcial é produzido em caso de conflito.
    """


class InvalidConfigFileError(ConfigError):
    """
    Arquivo com sintaxe YAML/JSON inválida.

    A exceção original do parser fica em `__cause__`; a mensagem traz
    o nome do arquivo para o CLI.
    """

"""Reescrita de arquivos de configuração gerados (JSON tipado e `.env`)."""

from .env_file import rewrite_env_file
from .json_files import (
    AppConfigUpdate,
    AppSettingsUpdate,
    ConfigUpdate,
    OcelotGlobalUpdate,
    rewrite_json_file,
)

__all__ = [
    "AppConfigUpdate",
    "AppSettingsUpdate",
    "ConfigUpdate",
    "OcelotGlobalUpdate",
    "rewrite_env_file",
    "rewrite_json_file",
]

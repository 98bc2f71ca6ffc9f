"""Colaboradores de ferramentas externas: processos, docker, certificados e templates."""

from .certificates import DevCertsGenerator
from .docker import DockerCli
from .process import ProcessRunner
from .templates import TemplateProvisioner

__all__ = ["DevCertsGenerator", "DockerCli", "ProcessRunner", "TemplateProvisioner"]

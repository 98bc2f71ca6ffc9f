"""Clientes de serviços externos (service registry)."""

from .consul import ConsulClient

__all__ = ["ConsulClient"]

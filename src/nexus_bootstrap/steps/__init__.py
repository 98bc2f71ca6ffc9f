"""
Steps concretos do pipeline de provisionamento.

Prefixo fixo:
    - environment.network     (NetworkInitStep)
    - certificates.generate   (DevCertsStep, apenas LOCAL)
    - discovery.register      (DiscoveryServerStep)
    - gateway.provision       (RegistryProvisioningStep)
    - dashboard.provision     (RegistryProvisioningStep)

Por serviço declarado:
    - service.<nome>          (RegistryProvisioningStep.for_service)

Sufixo fixo:
    - environment.update      (EnvironmentUpdateStep)
    - compose.up              (ComposeStep)
"""

from .base import ALL_MODES, ProvisioningStep
from .components import RegistryProvisioningStep
from .discovery import DiscoveryServerStep
from .infrastructure import ComposeStep, DevCertsStep, EnvironmentUpdateStep, NetworkInitStep

__all__ = [
    "ALL_MODES",
    "ComposeStep",
    "DevCertsStep",
    "DiscoveryServerStep",
    "EnvironmentUpdateStep",
    "NetworkInitStep",
    "ProvisioningStep",
    "RegistryProvisioningStep",
]

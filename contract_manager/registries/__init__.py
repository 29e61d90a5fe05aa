"""
Registries Package

Static interface definitions and the deployment directory used to decide
whether an address is a deployed contract.
"""

from contract_manager.registries.deployment_directory import DeploymentDirectory, StaticDeploymentDirectory
from contract_manager.registries.interfaces import (
    ACCESS_CONTROL_INTERFACE_ID,
    CONTRACT_MANAGER_INTERFACE_ID,
    ERC165_INTERFACE_ID,
    SUPPORTED_INTERFACES,
    get_interface_info,
)

__all__ = [
    "ACCESS_CONTROL_INTERFACE_ID",
    "CONTRACT_MANAGER_INTERFACE_ID",
    "DeploymentDirectory",
    "ERC165_INTERFACE_ID",
    "SUPPORTED_INTERFACES",
    "StaticDeploymentDirectory",
    "get_interface_info",
]

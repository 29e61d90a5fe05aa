"""
Contract Manager

Role-gated registry mapping deployed contract addresses to short descriptions.
"""

from contract_manager.enums import Role
from contract_manager.services.contract_manager_service import ContractManager

__version__ = "1.0.0"

__all__ = ["ContractManager", "Role", "__version__"]

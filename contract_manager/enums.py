"""
Shared Enums

Single source of truth for enums used across database models, services
and tests.
"""

from enum import Enum

from contract_manager.utils.interface_id import role_id


# ============================================================================
# Access Control Enums
# ============================================================================

ZERO_ROLE_ID = "0x" + "00" * 32


class Role(str, Enum):
    """
    Access control roles

    - DEFAULT_ADMIN_ROLE: Root role, grants and revokes every role
    - ADMIN_ROLE: Operational admin, may add, update and remove contracts
    """

    DEFAULT_ADMIN_ROLE = "DEFAULT_ADMIN_ROLE"
    ADMIN_ROLE = "ADMIN_ROLE"

    @property
    def role_id(self) -> str:
        """bytes32 role id: zero for the root role, keccak256(name) otherwise"""
        if self is Role.DEFAULT_ADMIN_ROLE:
            return ZERO_ROLE_ID
        return role_id(self.value)

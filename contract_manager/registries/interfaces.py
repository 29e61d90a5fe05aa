"""
Interface Registry

Interfaces the contract manager advertises through `supports_interface`.
Ids are derived from the canonical function signatures so they match the
values the EVM toolchain computes for the same interfaces.
"""

from typing import TypedDict

from contract_manager.utils.interface_id import calculate_interface_id


class InterfaceInfo(TypedDict):
    """Interface information"""
    name: str
    functions: list[str]
    interface_id: str


def _interface(name: str, functions: list[str]) -> InterfaceInfo:
    return {"name": name, "functions": functions, "interface_id": calculate_interface_id(functions)}


# ============================================================================
# Supported Interfaces
# ============================================================================

CONTRACT_MANAGER_INTERFACE = _interface(
    "IContractManager",
    [
        "addContract(address,string)",
        "addContracts(address[],string[])",
        "updateDescription(address,string)",
        "removeContract(address)",
        "getDescription(address)",
    ],
)

# 0x7965db0b
ACCESS_CONTROL_INTERFACE = _interface(
    "IAccessControl",
    [
        "hasRole(bytes32,address)",
        "getRoleAdmin(bytes32)",
        "grantRole(bytes32,address)",
        "revokeRole(bytes32,address)",
        "renounceRole(bytes32,address)",
    ],
)

# 0x01ffc9a7
ERC165_INTERFACE = _interface("IERC165", ["supportsInterface(bytes4)"])

CONTRACT_MANAGER_INTERFACE_ID = CONTRACT_MANAGER_INTERFACE["interface_id"]
ACCESS_CONTROL_INTERFACE_ID = ACCESS_CONTROL_INTERFACE["interface_id"]
ERC165_INTERFACE_ID = ERC165_INTERFACE["interface_id"]

SUPPORTED_INTERFACES: dict[int, InterfaceInfo] = {
    int(info["interface_id"], 16): info
    for info in (CONTRACT_MANAGER_INTERFACE, ACCESS_CONTROL_INTERFACE, ERC165_INTERFACE)
}


# ============================================================================
# Registry Functions
# ============================================================================


def get_interface_info(interface_id: int) -> InterfaceInfo | None:
    """
    Get interface information by id

    Args:
        interface_id: Interface id as an int

    Returns:
        InterfaceInfo or None if the interface is not supported
    """
    return SUPPORTED_INTERFACES.get(interface_id)

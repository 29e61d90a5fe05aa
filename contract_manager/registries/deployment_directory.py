"""
Deployment Directory

Answers whether an address belongs to a deployed contract. The registry
refuses to describe addresses the directory does not know about.
"""

import logging
import threading
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from contract_manager.utils.address import normalize_address


logger = logging.getLogger(__name__)


@runtime_checkable
class DeploymentDirectory(Protocol):
    """Validity oracle for contract addresses"""

    def is_deployed(self, address: str) -> bool:
        """Return True if a contract is deployed at the normalized address"""
        ...


class StaticDeploymentDirectory:
    """
    In-memory deployment directory

    Holds an explicit set of deployed contract addresses, for hosts that
    track deployments themselves and for tests.
    """

    def __init__(self, addresses: Iterable[str] = ()):
        """
        Initialize directory

        Args:
            addresses: Addresses of already deployed contracts
        """
        self._lock = threading.Lock()
        self._addresses: set[str] = {normalize_address(a) for a in addresses}

    def register(self, address: str) -> str:
        """
        Record a deployed contract

        Args:
            address: Contract address

        Returns:
            Normalized address

        Raises:
            InvalidAddress: If the address is malformed
        """
        normalized = normalize_address(address)
        with self._lock:
            self._addresses.add(normalized)
        logger.debug(f"Registered deployment {normalized}")
        return normalized

    def unregister(self, address: str) -> None:
        """Forget a deployed contract (no-op if unknown)"""
        normalized = normalize_address(address)
        with self._lock:
            self._addresses.discard(normalized)

    def is_deployed(self, address: str) -> bool:
        with self._lock:
            return address in self._addresses

    def __len__(self) -> int:
        with self._lock:
            return len(self._addresses)

"""
Contract Repository

Manages registered contract data access operations.
"""

from sqlmodel import Session

from contract_manager.database.models import ContractEntry
from contract_manager.database.repositories.base import BaseRepository


class ContractRepository(BaseRepository[ContractEntry]):
    """Repository for registered contract operations"""

    def __init__(self, session: Session):
        """Initialize contract repository"""
        super().__init__(ContractEntry, session)

    def get_by_address(self, address: str) -> ContractEntry | None:
        """
        Get contract entry by normalized address

        Args:
            address: Lowercase contract address

        Returns:
            ContractEntry instance or None
        """
        return self.get(address)

    def exists(self, address: str) -> bool:
        """Check whether a live entry exists for the address"""
        return self.get_by_address(address) is not None

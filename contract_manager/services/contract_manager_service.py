"""
Contract Manager Service

Registry of deployed contract addresses and their descriptions.

Every mutating operation runs as one transaction: the caller's ADMIN_ROLE is
checked, the change and its events are written, and after commit the
events are published while the writer lock is still held, so subscribers
see changes in commit order. Any failure, including one element of a batch, rolls
the whole operation back.
"""

import logging
from collections.abc import Sequence
from typing import Optional

from sqlmodel import Session

from contract_manager.config import Settings, settings as default_settings
from contract_manager.database.connection import DatabaseManager, get_db_manager
from contract_manager.database.models import ContractEntry, utcnow
from contract_manager.database.repositories import ContractRepository, EventRepository
from contract_manager.enums import Role
from contract_manager.exceptions import (
    ContractAlreadyExists,
    ContractDoesNotExist,
    InvalidAddress,
    MismatchedInputLengths,
)
from contract_manager.registries.deployment_directory import DeploymentDirectory
from contract_manager.registries.interfaces import get_interface_info
from contract_manager.schemas.events import (
    ContractAdded,
    ContractEvent,
    ContractRemoved,
    ContractUpdated,
    event_adapter,
)
from contract_manager.services.access_control_service import AccessControlService
from contract_manager.services.event_service import EventBus
from contract_manager.utils.address import ZERO_ADDRESS, is_address, normalize_address
from contract_manager.utils.interface_id import normalize_interface_id
from contract_manager.utils.validation import validate_description


logger = logging.getLogger(__name__)


class ContractManager:
    """
    Role-gated contract registry

    Exposes the registry operations plus the access control surface it is
    built on, so a single object stands in for the whole contract.
    """

    def __init__(
        self,
        db_manager: DatabaseManager,
        access_control: Optional[AccessControlService] = None,
        deployment_directory: Optional[DeploymentDirectory] = None,
        event_bus: Optional[EventBus] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize contract manager

        Args:
            db_manager: Database manager owning the registry store
            access_control: Access control service (built on db_manager if not provided)
            deployment_directory: Oracle for "is a deployed contract"; None skips that check
            event_bus: Bus receiving events after commit
            settings: Registry settings (global settings if not provided)
        """
        self.db = db_manager
        self.event_bus = event_bus or (access_control.event_bus if access_control else EventBus())
        self.access_control = access_control or AccessControlService(db_manager, self.event_bus)
        self.deployment_directory = deployment_directory
        self.settings = settings or default_settings

    @classmethod
    def deploy(
        cls,
        deployer: str,
        operational_admin: str,
        db_manager: Optional[DatabaseManager] = None,
        deployment_directory: Optional[DeploymentDirectory] = None,
        event_bus: Optional[EventBus] = None,
        settings: Optional[Settings] = None,
    ) -> "ContractManager":
        """
        Create a contract manager and grant its initial roles

        Args:
            deployer: Account receiving DEFAULT_ADMIN_ROLE
            operational_admin: Account receiving ADMIN_ROLE
            db_manager: Database manager (global manager if not provided)
            deployment_directory: Oracle for "is a deployed contract"
            event_bus: Bus receiving events after commit
            settings: Registry settings

        Returns:
            Initialized ContractManager

        Raises:
            InvalidAddress: If either account is malformed
            AlreadyInitialized: If the store already has a root role holder
        """
        manager = cls(
            db_manager or get_db_manager(),
            deployment_directory=deployment_directory,
            event_bus=event_bus,
            settings=settings,
        )
        manager.access_control.initialize(deployer, operational_admin)
        return manager

    # ========================================================================
    # Registry mutations
    # ========================================================================

    def add_contract(self, caller: str, address: str, description: str) -> ContractEntry:
        """
        Register a deployed contract

        Args:
            caller: Account performing the operation (must hold ADMIN_ROLE)
            address: Contract address
            description: Description, 1 to max_description_length UTF-8 bytes

        Returns:
            The stored entry

        Raises:
            Unauthorized: If the caller lacks ADMIN_ROLE
            InvalidAddress: If the address is malformed, zero, or not deployed
            ContractAlreadyExists: If the address is already registered
            InvalidDescription: If the description is not valid UTF-8 text
            EmptyDescription: If the description is empty
            DescriptionTooLong: If the description is too long
        """
        with self.db.write_lock():
            with self.db.transaction() as session:
                caller = self.access_control.require_role(Role.ADMIN_ROLE, caller, session)
                entry, event = self._insert(session, address, description)
                EventRepository(session).append([event])

            logger.info(f"Contract added by {caller}: {entry.address}")
            self.event_bus.publish([event])
        return entry

    def add_contracts(
        self, caller: str, addresses: Sequence[str], descriptions: Sequence[str]
    ) -> list[ContractEntry]:
        """
        Register several deployed contracts at once

        Elements are processed in order with the same rules as add_contract.
        If any element is rejected nothing is registered.

        Args:
            caller: Account performing the operation (must hold ADMIN_ROLE)
            addresses: Contract addresses
            descriptions: Descriptions, one per address

        Returns:
            The stored entries, in input order

        Raises:
            Unauthorized: If the caller lacks ADMIN_ROLE
            MismatchedInputLengths: If the lists differ in length
            InvalidAddress, ContractAlreadyExists, EmptyDescription,
            DescriptionTooLong: For the first rejected element
        """
        with self.db.write_lock():
            with self.db.transaction() as session:
                caller = self.access_control.require_role(Role.ADMIN_ROLE, caller, session)
                if len(addresses) != len(descriptions):
                    raise MismatchedInputLengths(len(addresses), len(descriptions))

                entries: list[ContractEntry] = []
                events: list[ContractEvent] = []
                for address, description in zip(addresses, descriptions):
                    entry, event = self._insert(session, address, description)
                    entries.append(entry)
                    events.append(event)
                EventRepository(session).append(events)

            logger.info(f"{len(entries)} contracts added by {caller}")
            self.event_bus.publish(events)
        return entries

    def update_description(self, caller: str, address: str, new_description: str) -> ContractEntry:
        """
        Replace the description of a registered contract

        Args:
            caller: Account performing the operation (must hold ADMIN_ROLE)
            address: Contract address
            new_description: New description

        Returns:
            The updated entry

        Raises:
            Unauthorized: If the caller lacks ADMIN_ROLE
            ContractDoesNotExist: If the address is not registered
            InvalidDescription: If the description is not valid UTF-8 text
            EmptyDescription: If the description is empty
            DescriptionTooLong: If the description is too long
        """
        with self.db.write_lock():
            with self.db.transaction() as session:
                caller = self.access_control.require_role(Role.ADMIN_ROLE, caller, session)
                contracts = ContractRepository(session)
                entry = self._get_existing(contracts, address)
                entry.description = validate_description(new_description, self.settings.max_description_length)
                entry.updated_at = utcnow()
                contracts.add(entry)

                event = ContractUpdated(address=entry.address, new_description=entry.description)
                EventRepository(session).append([event])

            logger.info(f"Contract updated by {caller}: {entry.address}")
            self.event_bus.publish([event])
        return entry

    def remove_contract(self, caller: str, address: str) -> None:
        """
        Unregister a contract

        The address may be registered again afterwards.

        Args:
            caller: Account performing the operation (must hold ADMIN_ROLE)
            address: Contract address

        Raises:
            Unauthorized: If the caller lacks ADMIN_ROLE
            ContractDoesNotExist: If the address is not registered
        """
        with self.db.write_lock():
            with self.db.transaction() as session:
                caller = self.access_control.require_role(Role.ADMIN_ROLE, caller, session)
                contracts = ContractRepository(session)
                entry = self._get_existing(contracts, address)
                contracts.delete(entry)

                event = ContractRemoved(address=entry.address)
                EventRepository(session).append([event])

            logger.info(f"Contract removed by {caller}: {entry.address}")
            self.event_bus.publish([event])

    # ========================================================================
    # Registry queries
    # ========================================================================

    def get_description(self, address: str) -> str:
        """
        Get the description of a registered contract

        Args:
            address: Contract address

        Returns:
            Stored description

        Raises:
            ContractDoesNotExist: If the address is not registered
        """
        with self.db.get_session() as session:
            return self._get_existing(ContractRepository(session), address).description

    def contract_exists(self, address: str) -> bool:
        """Check whether the address is registered"""
        if not is_address(address):
            return False
        with self.db.get_session() as session:
            return ContractRepository(session).exists(normalize_address(address))

    def supports_interface(self, interface_id: str | bytes | int) -> bool:
        """
        ERC-165 interface discovery

        Args:
            interface_id: 4-byte id as "0x"-hex string, raw bytes or int

        Returns:
            True for the registry, access control and ERC-165 interfaces
        """
        try:
            value = normalize_interface_id(interface_id)
        except ValueError:
            return False
        return get_interface_info(value) is not None

    def events(self, after_id: int = 0, limit: int = 100) -> list[ContractEvent]:
        """
        Read the persisted event log, oldest first

        Args:
            after_id: Return only events logged after this log id
            limit: Maximum number of events

        Returns:
            Events in the order they were emitted
        """
        with self.db.get_session() as session:
            records = EventRepository(session).list_after(after_id, limit)
        return [event_adapter.validate_json(record.payload) for record in records]

    # ========================================================================
    # Access control surface
    # ========================================================================

    def has_role(self, role: Role, account: str) -> bool:
        return self.access_control.has_role(role, account)

    def get_role_admin(self, role: Role) -> Role:
        return self.access_control.get_role_admin(role)

    def grant_role(self, caller: str, role: Role, account: str) -> bool:
        return self.access_control.grant_role(caller, role, account)

    def revoke_role(self, caller: str, role: Role, account: str) -> bool:
        return self.access_control.revoke_role(caller, role, account)

    def renounce_role(self, caller: str, role: Role, caller_confirmation: str) -> bool:
        return self.access_control.renounce_role(caller, role, caller_confirmation)

    # ========================================================================
    # Internal helpers
    # ========================================================================

    def _require_deployed(self, address: str) -> str:
        normalized = normalize_address(address)
        if normalized == ZERO_ADDRESS:
            raise InvalidAddress(address)
        if self.deployment_directory is not None and not self.deployment_directory.is_deployed(normalized):
            raise InvalidAddress(address)
        return normalized

    def _insert(self, session: Session, address: str, description: str) -> tuple[ContractEntry, ContractAdded]:
        address = self._require_deployed(address)
        contracts = ContractRepository(session)
        if contracts.exists(address):
            raise ContractAlreadyExists(address)
        description = validate_description(description, self.settings.max_description_length)

        entry = contracts.add(ContractEntry(address=address, description=description))
        return entry, ContractAdded(address=address, description=description)

    def _get_existing(self, contracts: ContractRepository, address: str) -> ContractEntry:
        # Malformed and zero addresses are never registered
        if not is_address(address):
            raise ContractDoesNotExist(str(address))
        normalized = normalize_address(address)
        entry = contracts.get_by_address(normalized)
        if entry is None:
            raise ContractDoesNotExist(normalized)
        return entry

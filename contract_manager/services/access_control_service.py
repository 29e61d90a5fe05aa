"""
Access Control Service

Two-tier role-based access control. DEFAULT_ADMIN_ROLE holders manage the
membership of every role; ADMIN_ROLE holders operate the registry.

Granting a held role or revoking a missing one is a no-op: nothing is
written and no event is emitted.
"""

import logging
from typing import Optional

from sqlmodel import Session

from contract_manager.database.connection import DatabaseManager
from contract_manager.database.models import RoleMember
from contract_manager.database.repositories import EventRepository, RoleRepository
from contract_manager.enums import Role
from contract_manager.exceptions import (
    AlreadyInitialized,
    BadConfirmation,
    InvalidAddress,
    Unauthorized,
)
from contract_manager.schemas.events import ContractEvent, RoleGranted, RoleRevoked
from contract_manager.services.event_service import EventBus
from contract_manager.utils.address import normalize_address


logger = logging.getLogger(__name__)


def _normalize_caller(caller: str, role: Role) -> str:
    # A malformed caller cannot hold any role
    try:
        return normalize_address(caller)
    except InvalidAddress:
        raise Unauthorized(str(caller), role) from None


class AccessControlService:
    """Service for role membership checks and management"""

    def __init__(self, db_manager: DatabaseManager, event_bus: Optional[EventBus] = None):
        """
        Initialize access control service

        Args:
            db_manager: Database manager owning the role store
            event_bus: Bus receiving RoleGranted / RoleRevoked after commit
        """
        self.db = db_manager
        self.event_bus = event_bus or EventBus()

    # ------------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------------

    def has_role(self, role: Role, account: str) -> bool:
        """
        Check role membership

        Never fails: a malformed account or unknown role name simply
        yields False.

        Args:
            role: Role or role name to check
            account: Account address

        Returns:
            True if the account holds the role
        """
        try:
            role = Role(role)
            account = normalize_address(account)
        except (ValueError, InvalidAddress):
            return False

        with self.db.get_session() as session:
            return RoleRepository(session).has_role(role, account)

    def get_role_admin(self, role: Role) -> Role:
        """Role whose holders may grant and revoke `role`"""
        return Role.DEFAULT_ADMIN_ROLE

    def get_role_members(self, role: Role) -> list[str]:
        """
        List the accounts holding a role

        Args:
            role: Role

        Returns:
            Account addresses, sorted
        """
        role = Role(role)
        with self.db.get_session() as session:
            return [m.account for m in RoleRepository(session).get_members(role)]

    def require_role(self, role: Role, account: str, session: Optional[Session] = None) -> str:
        """
        Guard an operation behind a role

        Args:
            role: Required role
            account: Calling account
            session: Open session to check in (the caller's transaction)

        Returns:
            The normalized account

        Raises:
            Unauthorized: If the account does not hold the role
        """
        role = Role(role)
        normalized = _normalize_caller(account, role)

        if session is None:
            with self.db.get_session() as read_session:
                allowed = RoleRepository(read_session).has_role(role, normalized)
        else:
            allowed = RoleRepository(session).has_role(role, normalized)

        if not allowed:
            raise Unauthorized(normalized, role)
        return normalized

    # ------------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------------

    def initialize(self, deployer: str, operational_admin: str) -> None:
        """
        Grant the initial roles

        DEFAULT_ADMIN_ROLE goes to the deployer and ADMIN_ROLE to the
        operational admin.

        Args:
            deployer: Account performing the deployment
            operational_admin: Account that will operate the registry

        Raises:
            InvalidAddress: If either account is malformed
            AlreadyInitialized: If a root role holder already exists
        """
        deployer = normalize_address(deployer)
        operational_admin = normalize_address(operational_admin)

        events: list[ContractEvent] = []
        with self.db.write_lock():
            with self.db.transaction() as session:
                roles = RoleRepository(session)
                if roles.get_members(Role.DEFAULT_ADMIN_ROLE):
                    raise AlreadyInitialized()

                events.extend(self._grant(session, Role.DEFAULT_ADMIN_ROLE, deployer, sender=deployer))
                events.extend(self._grant(session, Role.ADMIN_ROLE, operational_admin, sender=deployer))
                EventRepository(session).append(events)

            logger.info(f"Initialized access control: root={deployer}, admin={operational_admin}")
            self.event_bus.publish(events)

    def grant_role(self, caller: str, role: Role, account: str) -> bool:
        """
        Grant a role to an account

        Args:
            caller: Account performing the grant (must hold the role's admin role)
            role: Role to grant
            account: Account receiving the role

        Returns:
            True if membership changed, False if the account already held the role

        Raises:
            Unauthorized: If the caller lacks the admin role
            InvalidAddress: If the account is malformed
        """
        role = Role(role)
        with self.db.write_lock():
            with self.db.transaction() as session:
                caller = self.require_role(self.get_role_admin(role), caller, session)
                account = normalize_address(account)
                events = self._grant(session, role, account, sender=caller)
                EventRepository(session).append(events)

            if events:
                logger.info(f"Granted {role.value} to {account} by {caller}")
                self.event_bus.publish(events)
        return bool(events)

    def revoke_role(self, caller: str, role: Role, account: str) -> bool:
        """
        Revoke a role from an account

        Args:
            caller: Account performing the revocation (must hold the role's admin role)
            role: Role to revoke
            account: Account losing the role

        Returns:
            True if membership changed, False if the account did not hold the role

        Raises:
            Unauthorized: If the caller lacks the admin role
            InvalidAddress: If the account is malformed
        """
        role = Role(role)
        with self.db.write_lock():
            with self.db.transaction() as session:
                caller = self.require_role(self.get_role_admin(role), caller, session)
                account = normalize_address(account)
                events = self._revoke(session, role, account, sender=caller)
                EventRepository(session).append(events)

            if events:
                logger.info(f"Revoked {role.value} from {account} by {caller}")
                self.event_bus.publish(events)
        return bool(events)

    def renounce_role(self, caller: str, role: Role, caller_confirmation: str) -> bool:
        """
        Drop one of the caller's own roles

        Args:
            caller: Account renouncing the role
            role: Role to renounce
            caller_confirmation: Must equal caller

        Returns:
            True if membership changed

        Raises:
            BadConfirmation: If the confirmation does not match the caller
        """
        role = Role(role)
        caller = _normalize_caller(caller, role)
        if not isinstance(caller_confirmation, str) or caller_confirmation.strip().lower() != caller:
            raise BadConfirmation(caller, str(caller_confirmation))

        with self.db.write_lock():
            with self.db.transaction() as session:
                events = self._revoke(session, role, caller, sender=caller)
                EventRepository(session).append(events)

            if events:
                logger.info(f"{caller} renounced {role.value}")
                self.event_bus.publish(events)
        return bool(events)

    # ------------------------------------------------------------------------
    # Internal helpers (run inside the caller's transaction)
    # ------------------------------------------------------------------------

    def _grant(self, session: Session, role: Role, account: str, sender: str) -> list[ContractEvent]:
        roles = RoleRepository(session)
        if roles.has_role(role, account):
            return []
        roles.add(RoleMember(role=role.value, account=account, granted_by=sender))
        return [RoleGranted(role=role, account=account, sender=sender)]

    def _revoke(self, session: Session, role: Role, account: str, sender: str) -> list[ContractEvent]:
        roles = RoleRepository(session)
        membership = roles.get_membership(role, account)
        if membership is None:
            return []
        roles.delete(membership)
        return [RoleRevoked(role=role, account=account, sender=sender)]

"""
Role Repository

Manages role membership data access operations.
"""

from sqlmodel import Session, select

from contract_manager.database.models import RoleMember
from contract_manager.database.repositories.base import BaseRepository
from contract_manager.enums import Role


class RoleRepository(BaseRepository[RoleMember]):
    """Repository for role membership operations"""

    def __init__(self, session: Session):
        """Initialize role repository"""
        super().__init__(RoleMember, session)

    def get_membership(self, role: Role, account: str) -> RoleMember | None:
        """
        Get membership row for a role and account

        Args:
            role: Role
            account: Lowercase account address

        Returns:
            RoleMember instance or None
        """
        return self.get((role.value, account))

    def has_role(self, role: Role, account: str) -> bool:
        """Check whether the account holds the role"""
        return self.get_membership(role, account) is not None

    def get_members(self, role: Role) -> list[RoleMember]:
        """
        Get all members of a role

        Args:
            role: Role

        Returns:
            List of memberships ordered by account
        """
        statement = select(RoleMember).where(RoleMember.role == role.value).order_by(RoleMember.account)
        return list(self.session.exec(statement).all())

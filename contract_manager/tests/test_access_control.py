"""
Access Control Tests

Deployment roles, role management and the root-only rule.
"""

import pytest

from contract_manager.enums import ZERO_ROLE_ID, Role
from contract_manager.exceptions import AlreadyInitialized, BadConfirmation, InvalidAddress, Unauthorized
from contract_manager.services.access_control_service import AccessControlService
from contract_manager.services.contract_manager_service import ContractManager
from contract_manager.tests.assertions import assert_event
from contract_manager.tests.factories import AddressFactory


@pytest.mark.unit
class TestDeployment:
    """Roles granted at deployment"""

    def test_deployer_has_default_admin_role(self, contract_manager, deployer):
        assert contract_manager.has_role(Role.DEFAULT_ADMIN_ROLE, deployer)

    def test_admin_has_admin_role(self, contract_manager, admin):
        assert contract_manager.has_role(Role.ADMIN_ROLE, admin)

    def test_admin_is_not_root(self, contract_manager, admin):
        assert not contract_manager.has_role(Role.DEFAULT_ADMIN_ROLE, admin)

    def test_deployer_is_not_operator(self, contract_manager, deployer):
        assert not contract_manager.has_role(Role.ADMIN_ROLE, deployer)

    def test_deployer_can_also_be_operator(self, db_manager, deployer):
        manager = ContractManager.deploy(deployer, deployer, db_manager=db_manager)

        assert manager.has_role(Role.DEFAULT_ADMIN_ROLE, deployer)
        assert manager.has_role(Role.ADMIN_ROLE, deployer)

    def test_deploy_emits_role_granted(self, contract_manager, deployer, admin):
        granted = contract_manager.events()

        assert len(granted) == 2
        assert_event(granted[0], "RoleGranted", role=Role.DEFAULT_ADMIN_ROLE, account=deployer, sender=deployer)
        assert_event(granted[1], "RoleGranted", role=Role.ADMIN_ROLE, account=admin, sender=deployer)

    def test_second_initialization_rejected(self, contract_manager, db_manager, user, other_user):
        with pytest.raises(AlreadyInitialized):
            ContractManager.deploy(user, other_user, db_manager=db_manager)

        assert not contract_manager.has_role(Role.DEFAULT_ADMIN_ROLE, user)

    def test_malformed_admin_rejected(self, db_manager, deployer):
        with pytest.raises(InvalidAddress):
            ContractManager.deploy(deployer, "not-an-address", db_manager=db_manager)

        assert not AccessControlService(db_manager).has_role(Role.DEFAULT_ADMIN_ROLE, deployer)


@pytest.mark.unit
class TestRoleIds:
    """Role identifiers"""

    def test_default_admin_role_is_zero_hash(self):
        assert Role.DEFAULT_ADMIN_ROLE.role_id == ZERO_ROLE_ID

    def test_admin_role_is_keccak_of_name(self):
        assert Role.ADMIN_ROLE.role_id == "0xa49807205ce4d355092ef5a8a18f56e8913cf4a201fbe287825b095693c21775"

    def test_root_administers_every_role(self, contract_manager):
        assert contract_manager.get_role_admin(Role.ADMIN_ROLE) is Role.DEFAULT_ADMIN_ROLE
        assert contract_manager.get_role_admin(Role.DEFAULT_ADMIN_ROLE) is Role.DEFAULT_ADMIN_ROLE


@pytest.mark.unit
class TestRoleManagement:
    """Tests for grant_role, revoke_role and renounce_role"""

    def test_root_can_grant_admin_role(self, contract_manager, deployer, user):
        assert contract_manager.grant_role(deployer, Role.ADMIN_ROLE, user) is True
        assert contract_manager.has_role(Role.ADMIN_ROLE, user)

    def test_root_can_revoke_admin_role(self, contract_manager, deployer, user):
        contract_manager.grant_role(deployer, Role.ADMIN_ROLE, user)

        assert contract_manager.revoke_role(deployer, Role.ADMIN_ROLE, user) is True
        assert not contract_manager.has_role(Role.ADMIN_ROLE, user)

    def test_root_manages_multiple_admins(self, contract_manager, deployer, user, other_user):
        contract_manager.grant_role(deployer, Role.ADMIN_ROLE, user)
        contract_manager.grant_role(deployer, Role.ADMIN_ROLE, other_user)

        assert contract_manager.has_role(Role.ADMIN_ROLE, user)
        assert contract_manager.has_role(Role.ADMIN_ROLE, other_user)

        contract_manager.revoke_role(deployer, Role.ADMIN_ROLE, user)
        contract_manager.revoke_role(deployer, Role.ADMIN_ROLE, other_user)

        assert not contract_manager.has_role(Role.ADMIN_ROLE, user)
        assert not contract_manager.has_role(Role.ADMIN_ROLE, other_user)

    def test_root_can_grant_root(self, contract_manager, deployer, user):
        contract_manager.grant_role(deployer, Role.DEFAULT_ADMIN_ROLE, user)

        # The new root holder can manage roles too
        contract_manager.grant_role(user, Role.ADMIN_ROLE, user)
        assert contract_manager.has_role(Role.ADMIN_ROLE, user)

    def test_grant_is_idempotent(self, contract_manager, recorder, deployer, admin):
        assert contract_manager.grant_role(deployer, Role.ADMIN_ROLE, admin) is False
        assert contract_manager.has_role(Role.ADMIN_ROLE, admin)
        assert recorder.events == []

    def test_revoke_is_idempotent(self, contract_manager, recorder, deployer, user):
        assert contract_manager.revoke_role(deployer, Role.ADMIN_ROLE, user) is False
        assert recorder.events == []

    def test_grant_and_revoke_emit_events(self, contract_manager, recorder, deployer, user):
        contract_manager.grant_role(deployer, Role.ADMIN_ROLE, user)
        contract_manager.revoke_role(deployer, Role.ADMIN_ROLE, user)

        assert recorder.names == ["RoleGranted", "RoleRevoked"]
        assert_event(recorder.events[0], "RoleGranted", role=Role.ADMIN_ROLE, account=user, sender=deployer)
        assert_event(recorder.events[1], "RoleRevoked", role=Role.ADMIN_ROLE, account=user, sender=deployer)

    def test_non_admin_cannot_grant(self, contract_manager, user, other_user):
        with pytest.raises(Unauthorized) as exc_info:
            contract_manager.grant_role(user, Role.ADMIN_ROLE, other_user)

        assert exc_info.value.account == user
        assert exc_info.value.role is Role.DEFAULT_ADMIN_ROLE
        assert exc_info.value.role.role_id == ZERO_ROLE_ID

    def test_operational_admin_cannot_grant(self, contract_manager, admin, user):
        with pytest.raises(Unauthorized) as exc_info:
            contract_manager.grant_role(admin, Role.ADMIN_ROLE, user)

        assert exc_info.value.role is Role.DEFAULT_ADMIN_ROLE
        assert not contract_manager.has_role(Role.ADMIN_ROLE, user)

    def test_operational_admin_cannot_revoke(self, contract_manager, deployer, admin):
        with pytest.raises(Unauthorized) as exc_info:
            contract_manager.revoke_role(admin, Role.DEFAULT_ADMIN_ROLE, deployer)

        assert exc_info.value.role is Role.DEFAULT_ADMIN_ROLE
        assert contract_manager.has_role(Role.DEFAULT_ADMIN_ROLE, deployer)

    def test_non_admin_cannot_revoke(self, contract_manager, deployer, user):
        contract_manager.grant_role(deployer, Role.ADMIN_ROLE, user)

        with pytest.raises(Unauthorized):
            contract_manager.revoke_role(user, Role.ADMIN_ROLE, deployer)

    def test_grant_to_malformed_account_rejected(self, contract_manager, deployer):
        with pytest.raises(InvalidAddress):
            contract_manager.grant_role(deployer, Role.ADMIN_ROLE, "0xdeadbeef")

    def test_malformed_caller_is_unauthorized(self, contract_manager, user):
        with pytest.raises(Unauthorized):
            contract_manager.grant_role("root", Role.ADMIN_ROLE, user)

    def test_renounce_own_role(self, contract_manager, recorder, admin):
        assert contract_manager.renounce_role(admin, Role.ADMIN_ROLE, admin) is True

        assert not contract_manager.has_role(Role.ADMIN_ROLE, admin)
        assert_event(recorder.events[0], "RoleRevoked", role=Role.ADMIN_ROLE, account=admin, sender=admin)

    def test_renounce_requires_confirmation(self, contract_manager, admin, user):
        with pytest.raises(BadConfirmation):
            contract_manager.renounce_role(admin, Role.ADMIN_ROLE, user)

        assert contract_manager.has_role(Role.ADMIN_ROLE, admin)

    def test_renounce_unheld_role_is_noop(self, contract_manager, user):
        assert contract_manager.renounce_role(user, Role.ADMIN_ROLE, user) is False


@pytest.mark.unit
class TestRoleQueries:
    """Tests for has_role, require_role and get_role_members"""

    def test_has_role_never_fails(self, contract_manager):
        assert contract_manager.has_role(Role.ADMIN_ROLE, "") is False
        assert contract_manager.has_role(Role.ADMIN_ROLE, "garbage") is False

    def test_has_role_accepts_role_names(self, contract_manager, admin):
        assert contract_manager.has_role("ADMIN_ROLE", admin) is True
        assert contract_manager.has_role("DEFAULT_ADMIN_ROLE", admin) is False
        assert contract_manager.has_role("NOT_A_ROLE", admin) is False

    def test_grant_accepts_role_name(self, contract_manager, deployer, user):
        assert contract_manager.grant_role(deployer, "ADMIN_ROLE", user) is True
        assert contract_manager.has_role(Role.ADMIN_ROLE, user)

    def test_has_role_is_case_insensitive(self, contract_manager, admin):
        assert contract_manager.has_role(Role.ADMIN_ROLE, AddressFactory.checksum_like(admin))

    def test_require_role(self, contract_manager, admin, user):
        assert contract_manager.access_control.require_role(Role.ADMIN_ROLE, admin) == admin

        with pytest.raises(Unauthorized):
            contract_manager.access_control.require_role(Role.ADMIN_ROLE, user)

    def test_role_members(self, contract_manager, deployer, admin, user):
        contract_manager.grant_role(deployer, Role.ADMIN_ROLE, user)

        members = contract_manager.access_control.get_role_members(Role.ADMIN_ROLE)

        assert members == sorted([admin, user])
        assert contract_manager.access_control.get_role_members(Role.DEFAULT_ADMIN_ROLE) == [deployer]

"""
Pytest configuration for registry tests

Every test gets a fresh in-memory database, a deployment directory holding
two deployed contracts, and a contract manager deployed by `deployer` with
`admin` as operational admin.
"""

import pytest

from contract_manager.config import Settings
from contract_manager.database.connection import DatabaseManager, DatabaseSettings
from contract_manager.registries.deployment_directory import StaticDeploymentDirectory
from contract_manager.services.contract_manager_service import ContractManager
from contract_manager.services.event_service import EventBus
from contract_manager.tests.factories import AddressFactory
from contract_manager.tests.mocks import RecordingSubscriber


# Database fixtures
@pytest.fixture
def db_manager():
    """Fresh in-memory database with all tables"""
    manager = DatabaseManager(DatabaseSettings(database_url="sqlite://"))
    manager.create_tables()
    yield manager
    manager.close()


@pytest.fixture
def settings():
    """Registry settings with the default description limit"""
    return Settings(max_description_length=256)


# Account fixtures
@pytest.fixture
def accounts():
    """Deployer, operational admin and two unprivileged accounts"""
    deployer, admin, user, other_user = AddressFactory.create_addresses(4)
    return {"deployer": deployer, "admin": admin, "user": user, "other_user": other_user}


@pytest.fixture
def deployer(accounts):
    return accounts["deployer"]


@pytest.fixture
def admin(accounts):
    return accounts["admin"]


@pytest.fixture
def user(accounts):
    return accounts["user"]


@pytest.fixture
def other_user(accounts):
    return accounts["other_user"]


# Deployment fixtures
@pytest.fixture
def mock_contracts():
    """Addresses of two deployed contracts"""
    return AddressFactory.create_addresses(2)


@pytest.fixture
def mock_contract(mock_contracts):
    return mock_contracts[0]


@pytest.fixture
def deployment_directory(mock_contracts):
    return StaticDeploymentDirectory(mock_contracts)


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def contract_manager(db_manager, deployment_directory, event_bus, settings, deployer, admin):
    """Contract manager deployed by `deployer` with `admin` as operational admin"""
    return ContractManager.deploy(
        deployer,
        admin,
        db_manager=db_manager,
        deployment_directory=deployment_directory,
        event_bus=event_bus,
        settings=settings,
    )


@pytest.fixture
def recorder(contract_manager):
    """Subscriber recording events published after deployment"""
    subscriber = RecordingSubscriber()
    contract_manager.event_bus.subscribe(subscriber)
    return subscriber

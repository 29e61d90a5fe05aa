"""Service layer: access control, contract registry and event publication"""

from contract_manager.services.access_control_service import AccessControlService
from contract_manager.services.contract_manager_service import ContractManager
from contract_manager.services.event_service import EventBus

__all__ = ["AccessControlService", "ContractManager", "EventBus"]

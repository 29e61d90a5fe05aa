"""
Event Schemas

Change notifications emitted by the registry and access control. The
`event` field carries the event name so a persisted payload can be parsed
back into the right model.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from contract_manager.enums import Role


class ContractEvent(BaseModel):
    """Base class for every change notification"""

    model_config = ConfigDict(frozen=True)

    @property
    def subject(self) -> Optional[str]:
        """Contract address the event is about, if any"""
        return getattr(self, "address", None)


class ContractAdded(ContractEvent):
    event: Literal["ContractAdded"] = "ContractAdded"
    address: str
    description: str


class ContractUpdated(ContractEvent):
    event: Literal["ContractUpdated"] = "ContractUpdated"
    address: str
    new_description: str


class ContractRemoved(ContractEvent):
    event: Literal["ContractRemoved"] = "ContractRemoved"
    address: str


class RoleGranted(ContractEvent):
    event: Literal["RoleGranted"] = "RoleGranted"
    role: Role
    account: str
    sender: str


class RoleRevoked(ContractEvent):
    event: Literal["RoleRevoked"] = "RoleRevoked"
    role: Role
    account: str
    sender: str


AnyContractEvent = Annotated[
    Union[ContractAdded, ContractUpdated, ContractRemoved, RoleGranted, RoleRevoked],
    Field(discriminator="event"),
]

event_adapter: TypeAdapter[AnyContractEvent] = TypeAdapter(AnyContractEvent)

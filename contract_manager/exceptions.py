"""
Contract Manager Exceptions

Every rejected operation raises one of these. Raising aborts the surrounding
transaction, so state is left exactly as it was before the call.
"""

from contract_manager.enums import Role


class ContractManagerError(Exception):
    """Base exception for contract manager errors"""
    pass


class Unauthorized(ContractManagerError):
    """Caller lacks the role required for the operation"""

    def __init__(self, account: str, role: Role):
        self.account = account
        self.role = role
        super().__init__(f"Account {account} is missing role {role.value} ({role.role_id})")


class InvalidAddress(ContractManagerError):
    """Address is malformed, the zero address, or not a deployed contract"""

    def __init__(self, address: str):
        self.address = address
        super().__init__(f"Invalid contract address: {address!r}")


class ContractAlreadyExists(ContractManagerError):
    """A live entry already exists for the address"""

    def __init__(self, address: str):
        self.address = address
        super().__init__(f"Contract already exists: {address}")


class ContractDoesNotExist(ContractManagerError):
    """No live entry exists for the address"""

    def __init__(self, address: str):
        self.address = address
        super().__init__(f"Contract does not exist: {address}")


class MismatchedInputLengths(ContractManagerError):
    """Batch address and description lists differ in length"""

    def __init__(self, addresses_length: int, descriptions_length: int):
        self.addresses_length = addresses_length
        self.descriptions_length = descriptions_length
        super().__init__(
            f"Got {addresses_length} addresses but {descriptions_length} descriptions"
        )


class EmptyDescription(ContractManagerError):
    """Description is empty"""

    def __init__(self):
        super().__init__("Description must not be empty")


class InvalidDescription(ContractManagerError):
    """Description cannot be encoded as UTF-8"""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Description is not valid UTF-8 text: {reason}")


class DescriptionTooLong(ContractManagerError):
    """Description exceeds the maximum UTF-8 length"""

    def __init__(self, length: int, max_length: int):
        self.length = length
        self.max_length = max_length
        super().__init__(f"Description is {length} bytes, maximum is {max_length}")


class BadConfirmation(ContractManagerError):
    """Role renunciation was not confirmed by the renouncing account"""

    def __init__(self, account: str, confirmation: str):
        self.account = account
        self.confirmation = confirmation
        super().__init__(f"Account {account} can only renounce roles for itself, not {confirmation}")


class AlreadyInitialized(ContractManagerError):
    """The store already has a root role holder"""

    def __init__(self):
        super().__init__("Contract manager is already initialized")

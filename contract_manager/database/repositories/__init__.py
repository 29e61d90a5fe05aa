"""Database repositories for data access layer"""

from .base import BaseRepository
from .contract import ContractRepository
from .event import EventRepository
from .role import RoleRepository


__all__ = [
    "BaseRepository",
    "ContractRepository",
    "EventRepository",
    "RoleRepository",
]

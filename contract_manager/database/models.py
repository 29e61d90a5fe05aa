"""
Database Models for the Contract Manager

SQLModel table models. Row presence is the existence flag: a contract is
registered exactly when its row exists, and an account holds a role exactly
when the (role, account) row exists.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from contract_manager.utils.validation import MAX_STORED_DESCRIPTION_LENGTH


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ContractEntry(SQLModel, table=True):
    """
    Registered contract

    Maps a deployed contract address to its human-readable description.
    """

    __tablename__ = "contract_entries"

    address: str = Field(primary_key=True, max_length=42)  # lowercase 0x-hex
    description: str = Field(max_length=MAX_STORED_DESCRIPTION_LENGTH)  # validated in UTF-8 bytes by the service

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))


class RoleMember(SQLModel, table=True):
    """Role membership: one row per (role, account) pair"""

    __tablename__ = "role_members"

    role: str = Field(primary_key=True, max_length=64)  # Role value
    account: str = Field(primary_key=True, max_length=42)

    granted_by: Optional[str] = Field(default=None, max_length=42)
    granted_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))


class EventRecord(SQLModel, table=True):
    """
    Append-only event log

    Rows are written in the same transaction as the change they describe,
    so a rolled-back operation leaves no trace here.
    """

    __tablename__ = "contract_events"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True, max_length=64)  # event model name
    address: Optional[str] = Field(default=None, index=True, max_length=42)
    payload: str  # JSON of the event model

    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))

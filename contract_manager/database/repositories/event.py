"""
Event Repository

Appends to and reads from the event log.
"""

from collections.abc import Iterable

from sqlmodel import Session, select

from contract_manager.database.models import EventRecord
from contract_manager.database.repositories.base import BaseRepository
from contract_manager.schemas.events import ContractEvent


class EventRepository(BaseRepository[EventRecord]):
    """Repository for the append-only event log"""

    def __init__(self, session: Session):
        """Initialize event repository"""
        super().__init__(EventRecord, session)

    def append(self, events: Iterable[ContractEvent]) -> list[EventRecord]:
        """
        Append events to the log in the given order

        Args:
            events: Events emitted by the current operation

        Returns:
            The staged event records
        """
        records = []
        for event in events:
            record = EventRecord(
                name=event.event,
                address=event.subject,
                payload=event.model_dump_json(),
            )
            self.session.add(record)
            records.append(record)
        self.session.flush()
        return records

    def list_after(self, after_id: int = 0, limit: int = 100) -> list[EventRecord]:
        """
        Get log records with id greater than after_id, oldest first

        Args:
            after_id: Id of the last record already seen
            limit: Maximum number of records to return

        Returns:
            List of event records
        """
        statement = select(EventRecord).where(EventRecord.id > after_id).order_by(EventRecord.id).limit(limit)
        return list(self.session.exec(statement).all())

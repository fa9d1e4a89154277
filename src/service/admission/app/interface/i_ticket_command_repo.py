from abc import ABC, abstractmethod
from uuid import UUID

from src.platform.exception.exceptions import ConflictError
from src.service.admission.domain.entity.ticket_entity import Ticket


class TicketNumberConflictError(ConflictError):
    """Another ticket already carries the generated ticket number."""

    def __init__(self, ticket_number: str) -> None:
        self.ticket_number = ticket_number
        super().__init__(f'Ticket number already in use: {ticket_number}')


class UnitAlreadyIssuedError(ConflictError):
    """A concurrent issuer persisted this (booking, unit_index) first."""

    def __init__(self, existing: Ticket) -> None:
        self.existing = existing
        super().__init__(
            f'Ticket unit {existing.unit_index} of booking {existing.booking_id} already issued'
        )


class ITicketCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, ticket: Ticket) -> Ticket:
        """
        Persist a newly issued ticket in its own transaction

        Args:
            ticket: Ticket with status valid and scan_count 0

        Returns:
            Persisted ticket

        Raises:
            UnitAlreadyIssuedError: The booking already has a ticket for this unit_index
            TicketNumberConflictError: The ticket number is taken by another ticket
        """
        pass

    @abstractmethod
    async def update_credential(self, *, ticket_id: UUID, credential: str) -> Ticket:
        """Replace the stored credential (re-encoding after key rotation)"""
        pass

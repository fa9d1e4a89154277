from abc import ABC, abstractmethod
from uuid import UUID

from src.service.admission.domain.entity.ticket_entity import Ticket


class ITicketQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, ticket_id: UUID) -> Ticket | None:
        pass

    @abstractmethod
    async def get_by_ticket_number(self, *, ticket_number: str) -> Ticket | None:
        pass

    @abstractmethod
    async def list_by_booking(self, *, booking_id: UUID) -> list[Ticket]:
        """Tickets of a booking ordered by unit_index"""
        pass

    @abstractmethod
    async def exists_ticket_number(self, *, ticket_number: str) -> bool:
        pass

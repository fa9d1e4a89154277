from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.service.admission.domain.entity.seat_entity import Seat


class ISeatCommandRepo(ABC):
    """
    Seat inventory operations.

    Claiming is done with conditional updates guarded by status='available',
    never by reading candidates and updating them by id afterwards.
    """

    @abstractmethod
    async def allocate(
        self,
        *,
        booking_id: UUID,
        event_id: UUID,
        quantity: int,
        preferred_section: Optional[str] = None,
    ) -> list[Seat]:
        """
        Claim exactly `quantity` available seats for a booking in one transaction

        Seats are taken in ascending seat_number order. Seats the booking
        already owns count towards `quantity`. A preferred section is used
        when it can seat the whole shortfall; otherwise the lowest available
        seats of the whole event are claimed instead.

        Args:
            booking_id: Owning booking
            event_id: Event whose inventory is claimed
            quantity: Number of seats to claim (> 0)
            preferred_section: Section to try first

        Returns:
            Every seat the booking owns, ordered by seat_number

        Raises:
            InsufficientSeatsError: Fewer than `quantity` seats were available
                (requested=quantity, available=owned + claimable); nothing was claimed
        """
        pass

    @abstractmethod
    async def release(self, *, booking_id: UUID) -> int:
        """
        Return every seat owned by the booking to the available pool

        Returns:
            Number of seats released
        """
        pass

    @abstractmethod
    async def list_by_booking(self, *, booking_id: UUID) -> list[Seat]:
        """Seats owned by the booking ordered by seat_number"""
        pass

    @abstractmethod
    async def count_available(self, *, event_id: UUID, section: Optional[str] = None) -> int:
        pass

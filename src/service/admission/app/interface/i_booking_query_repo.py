from abc import ABC, abstractmethod
from uuid import UUID

from src.service.admission.domain.entity.booking_entity import Booking


class IBookingQueryRepo(ABC):
    """Read access to bookings; the payment subsystem owns writes."""

    @abstractmethod
    async def get_by_id(self, *, booking_id: UUID) -> Booking | None:
        """
        Get single booking by ID

        Args:
            booking_id: Booking ID

        Returns:
            Booking entity or None if not found
        """
        pass

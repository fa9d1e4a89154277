from typing import Optional, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import DomainError, InsufficientSeatsError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.admission_metrics import metrics
from src.service.admission.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.admission.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.admission.app.interface.i_seat_command_repo import ISeatCommandRepo
from src.service.admission.domain.entity.seat_entity import Seat


class AllocateSeatsUseCase:
    """
    Reserve seats for a booking.

    Idempotent per booking: seats the booking already owns count towards
    `quantity`, only the shortfall is claimed.
    """

    def __init__(
        self,
        *,
        seat_command_repo: ISeatCommandRepo,
        event_query_repo: IEventQueryRepo,
        booking_query_repo: IBookingQueryRepo,
    ) -> None:
        self.seat_command_repo = seat_command_repo
        self.event_query_repo = event_query_repo
        self.booking_query_repo = booking_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        seat_command_repo: ISeatCommandRepo = Depends(Provide[Container.seat_command_repo]),
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
    ) -> Self:
        return cls(
            seat_command_repo=seat_command_repo,
            event_query_repo=event_query_repo,
            booking_query_repo=booking_query_repo,
        )

    @Logger.io
    async def allocate(
        self,
        *,
        booking_id: UUID,
        event_id: UUID,
        quantity: int,
        preferred_section: Optional[str] = None,
    ) -> list[Seat]:
        if quantity < 1:
            raise DomainError('quantity must be at least 1')

        event = await self.event_query_repo.get_by_id(event_id=event_id)
        if not event:
            raise NotFoundError('Event not found')
        if not event.has_seat_allocation:
            raise DomainError('Event does not use seat allocation')

        booking = await self.booking_query_repo.get_by_id(booking_id=booking_id)
        if not booking:
            raise NotFoundError('Booking not found')
        if booking.event_id != event_id:
            raise DomainError('Booking does not belong to this event')

        try:
            seats = await self.seat_command_repo.allocate(
                booking_id=booking_id,
                event_id=event_id,
                quantity=quantity,
                preferred_section=preferred_section,
            )
        except InsufficientSeatsError:
            metrics.record_seat_allocation(result='insufficient')
            raise

        metrics.record_seat_allocation(result='success')
        return seats

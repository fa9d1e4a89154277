from typing import Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.admission.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.admission.app.interface.i_ticket_query_repo import ITicketQueryRepo
from src.service.admission.domain.entity.ticket_entity import Ticket


class ListBookingTicketsUseCase:
    def __init__(
        self, *, ticket_query_repo: ITicketQueryRepo, booking_query_repo: IBookingQueryRepo
    ) -> None:
        self.ticket_query_repo = ticket_query_repo
        self.booking_query_repo = booking_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        ticket_query_repo: ITicketQueryRepo = Depends(Provide[Container.ticket_query_repo]),
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
    ) -> Self:
        return cls(ticket_query_repo=ticket_query_repo, booking_query_repo=booking_query_repo)

    @Logger.io
    async def list_by_booking(self, *, booking_id: UUID) -> list[Ticket]:
        """Tickets of a booking ordered by unit index."""
        booking = await self.booking_query_repo.get_by_id(booking_id=booking_id)
        if not booking:
            raise NotFoundError('Booking not found')
        return await self.ticket_query_repo.list_by_booking(booking_id=booking_id)

from typing import AsyncContextManager, Callable
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.admission.app.interface.i_ticket_command_repo import (
    ITicketCommandRepo,
    TicketNumberConflictError,
    UnitAlreadyIssuedError,
)
from src.service.admission.domain.entity.ticket_entity import Ticket
from src.service.admission.driven_adapter.model.ticket_model import TicketModel
from src.service.admission.driven_adapter.repo.row_mapper import ticket_to_entity


class TicketCommandRepoImpl(ITicketCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @staticmethod
    def _to_model(ticket: Ticket) -> TicketModel:
        return TicketModel(
            id=ticket.id,
            booking_id=ticket.booking_id,
            event_id=ticket.event_id,
            unit_index=ticket.unit_index,
            ticket_number=ticket.ticket_number,
            credential=ticket.credential,
            status=ticket.status.value,
            seat_id=ticket.seat_id,
            seat_number=ticket.seat_number,
            section=ticket.section,
            row_number=ticket.row_number,
            scan_count=ticket.scan_count,
        )

    @Logger.io
    async def create(self, *, ticket: Ticket) -> Ticket:
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    model = self._to_model(ticket)
                    session.add(model)
                    await session.flush()
                    await session.refresh(model)
                    return ticket_to_entity(model)
        except IntegrityError:
            # Two unique constraints can fire; tell them apart by looking at the unit
            existing = await self._get_unit(
                booking_id=ticket.booking_id, unit_index=ticket.unit_index
            )
            if existing is not None:
                raise UnitAlreadyIssuedError(existing)
            raise TicketNumberConflictError(ticket.ticket_number)

    @Logger.io
    async def update_credential(self, *, ticket_id: UUID, credential: str) -> Ticket:
        async with self.session_factory() as session:
            async with session.begin():
                result = await session.execute(
                    update(TicketModel)
                    .where(TicketModel.id == ticket_id)
                    .values(credential=credential)
                    .returning(*TicketModel.__table__.c)
                    .execution_options(synchronize_session=False)
                )
                row = result.one_or_none()
                if row is None:
                    raise NotFoundError('Ticket not found')
                return ticket_to_entity(row)

    async def _get_unit(self, *, booking_id: UUID, unit_index: int) -> Ticket | None:
        async with self.session_factory() as session:
            result = await session.execute(
                select(TicketModel).where(
                    TicketModel.booking_id == booking_id,
                    TicketModel.unit_index == unit_index,
                )
            )
            model = result.scalar_one_or_none()
            return ticket_to_entity(model) if model else None

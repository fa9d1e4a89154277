from typing import AsyncContextManager, Callable
from uuid import UUID

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.admission.app.interface.i_ticket_query_repo import ITicketQueryRepo
from src.service.admission.domain.entity.ticket_entity import Ticket
from src.service.admission.driven_adapter.model.ticket_model import TicketModel
from src.service.admission.driven_adapter.repo.row_mapper import ticket_to_entity


class TicketQueryRepoImpl(ITicketQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def get_by_id(self, *, ticket_id: UUID) -> Ticket | None:
        async with self.session_factory() as session:
            result = await session.execute(select(TicketModel).where(TicketModel.id == ticket_id))
            model = result.scalar_one_or_none()
            return ticket_to_entity(model) if model else None

    @Logger.io
    async def get_by_ticket_number(self, *, ticket_number: str) -> Ticket | None:
        async with self.session_factory() as session:
            result = await session.execute(
                select(TicketModel).where(TicketModel.ticket_number == ticket_number)
            )
            model = result.scalar_one_or_none()
            return ticket_to_entity(model) if model else None

    @Logger.io
    async def list_by_booking(self, *, booking_id: UUID) -> list[Ticket]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(TicketModel)
                .where(TicketModel.booking_id == booking_id)
                .order_by(TicketModel.unit_index)
            )
            return [ticket_to_entity(model) for model in result.scalars().all()]

    @Logger.io
    async def exists_ticket_number(self, *, ticket_number: str) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(
                select(exists().where(TicketModel.ticket_number == ticket_number))
            )
            return bool(result.scalar())

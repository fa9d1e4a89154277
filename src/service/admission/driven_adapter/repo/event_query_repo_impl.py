from typing import AsyncContextManager, Callable
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.admission.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.admission.domain.entity.event_entity import Event
from src.service.admission.driven_adapter.model.event_model import EventModel


class EventQueryRepoImpl(IEventQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def get_by_id(self, *, event_id: UUID) -> Event | None:
        async with self.session_factory() as session:
            result = await session.execute(select(EventModel).where(EventModel.id == event_id))
            db_event = result.scalar_one_or_none()
            if db_event is None:
                return None
            return Event(
                id=db_event.id,
                name=db_event.name,
                capacity=db_event.capacity,
                has_seat_allocation=db_event.has_seat_allocation,
            )

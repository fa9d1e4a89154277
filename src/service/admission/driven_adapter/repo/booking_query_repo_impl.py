from typing import AsyncContextManager, Callable
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.admission.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.admission.domain.entity.booking_entity import Booking
from src.service.admission.domain.enum.payment_status import PaymentStatus
from src.service.admission.driven_adapter.model.booking_model import BookingModel


class BookingQueryRepoImpl(IBookingQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @staticmethod
    def _to_entity(db_booking: BookingModel) -> Booking:
        return Booking(
            id=db_booking.id,
            event_id=db_booking.event_id,
            quantity=db_booking.quantity,
            payment_status=PaymentStatus(db_booking.payment_status),
            preferred_section=db_booking.preferred_section,
            holder_name=db_booking.holder_name,
            holder_email=db_booking.holder_email,
        )

    @Logger.io
    async def get_by_id(self, *, booking_id: UUID) -> Booking | None:
        async with self.session_factory() as session:
            result = await session.execute(
                select(BookingModel).where(BookingModel.id == booking_id)
            )
            db_booking = result.scalar_one_or_none()
            return self._to_entity(db_booking) if db_booking else None

from datetime import datetime, timezone
from typing import AsyncContextManager, Callable, Optional
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import InsufficientSeatsError
from src.platform.logging.loguru_io import Logger
from src.service.admission.app.interface.i_seat_command_repo import ISeatCommandRepo
from src.service.admission.domain.entity.seat_entity import Seat
from src.service.admission.domain.enum.seat_status import SeatStatus
from src.service.admission.driven_adapter.model.booking_model import BookingModel
from src.service.admission.driven_adapter.model.seat_model import SeatModel
from src.service.admission.driven_adapter.repo.row_mapper import seat_to_entity


class SeatCommandRepoImpl(ISeatCommandRepo):
    """
    Seat allocation against the relational store.

    Each claim pass is one statement:

        UPDATE seat SET status='booked', booking_id=:b, booked_at=:now
        WHERE id IN (SELECT id FROM seat
                     WHERE event_id=:e AND status='available' [AND section=:s]
                     ORDER BY seat_number LIMIT :n
                     FOR UPDATE SKIP LOCKED)
          AND status='available'
        RETURNING ...

    Concurrent allocators skip each other's locked rows on PostgreSQL; on
    SQLite the database write lock serializes them. The claimed count is
    checked before commit and a shortfall rolls the whole transaction back.

    A preferred section is used only when it can seat the whole shortfall;
    otherwise the claim is taken from the lowest seats of the whole pool.
    """

    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

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
            raise ValueError('quantity must be positive')

        async with self.session_factory() as session:
            async with session.begin():
                await self._lock_booking(session, booking_id=booking_id)
                owned = await self._count_owned(session, booking_id=booking_id)
                shortfall = quantity - owned
                if shortfall > 0:
                    claimed = await self._claim(
                        session,
                        booking_id=booking_id,
                        event_id=event_id,
                        limit=shortfall,
                        section=preferred_section,
                    )
                    if preferred_section is not None and len(claimed) < shortfall:
                        # Section cannot seat the whole shortfall: the lowest seats
                        # of the whole pool replace its partial picks
                        await self._unclaim(session, seat_ids=[seat.id for seat in claimed])
                        claimed = await self._claim(
                            session,
                            booking_id=booking_id,
                            event_id=event_id,
                            limit=shortfall,
                            section=None,
                        )
                    if len(claimed) < shortfall:
                        # Raising inside begin() rolls back every claim made above
                        raise InsufficientSeatsError(
                            requested=quantity, available=owned + len(claimed)
                        )
                    Logger.base.info(
                        f'💺 [SEAT] Allocated {len(claimed)} seats to booking {booking_id}'
                    )

                result = await session.execute(
                    select(SeatModel)
                    .where(SeatModel.booking_id == booking_id)
                    .order_by(SeatModel.seat_number)
                )
                return [seat_to_entity(row) for row in result.scalars().all()]

    @Logger.io
    async def release(self, *, booking_id: UUID) -> int:
        async with self.session_factory() as session:
            async with session.begin():
                result = await session.execute(
                    update(SeatModel)
                    .where(SeatModel.booking_id == booking_id)
                    .values(status=SeatStatus.AVAILABLE.value, booking_id=None, booked_at=None)
                    .returning(SeatModel.id)
                    .execution_options(synchronize_session=False)
                )
                released = len(result.all())
        if released:
            Logger.base.info(f'💺 [SEAT] Released {released} seats from booking {booking_id}')
        return released

    @Logger.io
    async def list_by_booking(self, *, booking_id: UUID) -> list[Seat]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(SeatModel)
                .where(SeatModel.booking_id == booking_id)
                .order_by(SeatModel.seat_number)
            )
            return [seat_to_entity(row) for row in result.scalars().all()]

    @Logger.io
    async def count_available(self, *, event_id: UUID, section: Optional[str] = None) -> int:
        stmt = (
            select(func.count())
            .select_from(SeatModel)
            .where(
                SeatModel.event_id == event_id,
                SeatModel.status == SeatStatus.AVAILABLE.value,
            )
        )
        if section is not None:
            stmt = stmt.where(SeatModel.section == section)
        async with self.session_factory() as session:
            return int((await session.execute(stmt)).scalar_one())

    @staticmethod
    async def _lock_booking(session: AsyncSession, *, booking_id: UUID) -> None:
        """Serialize allocations of one booking (row lock; no-op on SQLite)"""
        await session.execute(
            select(BookingModel.id).where(BookingModel.id == booking_id).with_for_update()
        )

    @staticmethod
    async def _count_owned(session: AsyncSession, *, booking_id: UUID) -> int:
        result = await session.execute(
            select(func.count()).select_from(SeatModel).where(SeatModel.booking_id == booking_id)
        )
        return int(result.scalar_one())

    @staticmethod
    async def _claim(
        session: AsyncSession,
        *,
        booking_id: UUID,
        event_id: UUID,
        limit: int,
        section: Optional[str],
    ) -> list[Seat]:
        candidates = (
            select(SeatModel.id)
            .where(
                SeatModel.event_id == event_id,
                SeatModel.status == SeatStatus.AVAILABLE.value,
            )
            .order_by(SeatModel.seat_number)
            .limit(limit)
            .with_for_update(skip_locked=True)
        )
        if section is not None:
            candidates = candidates.where(SeatModel.section == section)

        result = await session.execute(
            update(SeatModel)
            .where(
                SeatModel.id.in_(candidates),
                SeatModel.status == SeatStatus.AVAILABLE.value,
            )
            .values(
                status=SeatStatus.BOOKED.value,
                booking_id=booking_id,
                booked_at=datetime.now(timezone.utc),
            )
            .returning(*SeatModel.__table__.c)
            .execution_options(synchronize_session=False)
        )
        seats = [seat_to_entity(row) for row in result.all()]
        return sorted(seats, key=lambda seat: seat.seat_number)

    @staticmethod
    async def _unclaim(session: AsyncSession, *, seat_ids: list[UUID]) -> None:
        """Undo claims made earlier in the same transaction"""
        if not seat_ids:
            return
        await session.execute(
            update(SeatModel)
            .where(SeatModel.id.in_(seat_ids))
            .values(status=SeatStatus.AVAILABLE.value, booking_id=None, booked_at=None)
            .execution_options(synchronize_session=False)
        )

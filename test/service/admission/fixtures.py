"""Seed helpers for integration tests; rows are inserted through the ORM models."""

from typing import Optional
from uuid import UUID

from uuid_utils.compat import uuid7

from src.platform.database.db_setting import Database
from src.service.admission.domain.enum.payment_status import PaymentStatus
from src.service.admission.domain.enum.seat_status import SeatStatus
from src.service.admission.driven_adapter.model.booking_model import BookingModel
from src.service.admission.driven_adapter.model.event_model import EventModel
from src.service.admission.driven_adapter.model.seat_model import SeatModel


TEST_SECRET = 'test-credential-secret'
LEGACY_PATTERN = r'^[A-Z0-9]{3,8}(-[A-Z0-9]{1,16}){1,3}$'


async def seed_event(
    database: Database,
    *,
    has_seat_allocation: bool = False,
    capacity: int = 100,
    name: str = 'Spring Concert',
) -> UUID:
    event_id = uuid7()
    async with database.session() as session:
        async with session.begin():
            session.add(
                EventModel(
                    id=event_id,
                    name=name,
                    capacity=capacity,
                    has_seat_allocation=has_seat_allocation,
                )
            )
    return event_id


async def seed_booking(
    database: Database,
    *,
    event_id: UUID,
    quantity: int = 1,
    payment_status: PaymentStatus = PaymentStatus.COMPLETED,
    preferred_section: Optional[str] = None,
    holder_name: Optional[str] = 'Ada Lovelace',
    holder_email: Optional[str] = 'ada@example.com',
) -> UUID:
    booking_id = uuid7()
    async with database.session() as session:
        async with session.begin():
            session.add(
                BookingModel(
                    id=booking_id,
                    event_id=event_id,
                    quantity=quantity,
                    payment_status=payment_status.value,
                    preferred_section=preferred_section,
                    holder_name=holder_name,
                    holder_email=holder_email,
                )
            )
    return booking_id


async def seed_seats(
    database: Database,
    *,
    event_id: UUID,
    seat_numbers: list[int],
    section: Optional[str] = None,
    row_number: Optional[str] = None,
    status: SeatStatus = SeatStatus.AVAILABLE,
) -> list[UUID]:
    seat_ids = [uuid7() for _ in seat_numbers]
    async with database.session() as session:
        async with session.begin():
            session.add_all(
                [
                    SeatModel(
                        id=seat_id,
                        event_id=event_id,
                        seat_number=number,
                        section=section,
                        row_number=row_number,
                        status=status.value,
                    )
                    for seat_id, number in zip(seat_ids, seat_numbers)
                ]
            )
    return seat_ids

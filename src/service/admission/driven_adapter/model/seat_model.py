from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.db_setting import Base
from src.platform.types.utc_datetime import UtcDateTime


class SeatModel(Base):
    __tablename__ = 'seat'

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    event_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey('event.id'), nullable=False
    )
    seat_number: Mapped[int] = mapped_column(Integer, nullable=False)
    row_number: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    section: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    status: Mapped[str] = mapped_column(String(20), default='available', nullable=False)
    booking_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid(as_uuid=True), ForeignKey('booking.id'), nullable=True, index=True
    )
    booked_at: Mapped[Optional[datetime]] = mapped_column(UtcDateTime(), nullable=True)

    __table_args__ = (
        UniqueConstraint('event_id', 'seat_number', name='uq_seat_event_number'),
        Index('ix_seat_event_status_number', 'event_id', 'status', 'seat_number'),
        CheckConstraint(
            "status <> 'booked' OR booking_id IS NOT NULL", name='ck_seat_booked_has_booking'
        ),
    )

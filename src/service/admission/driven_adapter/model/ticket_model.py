from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import ForeignKey, Integer, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.db_setting import Base
from src.platform.types.utc_datetime import UtcDateTime


class TicketModel(Base):
    __tablename__ = 'ticket'

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)  # UUID7
    booking_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey('booking.id'), nullable=False, index=True
    )
    event_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey('event.id'), nullable=False, index=True
    )
    unit_index: Mapped[int] = mapped_column(Integer, nullable=False)
    ticket_number: Mapped[str] = mapped_column(String(64), nullable=False)
    credential: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default='valid', nullable=False)
    seat_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid(as_uuid=True), ForeignKey('seat.id'), nullable=True
    )
    seat_number: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    section: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    row_number: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    scan_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    first_scanned_at: Mapped[Optional[datetime]] = mapped_column(UtcDateTime(), nullable=True)
    last_scanned_at: Mapped[Optional[datetime]] = mapped_column(UtcDateTime(), nullable=True)
    checked_in_at: Mapped[Optional[datetime]] = mapped_column(UtcDateTime(), nullable=True)
    checked_in_by: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        UtcDateTime(), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        UniqueConstraint('ticket_number', name='uq_ticket_number'),
        UniqueConstraint('booking_id', 'unit_index', name='uq_ticket_booking_unit'),
    )

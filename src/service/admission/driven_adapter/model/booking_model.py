from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.db_setting import Base
from src.platform.types.utc_datetime import UtcDateTime


class BookingModel(Base):
    __tablename__ = 'booking'

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)  # UUID7
    event_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey('event.id'), nullable=False, index=True
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    payment_status: Mapped[str] = mapped_column(String(20), default='pending', nullable=False)
    preferred_section: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    holder_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    holder_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        UtcDateTime(), server_default=func.now(), nullable=False
    )

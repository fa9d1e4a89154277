from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import JSON, ForeignKey, Index, String, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.db_setting import Base
from src.platform.types.utc_datetime import UtcDateTime


class ScanRecordModel(Base):
    """Append-only; rows are never updated or deleted."""

    __tablename__ = 'scan_record'

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    ticket_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid(as_uuid=True), ForeignKey('ticket.id'), nullable=True, index=True
    )
    event_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    scanned_by: Mapped[str] = mapped_column(String(255), nullable=False)
    result: Mapped[str] = mapped_column(String(20), nullable=False)
    scanned_at: Mapped[datetime] = mapped_column(UtcDateTime(), nullable=False)
    device_info: Mapped[Optional[dict[str, Any]]] = mapped_column(
        JSON().with_variant(JSONB(), 'postgresql'), nullable=True
    )

    __table_args__ = (Index('ix_scan_record_event_scanned_at', 'event_id', 'scanned_at'),)

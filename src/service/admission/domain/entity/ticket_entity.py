from datetime import datetime
from typing import Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from src.platform.logging.loguru_io import Logger
from src.service.admission.domain.entity.seat_entity import Seat
from src.service.admission.domain.enum.ticket_status import TicketStatus


@attrs.define(frozen=True)
class Ticket:
    """
    One admission unit of a booking.

    unit_index (1..quantity) is unique per booking and is the idempotency key
    for issuance. Status only moves valid -> used through a scan; cancelled is
    set by administrative action and is terminal.
    """

    id: UUID
    booking_id: UUID
    event_id: UUID
    unit_index: int
    ticket_number: str
    credential: str = attrs.field(repr=False)
    status: TicketStatus = TicketStatus.VALID
    seat_id: Optional[UUID] = None
    seat_number: Optional[int] = None
    section: Optional[str] = None
    row_number: Optional[str] = None
    scan_count: int = 0
    first_scanned_at: Optional[datetime] = None
    last_scanned_at: Optional[datetime] = None
    checked_in_at: Optional[datetime] = None
    checked_in_by: Optional[str] = None
    created_at: Optional[datetime] = None

    @staticmethod
    def new_id() -> UUID:
        return uuid7()

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        id: UUID,
        booking_id: UUID,
        event_id: UUID,
        unit_index: int,
        ticket_number: str,
        credential: str,
        seat: Optional[Seat] = None,
        created_at: Optional[datetime] = None,
    ) -> 'Ticket':
        if unit_index < 1:
            raise ValueError('unit_index starts at 1')
        return cls(
            id=id,
            booking_id=booking_id,
            event_id=event_id,
            unit_index=unit_index,
            ticket_number=ticket_number,
            credential=credential,
            status=TicketStatus.VALID,
            seat_id=seat.id if seat else None,
            seat_number=seat.seat_number if seat else None,
            section=seat.section if seat else None,
            row_number=seat.row_number if seat else None,
            scan_count=0,
            created_at=created_at,
        )

    def with_credential(self, credential: str) -> 'Ticket':
        return attrs.evolve(self, credential=credential)

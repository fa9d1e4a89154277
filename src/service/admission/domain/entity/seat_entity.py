from datetime import datetime
from typing import Optional
from uuid import UUID

import attrs

from src.service.admission.domain.enum.seat_status import SeatStatus


def _validate_owner(instance: 'Seat', attribute: attrs.Attribute, value: Optional[UUID]) -> None:
    if instance.status == SeatStatus.BOOKED and value is None:
        raise ValueError('A booked seat must reference its booking')


@attrs.define(frozen=True)
class Seat:
    id: UUID
    event_id: UUID
    seat_number: int
    status: SeatStatus = SeatStatus.AVAILABLE
    row_number: Optional[str] = None
    section: Optional[str] = None
    booking_id: Optional[UUID] = attrs.field(default=None, validator=_validate_owner)
    booked_at: Optional[datetime] = None

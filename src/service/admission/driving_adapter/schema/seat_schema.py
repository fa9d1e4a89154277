from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.service.admission.domain.entity.seat_entity import Seat


class AllocateSeatsRequest(BaseModel):
    booking_id: UUID
    quantity: int = Field(ge=1)
    preferred_section: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'booking_id': '01234567-89ab-7def-0123-456789abcdef',
                'quantity': 2,
                'preferred_section': 'A',
            }
        }
    )


class SeatResponse(BaseModel):
    id: UUID
    event_id: UUID
    seat_number: int
    status: str
    row_number: Optional[str] = None
    section: Optional[str] = None
    booking_id: Optional[UUID] = None
    booked_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, seat: Seat) -> 'SeatResponse':
        return cls(
            id=seat.id,
            event_id=seat.event_id,
            seat_number=seat.seat_number,
            status=seat.status.value,
            row_number=seat.row_number,
            section=seat.section,
            booking_id=seat.booking_id,
            booked_at=seat.booked_at,
        )


class AllocateSeatsResponse(BaseModel):
    booking_id: UUID
    seat_display: str
    seats: List[SeatResponse]


class ReleaseSeatsResponse(BaseModel):
    booking_id: UUID
    released: int

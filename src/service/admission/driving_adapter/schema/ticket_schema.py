from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from src.service.admission.domain.entity.ticket_entity import Ticket
from src.service.admission.domain.value_object.issuance_result import IssuanceResult


class IssueTicketsRequest(BaseModel):
    rotate_credentials: bool = False

    model_config = ConfigDict(json_schema_extra={'example': {'rotate_credentials': False}})


class PaymentConfirmedRequest(BaseModel):
    booking_id: UUID

    model_config = ConfigDict(
        json_schema_extra={'example': {'booking_id': '01234567-89ab-7def-0123-456789abcdef'}}
    )


class TicketResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'id': '01234567-89ab-7def-0123-456789abcdef',
                'booking_id': '01234567-89ab-7def-0123-456789abcdee',
                'event_id': '00000000-0000-0000-0000-000000000001',
                'unit_index': 1,
                'ticket_number': '0000-M5X2K1QZ-7Q2C',
                'credential': 'gAAAAAB...',
                'status': 'valid',
                'seat_number': 12,
                'section': 'A',
                'row_number': '3',
                'scan_count': 0,
            }
        }
    )

    id: UUID
    booking_id: UUID
    event_id: UUID
    unit_index: int
    ticket_number: str
    credential: str
    status: str
    seat_number: Optional[int] = None
    section: Optional[str] = None
    row_number: Optional[str] = None
    scan_count: int = 0
    first_scanned_at: Optional[datetime] = None
    checked_in_at: Optional[datetime] = None
    checked_in_by: Optional[str] = None

    @classmethod
    def from_entity(cls, ticket: Ticket) -> 'TicketResponse':
        return cls(
            id=ticket.id,
            booking_id=ticket.booking_id,
            event_id=ticket.event_id,
            unit_index=ticket.unit_index,
            ticket_number=ticket.ticket_number,
            credential=ticket.credential,
            status=ticket.status.value,
            seat_number=ticket.seat_number,
            section=ticket.section,
            row_number=ticket.row_number,
            scan_count=ticket.scan_count,
            first_scanned_at=ticket.first_scanned_at,
            checked_in_at=ticket.checked_in_at,
            checked_in_by=ticket.checked_in_by,
        )


class IssuanceResponse(BaseModel):
    booking_id: UUID
    requested: int
    issued: int
    complete: bool
    failed_indices: List[int]
    tickets: List[TicketResponse]

    @classmethod
    def from_result(cls, booking_id: UUID, result: IssuanceResult) -> 'IssuanceResponse':
        return cls(
            booking_id=booking_id,
            requested=result.requested,
            issued=len(result.tickets),
            complete=result.is_complete,
            failed_indices=result.failed_indices,
            tickets=[TicketResponse.from_entity(ticket) for ticket in result.tickets],
        )


class TicketQrResponse(BaseModel):
    ticket_number: str
    image_data_url: str
    seat_display: str

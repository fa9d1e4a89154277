"""
Row -> entity conversion shared by the admission repositories.

Accepts ORM instances and RETURNING rows alike (both expose columns as
attributes).
"""

from typing import Any

from src.service.admission.domain.entity.scan_record_entity import ScanRecord
from src.service.admission.domain.entity.seat_entity import Seat
from src.service.admission.domain.entity.ticket_entity import Ticket
from src.service.admission.domain.enum.scan_result import ScanResult
from src.service.admission.domain.enum.seat_status import SeatStatus
from src.service.admission.domain.enum.ticket_status import TicketStatus


def seat_to_entity(row: Any) -> Seat:
    return Seat(
        id=row.id,
        event_id=row.event_id,
        seat_number=row.seat_number,
        status=SeatStatus(row.status),
        row_number=row.row_number,
        section=row.section,
        booking_id=row.booking_id,
        booked_at=row.booked_at,
    )


def ticket_to_entity(row: Any) -> Ticket:
    return Ticket(
        id=row.id,
        booking_id=row.booking_id,
        event_id=row.event_id,
        unit_index=row.unit_index,
        ticket_number=row.ticket_number,
        credential=row.credential,
        status=TicketStatus(row.status),
        seat_id=row.seat_id,
        seat_number=row.seat_number,
        section=row.section,
        row_number=row.row_number,
        scan_count=row.scan_count,
        first_scanned_at=row.first_scanned_at,
        last_scanned_at=row.last_scanned_at,
        checked_in_at=row.checked_in_at,
        checked_in_by=row.checked_in_by,
        created_at=row.created_at,
    )


def scan_record_to_entity(row: Any) -> ScanRecord:
    return ScanRecord(
        id=row.id,
        event_id=row.event_id,
        scanned_by=row.scanned_by,
        result=ScanResult(row.result),
        scanned_at=row.scanned_at,
        ticket_id=row.ticket_id,
        device_info=row.device_info,
    )

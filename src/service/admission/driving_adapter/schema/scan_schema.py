from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.service.admission.domain.entity.scan_record_entity import ScanRecord
from src.service.admission.domain.value_object.check_in_stats import CheckInStats
from src.service.admission.domain.value_object.scan_outcome import ScanOutcome


class ScanRequest(BaseModel):
    # Empty strings are accepted and audited as invalid scans
    credential: str
    scanned_by: str = Field(min_length=1)
    device_info: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'credential': 'gAAAAAB...',
                'scanned_by': 'gate-3',
                'device_info': {'device': 'scanner-07'},
            }
        }
    )


class ScannedTicketResponse(BaseModel):
    ticket_id: UUID
    ticket_number: str
    event_id: UUID
    status: str
    seat_number: Optional[int] = None
    section: Optional[str] = None
    row_number: Optional[str] = None
    holder_name: Optional[str] = None
    holder_email: Optional[str] = None


class ScanResponse(BaseModel):
    result: str
    admitted: bool
    message: str
    ticket: Optional[ScannedTicketResponse] = None
    first_scanned_at: Optional[datetime] = None
    scan_count: Optional[int] = None

    @classmethod
    def from_outcome(cls, outcome: ScanOutcome) -> 'ScanResponse':
        ticket = None
        if outcome.ticket:
            ticket = ScannedTicketResponse(
                ticket_id=outcome.ticket.ticket_id,
                ticket_number=outcome.ticket.ticket_number,
                event_id=outcome.ticket.event_id,
                status=outcome.ticket.status.value,
                seat_number=outcome.ticket.seat_number,
                section=outcome.ticket.section,
                row_number=outcome.ticket.row_number,
                holder_name=outcome.ticket.holder_name,
                holder_email=outcome.ticket.holder_email,
            )
        return cls(
            result=outcome.result.value,
            admitted=outcome.admitted,
            message=outcome.message,
            ticket=ticket,
            first_scanned_at=outcome.first_scanned_at,
            scan_count=outcome.scan_count,
        )


class ScanRecordResponse(BaseModel):
    id: UUID
    ticket_id: Optional[UUID] = None
    event_id: UUID
    scanned_by: str
    result: str
    scanned_at: datetime
    device_info: Optional[Dict[str, Any]] = None

    @classmethod
    def from_entity(cls, record: ScanRecord) -> 'ScanRecordResponse':
        return cls(
            id=record.id,
            ticket_id=record.ticket_id,
            event_id=record.event_id,
            scanned_by=record.scanned_by,
            result=record.result.value,
            scanned_at=record.scanned_at,
            device_info=record.device_info,
        )


class CheckInStatsResponse(BaseModel):
    event_id: UUID
    total_tickets: int
    checked_in: int
    remaining: int
    cancelled: int
    scan_attempts: int
    scans_by_result: Dict[str, int]
    last_check_in_at: Optional[datetime] = None

    @classmethod
    def from_stats(cls, stats: CheckInStats) -> 'CheckInStatsResponse':
        return cls(
            event_id=stats.event_id,
            total_tickets=stats.total_tickets,
            checked_in=stats.checked_in,
            remaining=stats.remaining,
            cancelled=stats.cancelled,
            scan_attempts=stats.scan_attempts,
            scans_by_result=stats.scans_by_result,
            last_check_in_at=stats.last_check_in_at,
        )


class ScanRecordListResponse(BaseModel):
    event_id: UUID
    records: List[ScanRecordResponse]

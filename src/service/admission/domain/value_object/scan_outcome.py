from datetime import datetime
from typing import Optional
from uuid import UUID

import attrs

from src.service.admission.domain.enum.scan_result import ScanResult
from src.service.admission.domain.enum.ticket_status import TicketStatus


@attrs.define(frozen=True)
class TicketSummary:
    ticket_id: UUID
    ticket_number: str
    event_id: UUID
    status: TicketStatus
    seat_number: Optional[int] = None
    section: Optional[str] = None
    row_number: Optional[str] = None
    holder_name: Optional[str] = None
    holder_email: Optional[str] = None


@attrs.define(frozen=True)
class ScanOutcome:
    result: ScanResult
    message: str
    ticket: Optional[TicketSummary] = None
    first_scanned_at: Optional[datetime] = None
    scan_count: Optional[int] = None

    @property
    def admitted(self) -> bool:
        return self.result == ScanResult.SUCCESS

from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from src.service.admission.domain.enum.scan_result import ScanResult


@attrs.define(frozen=True)
class ScanRecord:
    """Append-only audit entry; one per scan attempt whatever the outcome."""

    id: UUID
    event_id: UUID
    scanned_by: str
    result: ScanResult
    scanned_at: datetime
    ticket_id: Optional[UUID] = None
    device_info: Optional[dict[str, Any]] = None

    @classmethod
    def create(
        cls,
        *,
        event_id: UUID,
        scanned_by: str,
        result: ScanResult,
        ticket_id: Optional[UUID] = None,
        device_info: Optional[dict[str, Any]] = None,
        scanned_at: Optional[datetime] = None,
    ) -> 'ScanRecord':
        return cls(
            id=uuid7(),
            event_id=event_id,
            scanned_by=scanned_by,
            result=result,
            scanned_at=scanned_at or datetime.now(timezone.utc),
            ticket_id=ticket_id,
            device_info=device_info,
        )

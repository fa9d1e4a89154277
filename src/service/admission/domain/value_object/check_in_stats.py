from datetime import datetime
from typing import Optional
from uuid import UUID

import attrs


@attrs.define(frozen=True)
class CheckInStats:
    """Per-event admission figures, recomputed from tickets and scan records."""

    event_id: UUID
    total_tickets: int
    checked_in: int
    cancelled: int
    scan_attempts: int
    scans_by_result: dict[str, int] = attrs.field(factory=dict)
    last_check_in_at: Optional[datetime] = None

    @property
    def remaining(self) -> int:
        return self.total_tickets - self.checked_in - self.cancelled

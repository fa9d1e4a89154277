from abc import ABC, abstractmethod
from datetime import datetime
from uuid import UUID

from src.service.admission.domain.entity.scan_record_entity import ScanRecord
from src.service.admission.domain.entity.ticket_entity import Ticket


class ICheckInCommandRepo(ABC):
    """
    Ticket state transitions caused by scans.

    Every method writes the ticket change and its audit record in the same
    transaction.
    """

    @abstractmethod
    async def check_in_if_valid(
        self,
        *,
        ticket_id: UUID,
        scanned_by: str,
        scanned_at: datetime,
        scan_record: ScanRecord,
    ) -> Ticket | None:
        """
        Atomically move a ticket from valid to used

        Compare-and-set on status='valid'. On success the ticket gets
        scan_count=1, first/last_scanned_at=scanned_at, checked_in_at and
        checked_in_by, and scan_record (result success) is appended.

        Returns:
            The updated ticket, or None when the ticket was no longer valid
            (nothing written)
        """
        pass

    @abstractmethod
    async def record_repeat_scan(
        self, *, ticket_id: UUID, scanned_at: datetime, scan_record: ScanRecord
    ) -> Ticket | None:
        """
        Count a scan of an already used ticket

        Compare-and-set on status='used': atomically increments scan_count,
        sets last_scanned_at and appends scan_record (result already_used).
        first_scanned_at is untouched.

        Returns:
            The updated ticket, or None when the ticket is no longer used
            (cancelled in the meantime; nothing written)
        """
        pass

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.service.admission.domain.entity.scan_record_entity import ScanRecord
from src.service.admission.domain.enum.scan_result import ScanResult


class IScanRecordRepo(ABC):
    """Append-only audit log of scan attempts."""

    @abstractmethod
    async def append(self, *, record: ScanRecord) -> ScanRecord:
        pass

    @abstractmethod
    async def list_by_event(
        self, *, event_id: UUID, result: Optional[ScanResult] = None, limit: int = 100
    ) -> list[ScanRecord]:
        """Most recent first"""
        pass

    @abstractmethod
    async def list_by_ticket(self, *, ticket_id: UUID) -> list[ScanRecord]:
        """Oldest first"""
        pass

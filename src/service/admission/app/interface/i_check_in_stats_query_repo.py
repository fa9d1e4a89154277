from abc import ABC, abstractmethod
from uuid import UUID

from src.service.admission.domain.value_object.check_in_stats import CheckInStats


class ICheckInStatsQueryRepo(ABC):
    @abstractmethod
    async def get_stats(self, *, event_id: UUID) -> CheckInStats:
        """
        Aggregate ticket and scan figures for an event

        Computed on demand from ticket and scan_record rows; never maintained
        in the write path.
        """
        pass

from abc import ABC, abstractmethod
from uuid import UUID

from src.service.admission.domain.entity.event_entity import Event


class IEventQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, event_id: UUID) -> Event | None:
        pass

from typing import Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.admission.app.interface.i_check_in_stats_query_repo import (
    ICheckInStatsQueryRepo,
)
from src.service.admission.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.admission.domain.value_object.check_in_stats import CheckInStats


class GetCheckInStatsUseCase:
    def __init__(
        self,
        *,
        check_in_stats_query_repo: ICheckInStatsQueryRepo,
        event_query_repo: IEventQueryRepo,
    ) -> None:
        self.check_in_stats_query_repo = check_in_stats_query_repo
        self.event_query_repo = event_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        check_in_stats_query_repo: ICheckInStatsQueryRepo = Depends(
            Provide[Container.check_in_stats_query_repo]
        ),
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
    ) -> Self:
        return cls(
            check_in_stats_query_repo=check_in_stats_query_repo,
            event_query_repo=event_query_repo,
        )

    @Logger.io
    async def get_stats(self, *, event_id: UUID) -> CheckInStats:
        event = await self.event_query_repo.get_by_id(event_id=event_id)
        if not event:
            Logger.base.warning(f'⚠️ [CHECK_IN_STATS] Event {event_id} not found')
            raise NotFoundError('Event not found')
        return await self.check_in_stats_query_repo.get_stats(event_id=event_id)

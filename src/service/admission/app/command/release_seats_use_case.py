from typing import Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.admission_metrics import metrics
from src.service.admission.app.interface.i_seat_command_repo import ISeatCommandRepo


class ReleaseSeatsUseCase:
    """Return a cancelled booking's seats to the pool; releasing twice is a no-op."""

    def __init__(self, *, seat_command_repo: ISeatCommandRepo) -> None:
        self.seat_command_repo = seat_command_repo

    @classmethod
    @inject
    def depends(
        cls,
        seat_command_repo: ISeatCommandRepo = Depends(Provide[Container.seat_command_repo]),
    ) -> Self:
        return cls(seat_command_repo=seat_command_repo)

    @Logger.io
    async def release(self, *, booking_id: UUID) -> int:
        released = await self.seat_command_repo.release(booking_id=booking_id)
        metrics.record_seats_released(count=released)
        return released

from typing import Optional, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.admission.app.interface.i_scan_record_repo import IScanRecordRepo
from src.service.admission.domain.entity.scan_record_entity import ScanRecord
from src.service.admission.domain.enum.scan_result import ScanResult


MAX_SCAN_RECORDS_LIMIT = 1000


class ListScanRecordsUseCase:
    def __init__(self, *, scan_record_repo: IScanRecordRepo) -> None:
        self.scan_record_repo = scan_record_repo

    @classmethod
    @inject
    def depends(
        cls,
        scan_record_repo: IScanRecordRepo = Depends(Provide[Container.scan_record_repo]),
    ) -> Self:
        return cls(scan_record_repo=scan_record_repo)

    @Logger.io
    async def list_by_event(
        self, *, event_id: UUID, result: Optional[ScanResult] = None, limit: int = 100
    ) -> list[ScanRecord]:
        if not 1 <= limit <= MAX_SCAN_RECORDS_LIMIT:
            raise DomainError(f'limit must be between 1 and {MAX_SCAN_RECORDS_LIMIT}')
        return await self.scan_record_repo.list_by_event(
            event_id=event_id, result=result, limit=limit
        )

    @Logger.io
    async def list_by_ticket(self, *, ticket_id: UUID) -> list[ScanRecord]:
        return await self.scan_record_repo.list_by_ticket(ticket_id=ticket_id)

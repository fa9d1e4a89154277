from typing import AsyncContextManager, Callable, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.admission.app.interface.i_scan_record_repo import IScanRecordRepo
from src.service.admission.domain.entity.scan_record_entity import ScanRecord
from src.service.admission.domain.enum.scan_result import ScanResult
from src.service.admission.driven_adapter.model.scan_record_model import ScanRecordModel
from src.service.admission.driven_adapter.repo.row_mapper import scan_record_to_entity


class ScanRecordRepoImpl(IScanRecordRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @staticmethod
    def to_model(record: ScanRecord) -> ScanRecordModel:
        return ScanRecordModel(
            id=record.id,
            ticket_id=record.ticket_id,
            event_id=record.event_id,
            scanned_by=record.scanned_by,
            result=record.result.value,
            scanned_at=record.scanned_at,
            device_info=record.device_info,
        )

    @Logger.io
    async def append(self, *, record: ScanRecord) -> ScanRecord:
        async with self.session_factory() as session:
            async with session.begin():
                session.add(self.to_model(record))
        return record

    @Logger.io
    async def list_by_event(
        self, *, event_id: UUID, result: Optional[ScanResult] = None, limit: int = 100
    ) -> list[ScanRecord]:
        stmt = select(ScanRecordModel).where(ScanRecordModel.event_id == event_id)
        if result is not None:
            stmt = stmt.where(ScanRecordModel.result == result.value)
        stmt = stmt.order_by(ScanRecordModel.scanned_at.desc(), ScanRecordModel.id.desc()).limit(
            limit
        )
        async with self.session_factory() as session:
            rows = (await session.execute(stmt)).scalars().all()
            return [scan_record_to_entity(row) for row in rows]

    @Logger.io
    async def list_by_ticket(self, *, ticket_id: UUID) -> list[ScanRecord]:
        async with self.session_factory() as session:
            rows = (
                (
                    await session.execute(
                        select(ScanRecordModel)
                        .where(ScanRecordModel.ticket_id == ticket_id)
                        .order_by(ScanRecordModel.scanned_at, ScanRecordModel.id)
                    )
                )
                .scalars()
                .all()
            )
            return [scan_record_to_entity(row) for row in rows]

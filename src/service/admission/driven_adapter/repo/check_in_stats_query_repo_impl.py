from typing import AsyncContextManager, Callable
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.admission.app.interface.i_check_in_stats_query_repo import (
    ICheckInStatsQueryRepo,
)
from src.service.admission.domain.enum.ticket_status import TicketStatus
from src.service.admission.domain.value_object.check_in_stats import CheckInStats
from src.service.admission.driven_adapter.model.scan_record_model import ScanRecordModel
from src.service.admission.driven_adapter.model.ticket_model import TicketModel


class CheckInStatsQueryRepoImpl(ICheckInStatsQueryRepo):
    """Read model over ticket and scan_record; three aggregate queries, no stored counters."""

    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def get_stats(self, *, event_id: UUID) -> CheckInStats:
        async with self.session_factory() as session:
            status_rows = (
                await session.execute(
                    select(TicketModel.status, func.count())
                    .where(TicketModel.event_id == event_id)
                    .group_by(TicketModel.status)
                )
            ).all()
            last_check_in_at = (
                await session.execute(
                    select(func.max(TicketModel.checked_in_at)).where(
                        TicketModel.event_id == event_id
                    )
                )
            ).scalar()
            scan_rows = (
                await session.execute(
                    select(ScanRecordModel.result, func.count())
                    .where(ScanRecordModel.event_id == event_id)
                    .group_by(ScanRecordModel.result)
                )
            ).all()

        by_status = {status: int(count) for status, count in status_rows}
        scans_by_result = {result: int(count) for result, count in scan_rows}
        return CheckInStats(
            event_id=event_id,
            total_tickets=sum(by_status.values()),
            checked_in=by_status.get(TicketStatus.USED.value, 0),
            cancelled=by_status.get(TicketStatus.CANCELLED.value, 0),
            scan_attempts=sum(scans_by_result.values()),
            scans_by_result=scans_by_result,
            last_check_in_at=last_check_in_at,
        )

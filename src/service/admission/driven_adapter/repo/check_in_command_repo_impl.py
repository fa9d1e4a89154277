from datetime import datetime
from typing import AsyncContextManager, Callable
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.admission.app.interface.i_check_in_command_repo import ICheckInCommandRepo
from src.service.admission.domain.entity.scan_record_entity import ScanRecord
from src.service.admission.domain.entity.ticket_entity import Ticket
from src.service.admission.domain.enum.ticket_status import TicketStatus
from src.service.admission.driven_adapter.model.ticket_model import TicketModel
from src.service.admission.driven_adapter.repo.row_mapper import ticket_to_entity
from src.service.admission.driven_adapter.repo.scan_record_repo_impl import ScanRecordRepoImpl


class CheckInCommandRepoImpl(ICheckInCommandRepo):
    """
    Check-in writes.

    The valid -> used transition is a compare-and-set on status; exactly one
    concurrent scan can match `status = 'valid'`, the others update zero rows.
    A repeat scan only counts against a ticket that is still `used`.
    The UPDATE is always the first statement of the transaction and the audit
    INSERT follows it, so both commit or neither does.
    """

    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def check_in_if_valid(
        self,
        *,
        ticket_id: UUID,
        scanned_by: str,
        scanned_at: datetime,
        scan_record: ScanRecord,
    ) -> Ticket | None:
        async with self.session_factory() as session:
            async with session.begin():
                result = await session.execute(
                    update(TicketModel)
                    .where(
                        TicketModel.id == ticket_id,
                        TicketModel.status == TicketStatus.VALID.value,
                    )
                    .values(
                        status=TicketStatus.USED.value,
                        scan_count=1,
                        first_scanned_at=scanned_at,
                        last_scanned_at=scanned_at,
                        checked_in_at=scanned_at,
                        checked_in_by=scanned_by,
                    )
                    .returning(*TicketModel.__table__.c)
                    .execution_options(synchronize_session=False)
                )
                row = result.one_or_none()
                if row is None:
                    return None
                session.add(ScanRecordRepoImpl.to_model(scan_record))
                return ticket_to_entity(row)

    @Logger.io
    async def record_repeat_scan(
        self, *, ticket_id: UUID, scanned_at: datetime, scan_record: ScanRecord
    ) -> Ticket | None:
        async with self.session_factory() as session:
            async with session.begin():
                result = await session.execute(
                    update(TicketModel)
                    .where(
                        TicketModel.id == ticket_id,
                        TicketModel.status == TicketStatus.USED.value,
                    )
                    .values(
                        scan_count=TicketModel.scan_count + 1,
                        last_scanned_at=scanned_at,
                    )
                    .returning(*TicketModel.__table__.c)
                    .execution_options(synchronize_session=False)
                )
                row = result.one_or_none()
                if row is None:
                    return None
                session.add(ScanRecordRepoImpl.to_model(scan_record))
                return ticket_to_entity(row)

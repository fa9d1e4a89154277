import time
from datetime import datetime, timezone
from typing import Any, Optional, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.admission_metrics import metrics
from src.service.admission.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.admission.app.interface.i_check_in_command_repo import ICheckInCommandRepo
from src.service.admission.app.interface.i_credential_codec import ICredentialCodec
from src.service.admission.app.interface.i_scan_record_repo import IScanRecordRepo
from src.service.admission.app.interface.i_ticket_query_repo import ITicketQueryRepo
from src.service.admission.domain.entity.scan_record_entity import ScanRecord
from src.service.admission.domain.entity.ticket_entity import Ticket
from src.service.admission.domain.enum.scan_result import ScanResult
from src.service.admission.domain.enum.ticket_status import TicketStatus
from src.service.admission.domain.value_object.credential_payload import (
    BareTicketNumber,
    CredentialPayload,
    DecodeError,
)
from src.service.admission.domain.value_object.scan_outcome import ScanOutcome, TicketSummary


MESSAGE_SUCCESS = 'Check-in successful'
MESSAGE_ALREADY_USED = 'Ticket already used'
MESSAGE_WRONG_EVENT = 'Ticket is for a different event'
MESSAGE_CANCELLED = 'Ticket has been cancelled'
MESSAGE_NOT_FOUND = 'Ticket not found'


class ValidateScanUseCase:
    """
    Admit a scanned ticket at most once.

    Every attempt appends exactly one scan record, whatever the outcome.
    Decode and lookup failures become an `invalid` outcome rather than an
    error; only storage failures propagate.
    """

    def __init__(
        self,
        *,
        credential_codec: ICredentialCodec,
        ticket_query_repo: ITicketQueryRepo,
        check_in_command_repo: ICheckInCommandRepo,
        scan_record_repo: IScanRecordRepo,
        booking_query_repo: IBookingQueryRepo,
    ) -> None:
        self.credential_codec = credential_codec
        self.ticket_query_repo = ticket_query_repo
        self.check_in_command_repo = check_in_command_repo
        self.scan_record_repo = scan_record_repo
        self.booking_query_repo = booking_query_repo
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        credential_codec: ICredentialCodec = Depends(Provide[Container.credential_codec]),
        ticket_query_repo: ITicketQueryRepo = Depends(Provide[Container.ticket_query_repo]),
        check_in_command_repo: ICheckInCommandRepo = Depends(
            Provide[Container.check_in_command_repo]
        ),
        scan_record_repo: IScanRecordRepo = Depends(Provide[Container.scan_record_repo]),
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
    ) -> Self:
        return cls(
            credential_codec=credential_codec,
            ticket_query_repo=ticket_query_repo,
            check_in_command_repo=check_in_command_repo,
            scan_record_repo=scan_record_repo,
            booking_query_repo=booking_query_repo,
        )

    @Logger.io
    async def validate(
        self,
        *,
        credential: str,
        event_id: UUID,
        scanned_by: str,
        device_info: Optional[dict[str, Any]] = None,
    ) -> ScanOutcome:
        start = time.perf_counter()
        with self.tracer.start_as_current_span('use_case.validate_scan') as span:
            span.set_attribute('event.id', str(event_id))
            outcome = await self._validate(
                credential=credential,
                event_id=event_id,
                scanned_by=scanned_by,
                device_info=device_info,
            )
            span.set_attribute('scan.result', outcome.result.value)

        metrics.record_scan(result=outcome.result.value, duration=time.perf_counter() - start)
        ticket_number = outcome.ticket.ticket_number if outcome.ticket else '-'
        if outcome.admitted:
            Logger.base.info(f'✅ [SCAN] {ticket_number} admitted at event {event_id}')
        else:
            Logger.base.info(
                f'🚫 [SCAN] {ticket_number} rejected at event {event_id}: {outcome.result}'
            )
        return outcome

    async def _validate(
        self,
        *,
        credential: str,
        event_id: UUID,
        scanned_by: str,
        device_info: Optional[dict[str, Any]],
    ) -> ScanOutcome:
        decoded = self.credential_codec.decode(credential)
        if isinstance(decoded, DecodeError):
            await self._audit(
                event_id=event_id,
                scanned_by=scanned_by,
                result=ScanResult.INVALID,
                device_info=device_info,
            )
            return ScanOutcome(result=ScanResult.INVALID, message=decoded.message)

        ticket = await self._resolve_ticket(decoded)
        if ticket is None:
            await self._audit(
                event_id=event_id,
                scanned_by=scanned_by,
                result=ScanResult.INVALID,
                device_info=device_info,
            )
            return ScanOutcome(result=ScanResult.INVALID, message=MESSAGE_NOT_FOUND)

        if ticket.event_id != event_id:
            await self._audit(
                event_id=event_id,
                scanned_by=scanned_by,
                result=ScanResult.WRONG_EVENT,
                ticket_id=ticket.id,
                device_info=device_info,
            )
            return ScanOutcome(
                result=ScanResult.WRONG_EVENT,
                message=MESSAGE_WRONG_EVENT,
                ticket=self._summary(ticket),
            )

        if ticket.status == TicketStatus.CANCELLED:
            await self._audit(
                event_id=event_id,
                scanned_by=scanned_by,
                result=ScanResult.CANCELLED,
                ticket_id=ticket.id,
                device_info=device_info,
            )
            return ScanOutcome(
                result=ScanResult.CANCELLED,
                message=MESSAGE_CANCELLED,
                ticket=self._summary(ticket),
            )

        scanned_at = datetime.now(timezone.utc)
        if ticket.status == TicketStatus.VALID:
            checked_in = await self.check_in_command_repo.check_in_if_valid(
                ticket_id=ticket.id,
                scanned_by=scanned_by,
                scanned_at=scanned_at,
                scan_record=ScanRecord.create(
                    event_id=event_id,
                    scanned_by=scanned_by,
                    result=ScanResult.SUCCESS,
                    ticket_id=ticket.id,
                    device_info=device_info,
                    scanned_at=scanned_at,
                ),
            )
            if checked_in is not None:
                return ScanOutcome(
                    result=ScanResult.SUCCESS,
                    message=MESSAGE_SUCCESS,
                    ticket=await self._summary_with_holder(checked_in),
                    first_scanned_at=checked_in.first_scanned_at,
                    scan_count=checked_in.scan_count,
                )
            # Another scanner won the compare-and-set; this scan is a repeat

        repeated = await self.check_in_command_repo.record_repeat_scan(
            ticket_id=ticket.id,
            scanned_at=scanned_at,
            scan_record=ScanRecord.create(
                event_id=event_id,
                scanned_by=scanned_by,
                result=ScanResult.ALREADY_USED,
                ticket_id=ticket.id,
                device_info=device_info,
                scanned_at=scanned_at,
            ),
        )
        if repeated is None:
            # Cancelled between the lookup and the write
            return await self._rejected_after_race(
                ticket_id=ticket.id,
                event_id=event_id,
                scanned_by=scanned_by,
                device_info=device_info,
            )
        return ScanOutcome(
            result=ScanResult.ALREADY_USED,
            message=MESSAGE_ALREADY_USED,
            ticket=await self._summary_with_holder(repeated),
            first_scanned_at=repeated.first_scanned_at,
            scan_count=repeated.scan_count,
        )

    async def _resolve_ticket(self, decoded: CredentialPayload | BareTicketNumber) -> Ticket | None:
        if isinstance(decoded, BareTicketNumber):
            return await self.ticket_query_repo.get_by_ticket_number(
                ticket_number=decoded.ticket_number
            )

        ticket = await self.ticket_query_repo.get_by_id(ticket_id=decoded.ticket_id)
        if ticket is None or ticket.ticket_number != decoded.ticket_number:
            return None
        return ticket

    async def _rejected_after_race(
        self,
        *,
        ticket_id: UUID,
        event_id: UUID,
        scanned_by: str,
        device_info: Optional[dict[str, Any]],
    ) -> ScanOutcome:
        current = await self.ticket_query_repo.get_by_id(ticket_id=ticket_id)
        if current is None:
            await self._audit(
                event_id=event_id,
                scanned_by=scanned_by,
                result=ScanResult.INVALID,
                device_info=device_info,
            )
            return ScanOutcome(result=ScanResult.INVALID, message=MESSAGE_NOT_FOUND)

        await self._audit(
            event_id=event_id,
            scanned_by=scanned_by,
            result=ScanResult.CANCELLED,
            ticket_id=current.id,
            device_info=device_info,
        )
        return ScanOutcome(
            result=ScanResult.CANCELLED,
            message=MESSAGE_CANCELLED,
            ticket=self._summary(current),
        )

    async def _audit(
        self,
        *,
        event_id: UUID,
        scanned_by: str,
        result: ScanResult,
        ticket_id: Optional[UUID] = None,
        device_info: Optional[dict[str, Any]] = None,
    ) -> None:
        await self.scan_record_repo.append(
            record=ScanRecord.create(
                event_id=event_id,
                scanned_by=scanned_by,
                result=result,
                ticket_id=ticket_id,
                device_info=device_info,
            )
        )

    @staticmethod
    def _summary(
        ticket: Ticket,
        *,
        holder_name: Optional[str] = None,
        holder_email: Optional[str] = None,
    ) -> TicketSummary:
        return TicketSummary(
            ticket_id=ticket.id,
            ticket_number=ticket.ticket_number,
            event_id=ticket.event_id,
            status=ticket.status,
            seat_number=ticket.seat_number,
            section=ticket.section,
            row_number=ticket.row_number,
            holder_name=holder_name,
            holder_email=holder_email,
        )

    async def _summary_with_holder(self, ticket: Ticket) -> TicketSummary:
        booking = await self.booking_query_repo.get_by_id(booking_id=ticket.booking_id)
        return self._summary(
            ticket,
            holder_name=booking.holder_name if booking else None,
            holder_email=booking.holder_email if booking else None,
        )

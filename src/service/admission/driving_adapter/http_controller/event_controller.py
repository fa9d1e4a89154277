from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.admission.app.command.allocate_seats_use_case import AllocateSeatsUseCase
from src.service.admission.app.command.validate_scan_use_case import ValidateScanUseCase
from src.service.admission.app.query.get_check_in_stats_use_case import GetCheckInStatsUseCase
from src.service.admission.app.query.list_scan_records_use_case import ListScanRecordsUseCase
from src.service.admission.domain.enum.scan_result import ScanResult
from src.service.admission.domain.seat_display import format_seat_display
from src.service.admission.driving_adapter.schema.scan_schema import (
    CheckInStatsResponse,
    ScanRecordListResponse,
    ScanRecordResponse,
    ScanRequest,
    ScanResponse,
)
from src.service.admission.driving_adapter.schema.seat_schema import (
    AllocateSeatsRequest,
    AllocateSeatsResponse,
    SeatResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('/{event_id}/seats/allocate', status_code=status.HTTP_200_OK)
@Logger.io
async def allocate_seats(
    event_id: UUID,
    request: AllocateSeatsRequest,
    use_case: AllocateSeatsUseCase = Depends(AllocateSeatsUseCase.depends),
) -> AllocateSeatsResponse:
    with tracer.start_as_current_span('controller.allocate_seats') as span:
        span.set_attribute('event.id', str(event_id))
        span.set_attribute('booking.id', str(request.booking_id))
        span.set_attribute('quantity', request.quantity)

        seats = await use_case.allocate(
            booking_id=request.booking_id,
            event_id=event_id,
            quantity=request.quantity,
            preferred_section=request.preferred_section,
        )
        return AllocateSeatsResponse(
            booking_id=request.booking_id,
            seat_display=format_seat_display(seats),
            seats=[SeatResponse.from_entity(seat) for seat in seats],
        )


@router.post('/{event_id}/scan', status_code=status.HTTP_200_OK)
@Logger.io
async def scan_ticket(
    event_id: UUID,
    request: ScanRequest,
    use_case: ValidateScanUseCase = Depends(ValidateScanUseCase.depends),
) -> ScanResponse:
    """Validate a scanned code; rejections are reported in the body, not as HTTP errors."""
    with tracer.start_as_current_span('controller.scan_ticket') as span:
        span.set_attribute('event.id', str(event_id))
        span.set_attribute('scanned_by', request.scanned_by)

        outcome = await use_case.validate(
            credential=request.credential,
            event_id=event_id,
            scanned_by=request.scanned_by,
            device_info=request.device_info,
        )
        span.set_attribute('scan.result', outcome.result.value)
        return ScanResponse.from_outcome(outcome)


@router.get('/{event_id}/scans')
@Logger.io
async def list_scan_records(
    event_id: UUID,
    result: Optional[ScanResult] = None,
    limit: int = Query(default=100, ge=1, le=1000),
    use_case: ListScanRecordsUseCase = Depends(ListScanRecordsUseCase.depends),
) -> ScanRecordListResponse:
    records = await use_case.list_by_event(event_id=event_id, result=result, limit=limit)
    return ScanRecordListResponse(
        event_id=event_id,
        records=[ScanRecordResponse.from_entity(record) for record in records],
    )


@router.get('/{event_id}/check_in_stats')
@Logger.io
async def get_check_in_stats(
    event_id: UUID,
    use_case: GetCheckInStatsUseCase = Depends(GetCheckInStatsUseCase.depends),
) -> CheckInStatsResponse:
    stats = await use_case.get_stats(event_id=event_id)
    return CheckInStatsResponse.from_stats(stats)

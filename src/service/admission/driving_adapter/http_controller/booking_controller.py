from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.admission.app.command.issue_tickets_use_case import IssueTicketsUseCase
from src.service.admission.app.command.release_seats_use_case import ReleaseSeatsUseCase
from src.service.admission.app.query.list_booking_tickets_use_case import (
    ListBookingTicketsUseCase,
)
from src.service.admission.driving_adapter.schema.seat_schema import ReleaseSeatsResponse
from src.service.admission.driving_adapter.schema.ticket_schema import (
    IssuanceResponse,
    IssueTicketsRequest,
    TicketResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('/{booking_id}/tickets', status_code=status.HTTP_200_OK)
@Logger.io
async def issue_tickets(
    booking_id: UUID,
    request: Optional[IssueTicketsRequest] = Body(default=None),
    use_case: IssueTicketsUseCase = Depends(IssueTicketsUseCase.depends),
) -> IssuanceResponse:
    """Issue the booking's missing tickets; safe to call repeatedly."""
    with tracer.start_as_current_span('controller.issue_tickets') as span:
        span.set_attribute('booking.id', str(booking_id))
        result = await use_case.issue(
            booking_id=booking_id,
            rotate_credentials=request.rotate_credentials if request else False,
        )
        span.set_attribute('tickets.count', len(result.tickets))
        return IssuanceResponse.from_result(booking_id, result)


@router.get('/{booking_id}/tickets')
@Logger.io
async def list_booking_tickets(
    booking_id: UUID,
    use_case: ListBookingTicketsUseCase = Depends(ListBookingTicketsUseCase.depends),
) -> list[TicketResponse]:
    tickets = await use_case.list_by_booking(booking_id=booking_id)
    return [TicketResponse.from_entity(ticket) for ticket in tickets]


@router.delete('/{booking_id}/seats')
@Logger.io
async def release_booking_seats(
    booking_id: UUID,
    use_case: ReleaseSeatsUseCase = Depends(ReleaseSeatsUseCase.depends),
) -> ReleaseSeatsResponse:
    with tracer.start_as_current_span('controller.release_seats') as span:
        span.set_attribute('booking.id', str(booking_id))
        released = await use_case.release(booking_id=booking_id)
        return ReleaseSeatsResponse(booking_id=booking_id, released=released)

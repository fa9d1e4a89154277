from fastapi import APIRouter, Depends
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.admission.app.command.issue_tickets_use_case import IssueTicketsUseCase
from src.service.admission.driving_adapter.schema.ticket_schema import (
    IssuanceResponse,
    PaymentConfirmedRequest,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('/confirmed')
@Logger.io
async def payment_confirmed(
    request: PaymentConfirmedRequest,
    use_case: IssueTicketsUseCase = Depends(IssueTicketsUseCase.depends),
) -> IssuanceResponse:
    """
    Payment-confirmed signal from the payment subsystem.

    Redelivery of the same signal is harmless: issuance is idempotent per booking.
    """
    with tracer.start_as_current_span('controller.payment_confirmed') as span:
        span.set_attribute('booking.id', str(request.booking_id))
        result = await use_case.issue(booking_id=request.booking_id)
        return IssuanceResponse.from_result(request.booking_id, result)

from fastapi import APIRouter, Depends

from src.platform.logging.loguru_io import Logger
from src.service.admission.app.query.render_ticket_qr_use_case import RenderTicketQrUseCase
from src.service.admission.driving_adapter.schema.ticket_schema import TicketQrResponse


router = APIRouter()


@router.get('/{ticket_number}/qr')
@Logger.io
async def get_ticket_qr(
    ticket_number: str,
    use_case: RenderTicketQrUseCase = Depends(RenderTicketQrUseCase.depends),
) -> TicketQrResponse:
    qr = await use_case.render(ticket_number=ticket_number)
    return TicketQrResponse(
        ticket_number=qr.ticket_number,
        image_data_url=qr.image_data_url,
        seat_display=qr.seat_display,
    )

from typing import Optional, Self
from urllib.parse import urlencode

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.admission.app.interface.i_qr_image_renderer import IQrImageRenderer
from src.service.admission.app.interface.i_ticket_query_repo import ITicketQueryRepo
from src.service.admission.domain.seat_display import format_seat_display


@attrs.define(frozen=True)
class TicketQr:
    ticket_number: str
    image_data_url: str
    seat_display: str


def build_qr_content(credential: str, validation_base_url: Optional[str]) -> str:
    """Wrap the credential into a validation URL when one is configured."""
    if not validation_base_url:
        return credential
    separator = '&' if '?' in validation_base_url else '?'
    return f'{validation_base_url}{separator}{urlencode({"data": credential})}'


class RenderTicketQrUseCase:
    def __init__(
        self,
        *,
        ticket_query_repo: ITicketQueryRepo,
        qr_image_renderer: IQrImageRenderer,
        validation_base_url: Optional[str] = None,
    ) -> None:
        self.ticket_query_repo = ticket_query_repo
        self.qr_image_renderer = qr_image_renderer
        self.validation_base_url = validation_base_url

    @classmethod
    @inject
    def depends(
        cls,
        ticket_query_repo: ITicketQueryRepo = Depends(Provide[Container.ticket_query_repo]),
        qr_image_renderer: IQrImageRenderer = Depends(Provide[Container.qr_image_renderer]),
    ) -> Self:
        return cls(
            ticket_query_repo=ticket_query_repo,
            qr_image_renderer=qr_image_renderer,
            validation_base_url=settings.QR_VALIDATION_BASE_URL,
        )

    @Logger.io
    async def render(self, *, ticket_number: str) -> TicketQr:
        ticket = await self.ticket_query_repo.get_by_ticket_number(ticket_number=ticket_number)
        if not ticket:
            raise NotFoundError('Ticket not found')

        content = build_qr_content(ticket.credential, self.validation_base_url)
        return TicketQr(
            ticket_number=ticket.ticket_number,
            image_data_url=self.qr_image_renderer.render_data_url(content),
            seat_display=format_seat_display([ticket]),
        )

from typing import Optional
from uuid import UUID

import attrs

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.admission.domain.enum.payment_status import PaymentStatus


@attrs.define(frozen=True)
class Booking:
    """Booking as seen by admission; the payment subsystem owns its lifecycle."""

    id: UUID
    event_id: UUID
    quantity: int
    payment_status: PaymentStatus = PaymentStatus.PENDING
    preferred_section: Optional[str] = None
    holder_name: Optional[str] = None
    holder_email: Optional[str] = None

    @Logger.io
    def validate_can_issue(self) -> None:
        """
        Validate that tickets may be issued for this booking

        Raises:
            DomainError: When payment is not completed or quantity is not positive
        """
        if self.payment_status != PaymentStatus.COMPLETED:
            raise DomainError(
                f'Cannot issue tickets for booking with payment status {self.payment_status}'
            )
        if self.quantity < 1:
            raise DomainError('Booking quantity must be at least 1')

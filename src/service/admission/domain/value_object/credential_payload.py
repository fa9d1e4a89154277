from datetime import datetime
from enum import StrEnum
from typing import Optional, Union
from uuid import UUID

import attrs


@attrs.define(frozen=True)
class CredentialPayload:
    """Identity and context sealed inside a ticket credential."""

    ticket_id: UUID
    event_id: UUID
    booking_id: UUID
    ticket_number: str
    issued_at: datetime
    seat_number: Optional[int] = None
    section: Optional[str] = None
    row: Optional[str] = None


@attrs.define(frozen=True)
class BareTicketNumber:
    """A plain ticket number presented instead of a sealed credential."""

    ticket_number: str


class DecodeFailureReason(StrEnum):
    EMPTY = 'empty'
    EXPIRED = 'expired'
    UNRECOGNIZED = 'unrecognized'


@attrs.define(frozen=True)
class DecodeError:
    """Decode failure returned as a value; the codec never raises on bad input."""

    reason: DecodeFailureReason

    @property
    def message(self) -> str:
        return {
            DecodeFailureReason.EMPTY: 'No ticket code provided',
            DecodeFailureReason.EXPIRED: 'Ticket code has expired',
            DecodeFailureReason.UNRECOGNIZED: 'Invalid ticket code',
        }[self.reason]


DecodeResult = Union[CredentialPayload, BareTicketNumber, DecodeError]

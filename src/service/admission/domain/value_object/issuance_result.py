import attrs

from src.service.admission.domain.entity.ticket_entity import Ticket


@attrs.define(frozen=True)
class IssuanceResult:
    """
    Outcome of issuing a booking.

    tickets holds every ticket the booking owns after the call, ordered by
    unit_index. failed_indices lists units that could not be issued; a
    non-empty list is a degraded success the caller must surface.
    """

    tickets: list[Ticket]
    failed_indices: list[int]
    requested: int

    @property
    def is_complete(self) -> bool:
        return not self.failed_indices and len(self.tickets) == self.requested

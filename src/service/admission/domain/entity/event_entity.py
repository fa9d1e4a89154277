from uuid import UUID

import attrs


@attrs.define(frozen=True)
class Event:
    """Read-only view of an event; owned by the event management subsystem."""

    id: UUID
    name: str
    capacity: int
    has_seat_allocation: bool = False

from enum import StrEnum


class SeatStatus(StrEnum):
    AVAILABLE = 'available'
    RESERVED = 'reserved'
    BOOKED = 'booked'
    BLOCKED = 'blocked'

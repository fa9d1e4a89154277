from collections.abc import Sequence
from typing import Protocol


class _HasSeatNumber(Protocol):
    seat_number: int | None


def format_seat_display(seats: Sequence[_HasSeatNumber]) -> str:
    """
    Human readable seat list for tickets and confirmations.

    - one seat: "12"
    - three or more consecutive seats: "12-15"
    - up to four seats otherwise: "3, 7, 9"
    - more: "3, 7, 9... (+2 more)"
    """
    numbers = [seat.seat_number for seat in seats if seat.seat_number is not None]
    if not numbers:
        return ''
    if len(numbers) == 1:
        return str(numbers[0])

    ordered = sorted(numbers)
    consecutive = all(b == a + 1 for a, b in zip(ordered, ordered[1:]))
    if consecutive and len(ordered) > 2:
        return f'{ordered[0]}-{ordered[-1]}'

    if len(numbers) <= 4:
        return ', '.join(str(n) for n in numbers)
    return f'{", ".join(str(n) for n in numbers[:3])}... (+{len(numbers) - 3} more)'

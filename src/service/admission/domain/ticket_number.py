"""
Ticket number generation

Format: <PREFIX>-<BASE36 MILLIS>-<RANDOM4>, e.g. 0192-M1ZK3Q8W-7QX2
- PREFIX: first alphanumerics of the event id, upper-cased
- BASE36 MILLIS: issuance time in milliseconds, base36
- RANDOM4: cryptographically random base36 suffix

Numbers are short enough to type at the gate and are also accepted by the
credential decoder as a bare ticket number.
"""

from datetime import datetime, timezone
import secrets
import string
from uuid import UUID


_BASE36_ALPHABET = string.digits + string.ascii_uppercase


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError('base36 encoding expects a non-negative integer')
    if value == 0:
        return '0'
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_ALPHABET[remainder])
    return ''.join(reversed(digits))


def event_prefix(event_id: UUID | str, *, length: int = 4) -> str:
    alnum = ''.join(ch for ch in str(event_id) if ch.isalnum())
    return alnum[:length].upper() or 'TKT'


def generate_ticket_number(
    event_id: UUID | str, *, prefix_length: int = 4, now: datetime | None = None
) -> str:
    issued_at = now or datetime.now(timezone.utc)
    millis = int(issued_at.timestamp() * 1000)
    suffix = ''.join(secrets.choice(_BASE36_ALPHABET) for _ in range(4))
    return f'{event_prefix(event_id, length=prefix_length)}-{to_base36(millis)}-{suffix}'

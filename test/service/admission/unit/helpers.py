from typing import Optional
from unittest.mock import AsyncMock, Mock
from uuid import UUID

from uuid_utils.compat import uuid7

from src.service.admission.domain.entity.booking_entity import Booking
from src.service.admission.domain.entity.event_entity import Event
from src.service.admission.domain.entity.seat_entity import Seat
from src.service.admission.domain.entity.ticket_entity import Ticket
from src.service.admission.domain.enum.payment_status import PaymentStatus
from src.service.admission.domain.enum.seat_status import SeatStatus
from src.service.admission.domain.enum.ticket_status import TicketStatus


def make_event(*, has_seat_allocation: bool = False, event_id: Optional[UUID] = None) -> Event:
    return Event(
        id=event_id or uuid7(),
        name='Spring Concert',
        capacity=100,
        has_seat_allocation=has_seat_allocation,
    )


def make_booking(
    *,
    event_id: UUID,
    quantity: int = 2,
    payment_status: PaymentStatus = PaymentStatus.COMPLETED,
    preferred_section: Optional[str] = None,
) -> Booking:
    return Booking(
        id=uuid7(),
        event_id=event_id,
        quantity=quantity,
        payment_status=payment_status,
        preferred_section=preferred_section,
        holder_name='Ada Lovelace',
        holder_email='ada@example.com',
    )


def make_seat(*, event_id: UUID, seat_number: int, booking_id: UUID, section: str = 'A') -> Seat:
    return Seat(
        id=uuid7(),
        event_id=event_id,
        seat_number=seat_number,
        status=SeatStatus.BOOKED,
        row_number='1',
        section=section,
        booking_id=booking_id,
    )


def make_ticket(
    *,
    booking: Booking,
    unit_index: int = 1,
    status: TicketStatus = TicketStatus.VALID,
    ticket_number: Optional[str] = None,
    scan_count: int = 0,
) -> Ticket:
    return Ticket(
        id=uuid7(),
        booking_id=booking.id,
        event_id=booking.event_id,
        unit_index=unit_index,
        ticket_number=ticket_number or f'ABCD-M1ZK3Q8W-000{unit_index}',
        credential=f'credential-{unit_index}',
        status=status,
        scan_count=scan_count,
    )


class RepositoryMocks:
    def __init__(
        self,
        *,
        event: Optional[Event] = None,
        booking: Optional[Booking] = None,
        tickets: Optional[list[Ticket]] = None,
        seats: Optional[list[Seat]] = None,
    ) -> None:
        """
        Initialize mock repositories with test data

        Args:
            event: Event to return from event_query_repo.get_by_id
            booking: Booking to return from booking_query_repo.get_by_id
            tickets: Tickets the booking already owns
            seats: Seats returned by seat_command_repo.allocate
        """
        self.event = event
        self.booking = booking
        self.tickets = tickets or []
        self.seats = seats or []

        self.event_query_repo: Mock = AsyncMock()
        self.event_query_repo.get_by_id = AsyncMock(return_value=event)

        self.booking_query_repo: Mock = AsyncMock()
        self.booking_query_repo.get_by_id = AsyncMock(return_value=booking)

        self.ticket_query_repo: Mock = AsyncMock()
        self.ticket_query_repo.list_by_booking = AsyncMock(return_value=list(self.tickets))
        self.ticket_query_repo.exists_ticket_number = AsyncMock(return_value=False)
        self.ticket_query_repo.get_by_id = AsyncMock(return_value=None)
        self.ticket_query_repo.get_by_ticket_number = AsyncMock(return_value=None)

        self.ticket_command_repo: Mock = AsyncMock()
        self.ticket_command_repo.create = AsyncMock(side_effect=self._create_ticket)
        self.ticket_command_repo.update_credential = AsyncMock(
            side_effect=self._update_credential
        )

        self.seat_command_repo: Mock = AsyncMock()
        self.seat_command_repo.list_by_booking = AsyncMock(return_value=[])
        self.seat_command_repo.allocate = AsyncMock(return_value=list(self.seats))
        self.seat_command_repo.release = AsyncMock(return_value=len(self.seats))

        self.check_in_command_repo: Mock = AsyncMock()
        self.scan_record_repo: Mock = AsyncMock()
        self.scan_record_repo.append = AsyncMock(side_effect=lambda *, record: record)

    @staticmethod
    def _create_ticket(*, ticket: Ticket) -> Ticket:
        """Mock: Return ticket as-is (simulates successful persistence)"""
        return ticket

    def _update_credential(self, *, ticket_id: UUID, credential: str) -> Ticket:
        ticket = next(t for t in self.tickets if t.id == ticket_id)
        return ticket.with_credential(credential)


def fake_codec() -> Mock:
    codec = Mock()
    codec.encode = Mock(side_effect=lambda payload: f'sealed:{payload.ticket_number}')
    return codec

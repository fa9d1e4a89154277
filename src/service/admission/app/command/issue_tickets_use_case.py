from datetime import datetime, timezone
from typing import Optional, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError, PersistenceError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.admission_metrics import metrics
from src.service.admission.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.admission.app.interface.i_credential_codec import ICredentialCodec
from src.service.admission.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.admission.app.interface.i_seat_command_repo import ISeatCommandRepo
from src.service.admission.app.interface.i_ticket_command_repo import (
    ITicketCommandRepo,
    TicketNumberConflictError,
    UnitAlreadyIssuedError,
)
from src.service.admission.app.interface.i_ticket_query_repo import ITicketQueryRepo
from src.service.admission.domain.entity.booking_entity import Booking
from src.service.admission.domain.entity.seat_entity import Seat
from src.service.admission.domain.entity.ticket_entity import Ticket
from src.service.admission.domain.ticket_number import generate_ticket_number
from src.service.admission.domain.value_object.credential_payload import CredentialPayload
from src.service.admission.domain.value_object.issuance_result import IssuanceResult


class IssueTicketsUseCase:
    """
    Turn a paid booking into exactly `quantity` tickets.

    Flow:
    1. Booking must exist and be paid (payment_status = completed)
    2. Load existing tickets; only missing unit indices are issued
    3. Seat-allocated events: make sure the booking owns `quantity` seats and
       pair free seats with missing units in ascending seat_number order
    4. Per unit: generate ticket number, seal credential, persist (own transaction)

    Partial failure:
    - ticket number collision: retried once with a fresh number, then reported
      in failed_indices
    - unit persisted concurrently by another issuer: adopted as issued
    - storage unavailable: PersistenceError; seats claimed by this call are
      released again when the booking ends up with no tickets at all

    Calling issue again after any partial failure completes the booking.
    """

    def __init__(
        self,
        *,
        booking_query_repo: IBookingQueryRepo,
        event_query_repo: IEventQueryRepo,
        ticket_query_repo: ITicketQueryRepo,
        ticket_command_repo: ITicketCommandRepo,
        seat_command_repo: ISeatCommandRepo,
        credential_codec: ICredentialCodec,
        ticket_number_prefix_length: int = 4,
        ticket_number_max_attempts: int = 5,
    ) -> None:
        self.booking_query_repo = booking_query_repo
        self.event_query_repo = event_query_repo
        self.ticket_query_repo = ticket_query_repo
        self.ticket_command_repo = ticket_command_repo
        self.seat_command_repo = seat_command_repo
        self.credential_codec = credential_codec
        self.ticket_number_prefix_length = ticket_number_prefix_length
        self.ticket_number_max_attempts = ticket_number_max_attempts
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
        ticket_query_repo: ITicketQueryRepo = Depends(Provide[Container.ticket_query_repo]),
        ticket_command_repo: ITicketCommandRepo = Depends(
            Provide[Container.ticket_command_repo]
        ),
        seat_command_repo: ISeatCommandRepo = Depends(Provide[Container.seat_command_repo]),
        credential_codec: ICredentialCodec = Depends(Provide[Container.credential_codec]),
    ) -> Self:
        return cls(
            booking_query_repo=booking_query_repo,
            event_query_repo=event_query_repo,
            ticket_query_repo=ticket_query_repo,
            ticket_command_repo=ticket_command_repo,
            seat_command_repo=seat_command_repo,
            credential_codec=credential_codec,
            ticket_number_prefix_length=settings.TICKET_NUMBER_PREFIX_LENGTH,
            ticket_number_max_attempts=settings.TICKET_NUMBER_MAX_ATTEMPTS,
        )

    @Logger.io
    async def issue(self, *, booking_id: UUID, rotate_credentials: bool = False) -> IssuanceResult:
        with self.tracer.start_as_current_span('use_case.issue_tickets') as span:
            span.set_attribute('booking.id', str(booking_id))

            booking = await self.booking_query_repo.get_by_id(booking_id=booking_id)
            if not booking:
                raise NotFoundError('Booking not found')
            booking.validate_can_issue()

            event = await self.event_query_repo.get_by_id(event_id=booking.event_id)
            if not event:
                raise NotFoundError('Event not found')

            existing = await self.ticket_query_repo.list_by_booking(booking_id=booking_id)
            if rotate_credentials and existing:
                existing = [await self._rotate_credential(ticket) for ticket in existing]

            issued_units = {ticket.unit_index for ticket in existing}
            missing = [i for i in range(1, booking.quantity + 1) if i not in issued_units]
            if not missing:
                Logger.base.info(f'🎫 [ISSUE] Booking {booking_id} already fully issued')
                return IssuanceResult(
                    tickets=existing, failed_indices=[], requested=booking.quantity
                )

            seats_before: list[Seat] = []
            seats: list[Seat] = []
            if event.has_seat_allocation:
                seats_before = await self.seat_command_repo.list_by_booking(booking_id=booking_id)
                seats = seats_before
                if len(seats_before) < booking.quantity:
                    seats = await self.seat_command_repo.allocate(
                        booking_id=booking_id,
                        event_id=booking.event_id,
                        quantity=booking.quantity,
                        preferred_section=booking.preferred_section,
                    )

            taken_seat_ids = {ticket.seat_id for ticket in existing if ticket.seat_id}
            free_seats = iter([seat for seat in seats if seat.id not in taken_seat_ids])

            created: list[Ticket] = []
            adopted: list[Ticket] = []
            failed_indices: list[int] = []
            try:
                for unit_index in missing:
                    seat = next(free_seats, None)
                    try:
                        ticket = await self._issue_unit(
                            booking=booking, unit_index=unit_index, seat=seat
                        )
                    except UnitAlreadyIssuedError as e:
                        # A concurrent issuer persisted this unit first
                        adopted.append(e.existing)
                        continue
                    if ticket is None:
                        failed_indices.append(unit_index)
                    else:
                        created.append(ticket)
            except PersistenceError:
                metrics.record_issue_failure(
                    reason='persistence', count=len(missing) - len(created) - len(adopted)
                )
                if seats and not seats_before and not (existing or created or adopted):
                    await self._release_seats_after_failure(booking_id=booking_id)
                raise

            metrics.record_tickets_issued(count=len(created))
            if failed_indices:
                metrics.record_issue_failure(reason='number_conflict', count=len(failed_indices))
                Logger.base.warning(
                    f'⚠️ [ISSUE] Booking {booking_id}: units {failed_indices} not issued'
                )
            Logger.base.info(
                f'🎫 [ISSUE] Booking {booking_id}: {len(created)} issued, '
                f'{len(existing) + len(adopted)} already present'
            )
            span.set_attribute('tickets.created', len(created))

            tickets = sorted([*existing, *adopted, *created], key=lambda t: t.unit_index)
            return IssuanceResult(
                tickets=tickets, failed_indices=failed_indices, requested=booking.quantity
            )

    async def _issue_unit(
        self, *, booking: Booking, unit_index: int, seat: Optional[Seat]
    ) -> Ticket | None:
        """
        Persist one unit; None when two ticket number collisions in a row occurred

        Raises:
            UnitAlreadyIssuedError: Another issuer persisted this unit first
        """
        for attempt in (1, 2):
            ticket_number = await self._generate_unique_ticket_number(event_id=booking.event_id)
            ticket_id = Ticket.new_id()
            issued_at = datetime.now(timezone.utc)
            credential = self.credential_codec.encode(
                CredentialPayload(
                    ticket_id=ticket_id,
                    event_id=booking.event_id,
                    booking_id=booking.id,
                    ticket_number=ticket_number,
                    issued_at=issued_at,
                    seat_number=seat.seat_number if seat else None,
                    section=seat.section if seat else None,
                    row=seat.row_number if seat else None,
                )
            )
            ticket = Ticket.create(
                id=ticket_id,
                booking_id=booking.id,
                event_id=booking.event_id,
                unit_index=unit_index,
                ticket_number=ticket_number,
                credential=credential,
                seat=seat,
            )
            try:
                return await self.ticket_command_repo.create(ticket=ticket)
            except TicketNumberConflictError:
                Logger.base.warning(
                    f'⚠️ [ISSUE] Ticket number collision for unit {unit_index} '
                    f'(attempt {attempt})'
                )
        return None

    async def _generate_unique_ticket_number(self, *, event_id: UUID) -> str:
        candidate = ''
        for _ in range(self.ticket_number_max_attempts):
            candidate = generate_ticket_number(
                event_id, prefix_length=self.ticket_number_prefix_length
            )
            if not await self.ticket_query_repo.exists_ticket_number(ticket_number=candidate):
                return candidate
        # Let the unique constraint have the final word
        return candidate

    async def _rotate_credential(self, ticket: Ticket) -> Ticket:
        credential = self.credential_codec.encode(
            CredentialPayload(
                ticket_id=ticket.id,
                event_id=ticket.event_id,
                booking_id=ticket.booking_id,
                ticket_number=ticket.ticket_number,
                issued_at=datetime.now(timezone.utc),
                seat_number=ticket.seat_number,
                section=ticket.section,
                row=ticket.row_number,
            )
        )
        return await self.ticket_command_repo.update_credential(
            ticket_id=ticket.id, credential=credential
        )

    async def _release_seats_after_failure(self, *, booking_id: UUID) -> None:
        try:
            released = await self.seat_command_repo.release(booking_id=booking_id)
            Logger.base.warning(
                f'↩️ [ISSUE] Released {released} seats of booking {booking_id} after failure'
            )
        except PersistenceError as e:
            # Original failure is re-raised by the caller; retrying issue() reuses these seats
            Logger.base.error(f'❌ [ISSUE] Could not release seats of booking {booking_id}: {e}')

"""
Integration tests for the check-in flow (issue -> scan -> audit -> stats)

測試重點：
1. A valid ticket is admitted once; later scans are already_used
2. Concurrent scans of one ticket admit exactly one
3. Every attempt leaves exactly one scan record
4. Stats are derived from tickets and scan records
"""

import asyncio
from datetime import datetime, timezone

from sqlalchemy import update

from src.service.admission.domain.entity.scan_record_entity import ScanRecord
from src.service.admission.domain.enum.scan_result import ScanResult
from src.service.admission.domain.enum.ticket_status import TicketStatus
from src.service.admission.driven_adapter.model.ticket_model import TicketModel
from src.service.admission.driven_adapter.repo.check_in_command_repo_impl import (
    CheckInCommandRepoImpl,
)
from test.service.admission.fixtures import seed_booking, seed_event


async def _issue_single(database, issue_use_case, *, holder_name='Ada Lovelace'):
    event_id = await seed_event(database)
    booking_id = await seed_booking(
        database, event_id=event_id, quantity=1, holder_name=holder_name
    )
    result = await issue_use_case.issue(booking_id=booking_id)
    return event_id, result.tickets[0]


class TestScan:
    async def test_first_scan_admits_and_second_is_already_used(
        self, database, issue_use_case, validate_use_case, ticket_query_repo
    ):
        event_id, ticket = await _issue_single(database, issue_use_case)

        first = await validate_use_case.validate(
            credential=ticket.credential, event_id=event_id, scanned_by='gate-1'
        )
        second = await validate_use_case.validate(
            credential=ticket.credential, event_id=event_id, scanned_by='gate-2'
        )

        assert first.result == ScanResult.SUCCESS
        assert first.scan_count == 1
        assert first.ticket.holder_name == 'Ada Lovelace'
        assert first.ticket.status == TicketStatus.USED
        assert second.result == ScanResult.ALREADY_USED
        assert second.scan_count == 2
        assert second.first_scanned_at == first.first_scanned_at

        stored = await ticket_query_repo.get_by_id(ticket_id=ticket.id)
        assert stored.status == TicketStatus.USED
        assert stored.checked_in_by == 'gate-1'
        assert stored.checked_in_at is not None
        assert stored.scan_count == 2

    async def test_wrong_event_leaves_ticket_valid(
        self, database, issue_use_case, validate_use_case, ticket_query_repo
    ):
        event_id, ticket = await _issue_single(database, issue_use_case)
        other_event_id = await seed_event(database, name='Other Show')

        outcome = await validate_use_case.validate(
            credential=ticket.credential, event_id=other_event_id, scanned_by='gate-1'
        )

        assert outcome.result == ScanResult.WRONG_EVENT
        stored = await ticket_query_repo.get_by_id(ticket_id=ticket.id)
        assert stored.status == TicketStatus.VALID
        assert stored.scan_count == 0

        retry = await validate_use_case.validate(
            credential=ticket.credential, event_id=event_id, scanned_by='gate-1'
        )
        assert retry.result == ScanResult.SUCCESS

    async def test_cancelled_ticket_is_refused(
        self, database, issue_use_case, validate_use_case, ticket_query_repo
    ):
        event_id, ticket = await _issue_single(database, issue_use_case)
        async with database.session() as session:
            async with session.begin():
                await session.execute(
                    update(TicketModel)
                    .where(TicketModel.id == ticket.id)
                    .values(status=TicketStatus.CANCELLED.value)
                )

        outcome = await validate_use_case.validate(
            credential=ticket.credential, event_id=event_id, scanned_by='gate-1'
        )

        assert outcome.result == ScanResult.CANCELLED
        stored = await ticket_query_repo.get_by_id(ticket_id=ticket.id)
        assert stored.status == TicketStatus.CANCELLED
        assert stored.checked_in_at is None

    async def test_repeat_scan_of_ticket_cancelled_after_use_writes_nothing(
        self, database, issue_use_case, validate_use_case, ticket_query_repo
    ):
        event_id, ticket = await _issue_single(database, issue_use_case)
        await validate_use_case.validate(
            credential=ticket.credential, event_id=event_id, scanned_by='gate-1'
        )
        async with database.session() as session:
            async with session.begin():
                await session.execute(
                    update(TicketModel)
                    .where(TicketModel.id == ticket.id)
                    .values(status=TicketStatus.CANCELLED.value)
                )
        scanned_at = datetime.now(timezone.utc)
        repo = CheckInCommandRepoImpl(session_factory=database.session)

        repeated = await repo.record_repeat_scan(
            ticket_id=ticket.id,
            scanned_at=scanned_at,
            scan_record=ScanRecord.create(
                event_id=event_id,
                scanned_by='gate-2',
                result=ScanResult.ALREADY_USED,
                ticket_id=ticket.id,
                scanned_at=scanned_at,
            ),
        )

        assert repeated is None
        stored = await ticket_query_repo.get_by_id(ticket_id=ticket.id)
        assert stored.status == TicketStatus.CANCELLED
        assert stored.scan_count == 1

        outcome = await validate_use_case.validate(
            credential=ticket.credential, event_id=event_id, scanned_by='gate-2'
        )
        assert outcome.result == ScanResult.CANCELLED

    async def test_bare_ticket_number_is_accepted(
        self, database, issue_use_case, validate_use_case
    ):
        event_id, ticket = await _issue_single(database, issue_use_case)

        outcome = await validate_use_case.validate(
            credential=f'  {ticket.ticket_number.lower()} ',
            event_id=event_id,
            scanned_by='gate-1',
        )

        assert outcome.result == ScanResult.SUCCESS
        assert outcome.ticket.ticket_number == ticket.ticket_number

    async def test_tampered_credential_is_invalid(
        self, database, issue_use_case, validate_use_case, ticket_query_repo
    ):
        event_id, ticket = await _issue_single(database, issue_use_case)
        middle = len(ticket.credential) // 2
        flipped = 'A' if ticket.credential[middle] != 'A' else 'B'
        tampered = ticket.credential[:middle] + flipped + ticket.credential[middle + 1 :]

        outcome = await validate_use_case.validate(
            credential=tampered, event_id=event_id, scanned_by='gate-1'
        )

        assert outcome.result == ScanResult.INVALID
        assert outcome.ticket is None
        stored = await ticket_query_repo.get_by_id(ticket_id=ticket.id)
        assert stored.status == TicketStatus.VALID

    async def test_garbage_is_invalid_and_audited_without_ticket(
        self, database, validate_use_case, scan_record_repo
    ):
        event_id = await seed_event(database)

        outcome = await validate_use_case.validate(
            credential='not a ticket at all', event_id=event_id, scanned_by='gate-1'
        )

        assert outcome.result == ScanResult.INVALID
        records = await scan_record_repo.list_by_event(event_id=event_id)
        assert len(records) == 1
        assert records[0].ticket_id is None
        assert records[0].result == ScanResult.INVALID

    async def test_unknown_ticket_number_is_invalid(self, database, validate_use_case):
        event_id = await seed_event(database)

        outcome = await validate_use_case.validate(
            credential='ABCD-ZZZZZZZZ-0000', event_id=event_id, scanned_by='gate-1'
        )

        assert outcome.result == ScanResult.INVALID
        assert outcome.message == 'Ticket not found'


class TestConcurrentScans:
    async def test_exactly_one_of_many_simultaneous_scans_admits(
        self, database, issue_use_case, validate_use_case, scan_record_repo, ticket_query_repo
    ):
        """
        Given: one valid ticket
        When: 8 gates scan it at the same moment
        Then: one success, 7 already_used, 8 scan records
        """
        event_id, ticket = await _issue_single(database, issue_use_case)

        outcomes = await asyncio.gather(
            *(
                validate_use_case.validate(
                    credential=ticket.credential, event_id=event_id, scanned_by=f'gate-{i}'
                )
                for i in range(8)
            )
        )

        results = [o.result for o in outcomes]
        assert results.count(ScanResult.SUCCESS) == 1
        assert results.count(ScanResult.ALREADY_USED) == 7

        records = await scan_record_repo.list_by_ticket(ticket_id=ticket.id)
        assert len(records) == 8
        assert sum(r.result == ScanResult.SUCCESS for r in records) == 1

        stored = await ticket_query_repo.get_by_id(ticket_id=ticket.id)
        assert stored.scan_count == 8
        winner = next(o for o in outcomes if o.result == ScanResult.SUCCESS)
        assert stored.checked_in_by == next(
            r.scanned_by for r in records if r.result == ScanResult.SUCCESS
        )
        assert stored.first_scanned_at == winner.first_scanned_at


class TestAuditAndStats:
    async def test_scan_records_are_listed_newest_first_and_filterable(
        self, database, issue_use_case, validate_use_case, scan_record_repo
    ):
        event_id, ticket = await _issue_single(database, issue_use_case)
        await validate_use_case.validate(
            credential='garbage', event_id=event_id, scanned_by='gate-1'
        )
        await validate_use_case.validate(
            credential=ticket.credential, event_id=event_id, scanned_by='gate-1'
        )
        await validate_use_case.validate(
            credential=ticket.credential, event_id=event_id, scanned_by='gate-2'
        )

        records = await scan_record_repo.list_by_event(event_id=event_id)
        assert [r.result for r in records] == [
            ScanResult.ALREADY_USED,
            ScanResult.SUCCESS,
            ScanResult.INVALID,
        ]

        only_success = await scan_record_repo.list_by_event(
            event_id=event_id, result=ScanResult.SUCCESS
        )
        assert len(only_success) == 1
        assert only_success[0].ticket_id == ticket.id

        assert len(await scan_record_repo.list_by_event(event_id=event_id, limit=2)) == 2

    async def test_stats_reflect_tickets_and_scans(
        self, database, issue_use_case, validate_use_case, stats_repo
    ):
        event_id = await seed_event(database)
        booking_id = await seed_booking(database, event_id=event_id, quantity=3)
        tickets = (await issue_use_case.issue(booking_id=booking_id)).tickets

        await validate_use_case.validate(
            credential=tickets[0].credential, event_id=event_id, scanned_by='gate-1'
        )
        await validate_use_case.validate(
            credential=tickets[0].credential, event_id=event_id, scanned_by='gate-1'
        )
        await validate_use_case.validate(
            credential='garbage', event_id=event_id, scanned_by='gate-1'
        )

        stats = await stats_repo.get_stats(event_id=event_id)

        assert stats.total_tickets == 3
        assert stats.checked_in == 1
        assert stats.cancelled == 0
        assert stats.remaining == 2
        assert stats.scan_attempts == 3
        assert stats.scans_by_result == {'success': 1, 'already_used': 1, 'invalid': 1}
        assert stats.last_check_in_at is not None

    async def test_stats_for_event_without_tickets(self, database, stats_repo):
        event_id = await seed_event(database)

        stats = await stats_repo.get_stats(event_id=event_id)

        assert stats.total_tickets == 0
        assert stats.scan_attempts == 0
        assert stats.scans_by_result == {}
        assert stats.last_check_in_at is None

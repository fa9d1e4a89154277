"""
HTTP API tests for the admission endpoints

The app runs in-process through httpx's ASGI transport with the DI container's
database overridden by the per-test SQLite database.
"""

from collections.abc import AsyncGenerator
from uuid import uuid4

from dependency_injector import providers
from fastapi import status
import httpx
import pytest

from src.platform.config.di import container
from src.platform.database.db_setting import Database
from src.service.admission.domain.enum.payment_status import PaymentStatus
from test.service.admission.fixtures import seed_booking, seed_event, seed_seats
from test.test_main import app, lifespan_for_tests


@pytest.fixture
async def client(database: Database) -> AsyncGenerator[httpx.AsyncClient, None]:
    container.reset_singletons()
    container.database.override(providers.Object(database))
    try:
        async with lifespan_for_tests(app):
            transport = httpx.ASGITransport(app=app)
            async with httpx.AsyncClient(transport=transport, base_url='http://test') as ac:
                yield ac
    finally:
        container.database.reset_override()
        container.reset_singletons()


class TestIssuanceEndpoints:
    async def test_payment_confirmed_issues_tickets(self, client, database):
        event_id = await seed_event(database)
        booking_id = await seed_booking(database, event_id=event_id, quantity=2)

        response = await client.post(
            '/api/payment/confirmed', json={'booking_id': str(booking_id)}
        )

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body['booking_id'] == str(booking_id)
        assert body['requested'] == 2
        assert body['issued'] == 2
        assert body['complete'] is True
        assert body['failed_indices'] == []
        assert [t['unit_index'] for t in body['tickets']] == [1, 2]
        assert all(t['status'] == 'valid' for t in body['tickets'])

    async def test_issue_endpoint_is_idempotent(self, client, database):
        event_id = await seed_event(database)
        booking_id = await seed_booking(database, event_id=event_id, quantity=2)

        first = await client.post(f'/api/booking/{booking_id}/tickets')
        second = await client.post(f'/api/booking/{booking_id}/tickets')
        listed = await client.get(f'/api/booking/{booking_id}/tickets')

        numbers = [t['ticket_number'] for t in first.json()['tickets']]
        assert [t['ticket_number'] for t in second.json()['tickets']] == numbers
        assert listed.status_code == status.HTTP_200_OK
        assert [t['ticket_number'] for t in listed.json()] == numbers

    async def test_unknown_booking_is_404(self, client):
        response = await client.post(f'/api/booking/{uuid4()}/tickets')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()['detail'] == 'Booking not found'

    async def test_unpaid_booking_is_400(self, client, database):
        event_id = await seed_event(database)
        booking_id = await seed_booking(
            database, event_id=event_id, payment_status=PaymentStatus.PENDING
        )

        response = await client.post(f'/api/booking/{booking_id}/tickets')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    async def test_malformed_booking_id_is_400(self, client):
        response = await client.post('/api/booking/not-a-uuid/tickets')

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestSeatEndpoints:
    async def test_allocate_and_release(self, client, database):
        event_id = await seed_event(database, has_seat_allocation=True)
        await seed_seats(
            database, event_id=event_id, seat_numbers=[1, 2, 3], section='A', row_number='5'
        )
        booking_id = await seed_booking(database, event_id=event_id, quantity=2)

        allocated = await client.post(
            f'/api/event/{event_id}/seats/allocate',
            json={'booking_id': str(booking_id), 'quantity': 2, 'preferred_section': 'A'},
        )
        released = await client.delete(f'/api/booking/{booking_id}/seats')

        assert allocated.status_code == status.HTTP_200_OK
        body = allocated.json()
        assert [s['seat_number'] for s in body['seats']] == [1, 2]
        assert body['seat_display'] == '1, 2'
        assert released.status_code == status.HTTP_200_OK
        assert released.json()['released'] == 2

    async def test_insufficient_seats_is_409_with_counts(self, client, database):
        event_id = await seed_event(database, has_seat_allocation=True)
        await seed_seats(database, event_id=event_id, seat_numbers=[1])
        booking_id = await seed_booking(database, event_id=event_id, quantity=3)

        response = await client.post(
            f'/api/event/{event_id}/seats/allocate',
            json={'booking_id': str(booking_id), 'quantity': 3},
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        body = response.json()
        assert body['requested'] == 3
        assert body['available'] == 1

    async def test_quantity_must_be_positive(self, client, database):
        event_id = await seed_event(database, has_seat_allocation=True)

        response = await client.post(
            f'/api/event/{event_id}/seats/allocate',
            json={'booking_id': str(uuid4()), 'quantity': 0},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestCheckInEndpoints:
    async def _issue(self, client, database, *, quantity: int = 1):
        event_id = await seed_event(database)
        booking_id = await seed_booking(database, event_id=event_id, quantity=quantity)
        response = await client.post(f'/api/booking/{booking_id}/tickets')
        return event_id, response.json()['tickets']

    async def test_scan_admits_once(self, client, database):
        event_id, tickets = await self._issue(client, database)
        payload = {'credential': tickets[0]['credential'], 'scanned_by': 'gate-1'}

        first = await client.post(f'/api/event/{event_id}/scan', json=payload)
        second = await client.post(f'/api/event/{event_id}/scan', json=payload)

        assert first.status_code == status.HTTP_200_OK
        assert first.json()['result'] == 'success'
        assert first.json()['admitted'] is True
        assert first.json()['ticket']['holder_name'] == 'Ada Lovelace'
        assert second.status_code == status.HTTP_200_OK
        assert second.json()['result'] == 'already_used'
        assert second.json()['admitted'] is False
        assert second.json()['scan_count'] == 2

    async def test_rejections_are_reported_in_the_body(self, client, database):
        event_id = await seed_event(database)

        response = await client.post(
            f'/api/event/{event_id}/scan', json={'credential': '', 'scanned_by': 'gate-1'}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()['result'] == 'invalid'
        assert response.json()['ticket'] is None

    async def test_missing_scanner_identity_is_400(self, client, database):
        event_id = await seed_event(database)

        response = await client.post(
            f'/api/event/{event_id}/scan', json={'credential': 'x', 'scanned_by': ''}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    async def test_scan_log_and_stats(self, client, database):
        event_id, tickets = await self._issue(client, database, quantity=2)
        await client.post(
            f'/api/event/{event_id}/scan',
            json={'credential': tickets[0]['credential'], 'scanned_by': 'gate-1'},
        )
        await client.post(
            f'/api/event/{event_id}/scan', json={'credential': 'nope', 'scanned_by': 'gate-1'}
        )

        scans = await client.get(f'/api/event/{event_id}/scans')
        successes = await client.get(
            f'/api/event/{event_id}/scans', params={'result': 'success'}
        )
        stats = await client.get(f'/api/event/{event_id}/check_in_stats')

        assert [r['result'] for r in scans.json()['records']] == ['invalid', 'success']
        assert len(successes.json()['records']) == 1
        body = stats.json()
        assert body['total_tickets'] == 2
        assert body['checked_in'] == 1
        assert body['remaining'] == 1
        assert body['scan_attempts'] == 2

    async def test_scan_log_limit_is_bounded(self, client, database):
        event_id = await seed_event(database)

        response = await client.get(f'/api/event/{event_id}/scans', params={'limit': 5000})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    async def test_stats_for_unknown_event_is_404(self, client):
        response = await client.get(f'/api/event/{uuid4()}/check_in_stats')

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestTicketQrEndpoint:
    async def test_renders_png_data_url(self, client, database):
        event_id = await seed_event(database)
        booking_id = await seed_booking(database, event_id=event_id)
        issued = await client.post(f'/api/booking/{booking_id}/tickets')
        ticket_number = issued.json()['tickets'][0]['ticket_number']

        response = await client.get(f'/api/ticket/{ticket_number}/qr')

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body['ticket_number'] == ticket_number
        assert body['image_data_url'].startswith('data:image/png;base64,')
        assert body['seat_display'] == ''

    async def test_unknown_ticket_is_404(self, client):
        response = await client.get('/api/ticket/NOPE-0000-0000/qr')

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestCommonEndpoints:
    async def test_health(self, client):
        response = await client.get('/health')

        assert response.status_code == status.HTTP_200_OK
        assert response.json()['status'] == 'healthy'

    async def test_metrics_exposes_admission_counters(self, client, database):
        event_id = await seed_event(database)
        await client.post(
            f'/api/event/{event_id}/scan', json={'credential': 'nope', 'scanned_by': 'gate-1'}
        )

        response = await client.get('/metrics')

        assert response.status_code == status.HTTP_200_OK
        assert 'scan_outcomes_total' in response.text

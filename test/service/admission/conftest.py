import pytest

from src.platform.database.db_setting import Database
from src.service.admission.app.command.issue_tickets_use_case import IssueTicketsUseCase
from src.service.admission.app.command.validate_scan_use_case import ValidateScanUseCase
from src.service.admission.driven_adapter.credential.fernet_credential_codec import (
    FernetCredentialCodec,
)
from src.service.admission.driven_adapter.repo.booking_query_repo_impl import BookingQueryRepoImpl
from src.service.admission.driven_adapter.repo.check_in_command_repo_impl import (
    CheckInCommandRepoImpl,
)
from src.service.admission.driven_adapter.repo.check_in_stats_query_repo_impl import (
    CheckInStatsQueryRepoImpl,
)
from src.service.admission.driven_adapter.repo.event_query_repo_impl import EventQueryRepoImpl
from src.service.admission.driven_adapter.repo.scan_record_repo_impl import ScanRecordRepoImpl
from src.service.admission.driven_adapter.repo.seat_command_repo_impl import SeatCommandRepoImpl
from src.service.admission.driven_adapter.repo.ticket_command_repo_impl import (
    TicketCommandRepoImpl,
)
from src.service.admission.driven_adapter.repo.ticket_query_repo_impl import TicketQueryRepoImpl
from test.service.admission.fixtures import LEGACY_PATTERN, TEST_SECRET


@pytest.fixture
def codec() -> FernetCredentialCodec:
    return FernetCredentialCodec(secret=TEST_SECRET, legacy_ticket_number_pattern=LEGACY_PATTERN)


@pytest.fixture
def seat_repo(database: Database) -> SeatCommandRepoImpl:
    return SeatCommandRepoImpl(session_factory=database.session)


@pytest.fixture
def ticket_query_repo(database: Database) -> TicketQueryRepoImpl:
    return TicketQueryRepoImpl(session_factory=database.session)


@pytest.fixture
def ticket_command_repo(database: Database) -> TicketCommandRepoImpl:
    return TicketCommandRepoImpl(session_factory=database.session)


@pytest.fixture
def scan_record_repo(database: Database) -> ScanRecordRepoImpl:
    return ScanRecordRepoImpl(session_factory=database.session)


@pytest.fixture
def stats_repo(database: Database) -> CheckInStatsQueryRepoImpl:
    return CheckInStatsQueryRepoImpl(session_factory=database.session)


@pytest.fixture
def issue_use_case(
    database: Database,
    codec: FernetCredentialCodec,
    seat_repo: SeatCommandRepoImpl,
    ticket_query_repo: TicketQueryRepoImpl,
    ticket_command_repo: TicketCommandRepoImpl,
) -> IssueTicketsUseCase:
    return IssueTicketsUseCase(
        booking_query_repo=BookingQueryRepoImpl(session_factory=database.session),
        event_query_repo=EventQueryRepoImpl(session_factory=database.session),
        ticket_query_repo=ticket_query_repo,
        ticket_command_repo=ticket_command_repo,
        seat_command_repo=seat_repo,
        credential_codec=codec,
    )


@pytest.fixture
def validate_use_case(
    database: Database,
    codec: FernetCredentialCodec,
    ticket_query_repo: TicketQueryRepoImpl,
    scan_record_repo: ScanRecordRepoImpl,
) -> ValidateScanUseCase:
    return ValidateScanUseCase(
        credential_codec=codec,
        ticket_query_repo=ticket_query_repo,
        check_in_command_repo=CheckInCommandRepoImpl(session_factory=database.session),
        scan_record_repo=scan_record_repo,
        booking_query_repo=BookingQueryRepoImpl(session_factory=database.session),
    )

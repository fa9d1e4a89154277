"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.db_setting import Database
from src.service.admission.driven_adapter.credential.fernet_credential_codec import (
    FernetCredentialCodec,
)
from src.service.admission.driven_adapter.qr.qrcode_image_renderer import QrcodeImageRenderer
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


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (engine + session factory; tests override this provider)
    database = providers.Singleton(Database)

    # Repositories (stateless - use session_factory per-request)
    event_query_repo = providers.Singleton(
        EventQueryRepoImpl, session_factory=database.provided.session
    )
    booking_query_repo = providers.Singleton(
        BookingQueryRepoImpl, session_factory=database.provided.session
    )
    seat_command_repo = providers.Singleton(
        SeatCommandRepoImpl, session_factory=database.provided.session
    )
    ticket_command_repo = providers.Singleton(
        TicketCommandRepoImpl, session_factory=database.provided.session
    )
    ticket_query_repo = providers.Singleton(
        TicketQueryRepoImpl, session_factory=database.provided.session
    )
    check_in_command_repo = providers.Singleton(
        CheckInCommandRepoImpl, session_factory=database.provided.session
    )
    scan_record_repo = providers.Singleton(
        ScanRecordRepoImpl, session_factory=database.provided.session
    )
    check_in_stats_query_repo = providers.Singleton(
        CheckInStatsQueryRepoImpl, session_factory=database.provided.session
    )

    # Credential codec (pure, keyed by deployment secrets)
    credential_codec = providers.Singleton(
        FernetCredentialCodec,
        secret=config_service.provided.TICKET_CREDENTIAL_SECRET.get_secret_value.call(),
        previous_secrets=config_service.provided.TICKET_CREDENTIAL_PREVIOUS_SECRETS,
        ttl_seconds=config_service.provided.TICKET_CREDENTIAL_TTL_SECONDS,
        legacy_ticket_number_pattern=config_service.provided.LEGACY_TICKET_NUMBER_PATTERN,
    )

    qr_image_renderer = providers.Singleton(QrcodeImageRenderer)


container = Container()


def setup() -> None:
    container.config_service()
    container.credential_codec()


def cleanup() -> None:
    container.reset_singletons()

"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.admission.app.command import (
    allocate_seats_use_case,
    issue_tickets_use_case,
    release_seats_use_case,
    validate_scan_use_case,
)
from src.service.admission.app.query import (
    get_check_in_stats_use_case,
    list_booking_tickets_use_case,
    list_scan_records_use_case,
    render_ticket_qr_use_case,
)


WIRE_MODULES: list[ModuleType] = [
    issue_tickets_use_case,
    allocate_seats_use_case,
    release_seats_use_case,
    validate_scan_use_case,
    list_booking_tickets_use_case,
    list_scan_records_use_case,
    get_check_in_stats_use_case,
    render_ticket_qr_use_case,
]

"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.admission.driven_adapter.model.booking_model import BookingModel
from src.service.admission.driven_adapter.model.event_model import EventModel
from src.service.admission.driven_adapter.model.scan_record_model import ScanRecordModel
from src.service.admission.driven_adapter.model.seat_model import SeatModel
from src.service.admission.driven_adapter.model.ticket_model import TicketModel

__all__ = [
    'BookingModel',
    'EventModel',
    'ScanRecordModel',
    'SeatModel',
    'TicketModel',
]

"""Admission Domain Enums"""

from src.service.admission.domain.enum.payment_status import PaymentStatus
from src.service.admission.domain.enum.scan_result import ScanResult
from src.service.admission.domain.enum.seat_status import SeatStatus
from src.service.admission.domain.enum.ticket_status import TicketStatus

__all__ = ['PaymentStatus', 'ScanResult', 'SeatStatus', 'TicketStatus']

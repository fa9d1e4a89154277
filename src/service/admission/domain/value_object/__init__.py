"""Admission Domain Value Objects"""

from src.service.admission.domain.value_object.check_in_stats import CheckInStats
from src.service.admission.domain.value_object.credential_payload import (
    BareTicketNumber,
    CredentialPayload,
    DecodeError,
    DecodeFailureReason,
    DecodeResult,
)
from src.service.admission.domain.value_object.issuance_result import IssuanceResult
from src.service.admission.domain.value_object.scan_outcome import ScanOutcome, TicketSummary

__all__ = [
    'BareTicketNumber',
    'CheckInStats',
    'CredentialPayload',
    'DecodeError',
    'DecodeFailureReason',
    'DecodeResult',
    'IssuanceResult',
    'ScanOutcome',
    'TicketSummary',
]

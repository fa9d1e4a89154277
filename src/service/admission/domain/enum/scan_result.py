from enum import StrEnum


class ScanResult(StrEnum):
    SUCCESS = 'success'
    INVALID = 'invalid'
    ALREADY_USED = 'already_used'
    WRONG_EVENT = 'wrong_event'
    CANCELLED = 'cancelled'

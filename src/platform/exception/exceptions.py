class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class InsufficientSeatsError(ConflictError):
    """Allocation could not be satisfied; nothing was reserved."""

    def __init__(self, *, requested: int, available: int) -> None:
        self.requested = requested
        self.available = available
        super().__init__(f'Insufficient seats: requested {requested}, available {available}')


class PersistenceError(CustomBaseError):
    """The relational store is unreachable or refused the operation."""

    def __init__(self, message: str = 'Storage unavailable') -> None:
        super().__init__(message, 503)

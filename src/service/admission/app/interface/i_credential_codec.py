from abc import ABC, abstractmethod

from src.service.admission.domain.value_object.credential_payload import (
    CredentialPayload,
    DecodeResult,
)


class ICredentialCodec(ABC):
    """
    Seals ticket identity into an opaque printable credential and opens it again.

    Implementations are pure: no I/O, and decode failures are returned as
    DecodeError values instead of being raised.
    """

    @abstractmethod
    def encode(self, payload: CredentialPayload) -> str:
        """
        Serialize and seal a payload

        Args:
            payload: Ticket identity and context

        Returns:
            URL-safe printable credential suitable for a QR code
        """
        pass

    @abstractmethod
    def decode(self, credential: str) -> DecodeResult:
        """
        Open a presented credential

        Formats are tried in fixed precedence: sealed credential (current and
        retired keys), then bare ticket number.

        Args:
            credential: Raw scanned or typed text

        Returns:
            CredentialPayload, BareTicketNumber or DecodeError
        """
        pass

"""
Fernet credential codec

Credentials are Fernet tokens (AES-128-CBC + HMAC-SHA256, URL-safe base64)
wrapping a compact JSON payload:

    {"v": 1, "tid": ..., "eid": ..., "bid": ..., "tn": ..., "iat": ...,
     "seat": ..., "sec": ..., "row": ...}

Optional keys are omitted when empty. Fernet keys are derived from the
configured secrets with SHA-256, so any secret string can be used. Retired
secrets stay accepted for decoding until every printed ticket is re-issued.
"""

from base64 import urlsafe_b64encode
from datetime import datetime
import hashlib
import re
from typing import Any, Iterable, Optional
from urllib.parse import parse_qs, urlsplit
from uuid import UUID

from cryptography.fernet import Fernet, InvalidToken, MultiFernet
import orjson

from src.service.admission.app.interface.i_credential_codec import ICredentialCodec
from src.service.admission.domain.value_object.credential_payload import (
    BareTicketNumber,
    CredentialPayload,
    DecodeError,
    DecodeFailureReason,
    DecodeResult,
)


PAYLOAD_VERSION = 1
VALIDATION_URL_PARAM = 'data'


def derive_fernet_key(secret: str) -> bytes:
    return urlsafe_b64encode(hashlib.sha256(secret.encode()).digest())


def unwrap_validation_url(text: str) -> str:
    """Return the `data` query parameter of a validation URL, or the text unchanged"""
    if not text.lower().startswith(('http://', 'https://')):
        return text
    values = parse_qs(urlsplit(text).query).get(VALIDATION_URL_PARAM)
    return values[0].strip() if values else text


class FernetCredentialCodec(ICredentialCodec):
    def __init__(
        self,
        *,
        secret: str,
        previous_secrets: Iterable[str] = (),
        ttl_seconds: Optional[int] = None,
        legacy_ticket_number_pattern: str,
    ) -> None:
        if not secret:
            raise ValueError('Credential secret must not be empty')
        keys = [Fernet(derive_fernet_key(s)) for s in (secret, *previous_secrets) if s]
        # First key encrypts; all keys decrypt
        self._fernet = MultiFernet(keys)
        self._ttl_seconds = ttl_seconds
        self._legacy_pattern = re.compile(legacy_ticket_number_pattern)

    def encode(self, payload: CredentialPayload) -> str:
        return self._fernet.encrypt(orjson.dumps(self._to_wire(payload))).decode('ascii')

    def decode(self, credential: str) -> DecodeResult:
        text = credential.strip() if isinstance(credential, str) else ''
        if not text:
            return DecodeError(DecodeFailureReason.EMPTY)
        text = unwrap_validation_url(text)

        sealed = self._open_sealed(text)
        if sealed is not None:
            return sealed

        candidate = text.upper()
        if self._legacy_pattern.fullmatch(candidate):
            return BareTicketNumber(ticket_number=candidate)

        return DecodeError(DecodeFailureReason.UNRECOGNIZED)

    def _open_sealed(self, text: str) -> CredentialPayload | DecodeError | None:
        token = text.encode()
        try:
            raw = self._fernet.decrypt(token, ttl=self._ttl_seconds)
        except InvalidToken:
            if self._ttl_seconds is not None and self._is_authentic(token):
                return DecodeError(DecodeFailureReason.EXPIRED)
            return None

        payload = self._from_wire(raw)
        return payload if payload is not None else DecodeError(DecodeFailureReason.UNRECOGNIZED)

    def _is_authentic(self, token: bytes) -> bool:
        try:
            self._fernet.decrypt(token)
        except InvalidToken:
            return False
        return True

    @staticmethod
    def _to_wire(payload: CredentialPayload) -> dict[str, Any]:
        wire: dict[str, Any] = {
            'v': PAYLOAD_VERSION,
            'tid': str(payload.ticket_id),
            'eid': str(payload.event_id),
            'bid': str(payload.booking_id),
            'tn': payload.ticket_number,
            'iat': payload.issued_at.isoformat(),
        }
        if payload.seat_number is not None:
            wire['seat'] = payload.seat_number
        if payload.section is not None:
            wire['sec'] = payload.section
        if payload.row is not None:
            wire['row'] = payload.row
        return wire

    @staticmethod
    def _from_wire(raw: bytes) -> CredentialPayload | None:
        try:
            wire = orjson.loads(raw)
            if not isinstance(wire, dict) or wire.get('v') != PAYLOAD_VERSION:
                return None
            seat = wire.get('seat')
            return CredentialPayload(
                ticket_id=UUID(wire['tid']),
                event_id=UUID(wire['eid']),
                booking_id=UUID(wire['bid']),
                ticket_number=str(wire['tn']),
                issued_at=datetime.fromisoformat(wire['iat']),
                seat_number=int(seat) if seat is not None else None,
                section=wire.get('sec'),
                row=wire.get('row'),
            )
        except (orjson.JSONDecodeError, KeyError, TypeError, ValueError):
            return None

"""
Validation of verified resolution payloads.

A resolver signs a small JSON document naming the address and the instant
after which the answer must no longer be trusted.
"""

import json
from datetime import datetime, timezone, timedelta
from typing import Any, Dict, Final, Optional
from pydantic import BaseModel

from social.graze.cryptalias.errors import ExpiredError, PayloadError

EXPIRES_FORMAT: Final = "%Y-%m-%dT%H:%M:%SZ"


class ResolvedPayload(BaseModel):
    """Verified resolver answer.

    Only address and expires are interpreted. Resolvers also send version,
    ticker and nonce; they are kept for callers that want them.
    """

    model_config = {"frozen": True}

    address: str
    expires: datetime
    version: Optional[str] = None
    ticker: Optional[str] = None
    nonce: Optional[str] = None


def parse_expires(value: str) -> datetime:
    """Parse a second-precision, Z-suffixed UTC timestamp.

    Raises:
        PayloadError: If the value is not in YYYY-MM-DDTHH:MM:SSZ form
    """
    try:
        parsed = datetime.strptime(value, EXPIRES_FORMAT)
    except ValueError as e:
        raise PayloadError("invalid expires in JWS payload") from e
    return parsed.replace(tzinfo=timezone.utc)


def format_expires(value: datetime) -> str:
    return value.astimezone(timezone.utc).strftime(EXPIRES_FORMAT)


def build_payload(
    address: str,
    expires_in_seconds: int = 60,
    issued_at: Optional[datetime] = None,
    **extra: Any,
) -> Dict[str, Any]:
    """Create a payload document for signing.

    Args:
        address: Address the alias resolves to
        expires_in_seconds: Validity period (default: 60, as resolvers issue)
        issued_at: Reference time (defaults to current UTC time)
        **extra: Additional fields such as version, ticker or nonce

    Returns:
        Dict[str, Any]: Payload ready for sign_payload
    """
    if issued_at is None:
        issued_at = datetime.now(timezone.utc)
    payload: Dict[str, Any] = {
        "address": address,
        "expires": format_expires(issued_at + timedelta(seconds=expires_in_seconds)),
    }
    payload.update(extra)
    return payload


def validate_payload(payload: bytes, now: Optional[datetime] = None) -> ResolvedPayload:
    """Check that a verified payload names an address and is still fresh.

    Args:
        payload: Decoded payload bytes from a verified envelope
        now: Verification time (defaults to current UTC time)

    Returns:
        ResolvedPayload with the parsed expiry

    Raises:
        PayloadError: If the document, address or expires is missing or malformed
        ExpiredError: If expires is not strictly after now
    """
    try:
        document = json.loads(payload)
    except ValueError as e:
        raise PayloadError("JWS payload is not valid JSON") from e
    if not isinstance(document, dict):
        raise PayloadError("JWS payload is not an object")

    address = document.get("address")
    if not isinstance(address, str) or address == "":
        raise PayloadError("missing address in JWS payload")

    expires = document.get("expires")
    if not isinstance(expires, str) or expires == "":
        raise PayloadError("missing expires in JWS payload")
    expires_at = parse_expires(expires)

    if now is None:
        now = datetime.now(timezone.utc)
    if expires_at <= now:
        raise ExpiredError("resolved address has expired")

    return ResolvedPayload(
        address=address,
        expires=expires_at,
        version=optional_str(document.get("version")),
        ticker=optional_str(document.get("ticker")),
        nonce=optional_str(document.get("nonce")),
    )


def optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)

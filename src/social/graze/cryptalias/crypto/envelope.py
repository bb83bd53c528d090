"""
Compact signature envelopes.

A resolver answers with a compact JWS: three base64url segments joined by dots.
This module splits envelopes for verification and builds them for resolver
implementations and tooling.
"""

import json
from typing import Any, Dict, Optional
from jwcrypto import jwk, jws
from pydantic import BaseModel

from social.graze.cryptalias.errors import FormatError

SIGNATURE_ALGORITHM = "EdDSA"

MEDIA_TYPE = "application/jose"


class CompactSignature(BaseModel):
    """The three segments of a compact envelope, exactly as received."""

    model_config = {"frozen": True}

    header: str
    payload: str
    signature: str

    @property
    def signing_input(self) -> bytes:
        """Bytes covered by the signature.

        This is the received text of the first two segments, never a
        re-encoding of their decoded contents.
        """
        return f"{self.header}.{self.payload}".encode("utf-8")


def split_compact(envelope: str) -> CompactSignature:
    """Split an envelope on its first and second dots.

    Args:
        envelope: Compact envelope text

    Returns:
        CompactSignature with the header, payload and signature segments

    Raises:
        FormatError: If either separator is missing
    """
    first = envelope.find(".")
    if first == -1:
        raise FormatError("invalid JWS format", stage="decode_envelope")
    second = envelope.find(".", first + 1)
    if second == -1:
        raise FormatError("invalid JWS format", stage="decode_envelope")
    return CompactSignature(
        header=envelope[:first],
        payload=envelope[first + 1 : second],
        signature=envelope[second + 1 :],
    )


def sign_payload(payload: Dict[str, Any], key: jwk.JWK, kid: Optional[str] = None) -> str:
    """Sign a payload document as a compact EdDSA envelope.

    Args:
        payload: Document to sign, usually with address and expires fields
        key: Ed25519 private key (kty OKP, crv Ed25519)
        kid: Optional key identifier placed in the protected header

    Returns:
        str: Compact envelope ready to serve as application/jose
    """
    header: Dict[str, Any] = {"alg": SIGNATURE_ALGORITHM}
    if kid is not None:
        header["kid"] = kid

    token = jws.JWS(json.dumps(payload, separators=(",", ":")).encode("utf-8"))
    token.add_signature(key, None, json.dumps(header))
    return token.serialize(compact=True)

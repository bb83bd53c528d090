"""
URL-safe base64 helpers.

Decoding is deliberately lenient: characters outside the base64 alphabet are
skipped and the first padding character ends the input. It never raises, so a
corrupted segment shows up later as a bad key or a failed signature check
rather than as a decode error.
"""

import base64
import string
from typing import Dict, Final


_ALPHABET: Final = string.ascii_uppercase + string.ascii_lowercase + string.digits + "+/"

_DECODE_TABLE: Final[Dict[str, int]] = {c: i for i, c in enumerate(_ALPHABET)}

PADDING: Final = "="


def base64url_decode(value: str) -> bytes:
    """Decode URL-safe base64, with or without padding.

    Args:
        value: Encoded text

    Returns:
        Decoded bytes, possibly shorter than expected (or empty) for malformed input
    """
    b64 = value.replace("-", "+").replace("_", "/")
    if len(b64) % 4 != 0:
        b64 += PADDING * (4 - len(b64) % 4)

    out = bytearray()
    acc = 0
    bits = -8
    for c in b64:
        if c == PADDING:
            break
        d = _DECODE_TABLE.get(c)
        if d is None:
            continue
        acc = ((acc << 6) | d) & 0xFFFFFF
        bits += 6
        if bits >= 0:
            out.append((acc >> bits) & 0xFF)
            bits -= 8
    return bytes(out)


def base64url_encode(data: bytes) -> str:
    """Encode bytes as unpadded URL-safe base64."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")

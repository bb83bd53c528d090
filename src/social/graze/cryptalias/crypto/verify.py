"""
Ed25519 verification of compact signature envelopes.

Only the raw public key in the key document's x field is interpreted. There is
exactly one accepted algorithm, so the envelope header is never consulted when
choosing how to verify.
"""

import logging
from typing import Any, Mapping
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from social.graze.cryptalias.crypto.base64url import base64url_decode
from social.graze.cryptalias.crypto.envelope import split_compact
from social.graze.cryptalias.errors import ConfigError, CryptoError

logger = logging.getLogger(__name__)


def load_public_key(key_document: Mapping[str, Any]) -> Ed25519PublicKey:
    """Build an Ed25519 public key from a published key document.

    Args:
        key_document: JWK-shaped mapping with a base64url x field

    Returns:
        Ed25519PublicKey for the raw key bytes

    Raises:
        ConfigError: If the document has no usable x field
        CryptoError: If the decoded bytes are not a valid Ed25519 public key
    """
    if not isinstance(key_document, Mapping) or "x" not in key_document:
        raise ConfigError("missing jwk x", stage="verify_signature")
    x = key_document["x"]
    if not isinstance(x, str):
        raise ConfigError("jwk x must be a string", stage="verify_signature")

    raw = base64url_decode(x)
    try:
        return Ed25519PublicKey.from_public_bytes(raw)
    except ValueError as e:
        raise CryptoError(
            f"failed to create public key from {len(raw)} bytes"
        ) from e


def verify_signature(
    signing_input: bytes, signature: bytes, key_document: Mapping[str, Any]
) -> None:
    """Verify an Ed25519 signature over the signing input.

    Raises:
        ConfigError: If the key document has no x field
        CryptoError: If the key is unusable or the signature does not verify
    """
    _verify(load_public_key(key_document), signing_input, signature)


def _verify(public_key: Ed25519PublicKey, signing_input: bytes, signature: bytes) -> None:
    try:
        public_key.verify(signature, signing_input)
    except InvalidSignature as e:
        raise CryptoError("signature verification failed") from e


def verify_envelope(envelope: str, key_document: Mapping[str, Any]) -> bytes:
    """Verify a compact envelope and return its decoded payload bytes.

    Args:
        envelope: Compact envelope text
        key_document: Key document published in the domain configuration

    Returns:
        bytes: Decoded payload, only after the signature has verified

    Raises:
        FormatError: If the envelope does not have three segments
        ConfigError: If the key document has no x field
        CryptoError: If verification fails
    """
    public_key = load_public_key(key_document)
    compact = split_compact(envelope)
    _verify(public_key, compact.signing_input, base64url_decode(compact.signature))
    logger.debug("envelope signature verified")
    return base64url_decode(compact.payload)

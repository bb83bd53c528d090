"""
Shared test configuration and fixtures for cryptalias tests.

Provides Ed25519 signing keys, their published key documents, and a default
Settings instance that does not depend on the test environment.
"""

from typing import Any, Dict

import pytest
from jwcrypto import jwk

from social.graze.cryptalias.app.config import Settings


@pytest.fixture
def signing_key() -> jwk.JWK:
    """Ed25519 private key used to sign resolver answers."""
    return jwk.JWK.generate(kty="OKP", crv="Ed25519")


@pytest.fixture
def other_signing_key() -> jwk.JWK:
    """Unrelated Ed25519 key, for signatures that must not verify."""
    return jwk.JWK.generate(kty="OKP", crv="Ed25519")


@pytest.fixture
def key_document(signing_key: jwk.JWK) -> Dict[str, Any]:
    """Public key document as a domain would publish it."""
    return signing_key.export_public(as_dict=True)


@pytest.fixture
def settings() -> Settings:
    """Settings with explicit values so environment variables do not leak in."""
    return Settings(
        debug=False,
        sentry_dsn=None,
        request_timeout=5.0,
        user_agent="cryptalias-tests",
        well_known_scheme="https",
    )

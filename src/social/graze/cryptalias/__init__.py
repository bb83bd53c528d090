"""
Cryptalias - Alias to Address Resolution

This package resolves human-readable aliases such as btc:alice$example.com into
cryptocurrency addresses. A domain publishes a configuration document naming its
resolver and signing key; the resolver answers with a signed, short-lived
payload that is verified before the address is trusted.

Key Components:
- resolve: Alias parsing, document fetching and the resolution pipeline
- crypto: Base64url decoding, compact envelopes and Ed25519 verification
- errors: Typed failures and the tagged results returned to callers
- app: Settings, logging setup and command line utilities

Resolution Flow:
1. Parse the alias and check any ticker prefix against the requested ticker
2. Fetch https://{domain}/.well-known/cryptalias/configuration
3. Fetch the signed envelope from the resolver endpoint it names
4. Verify the envelope with the published Ed25519 key
5. Check that the payload carries an address and has not expired

A resolver that is compromised can refuse to answer, but cannot forge an
address, replay an expired answer, or answer for a different ticker.
"""

__version__ = "0.1.0"

"""
Envelope Cryptography

This package handles the signed documents returned by cryptalias resolvers.

Key Components:
- base64url.py: Lenient URL-safe base64 decoding and unpadded encoding
- envelope.py: Splitting compact envelopes and signing payloads (EdDSA)
- verify.py: Ed25519 verification against a published key document

Verification follows these steps:
1. Decode the x field of the key document into a raw 32-byte public key
2. Split the envelope into header, payload and signature segments
3. Verify the signature over the received "header.payload" text
4. Decode and return the payload only once the signature has verified
"""

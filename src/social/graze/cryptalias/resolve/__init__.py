"""
Alias Resolution

This package resolves cryptalias aliases to addresses, implementing the
well-known configuration lookup and the signed resolver query.

Key Components:
- alias.py: Alias parsing, ticker normalization and URL percent-encoding
- transport.py: HTTP fetching of configuration documents and envelopes
- payload.py: Validation of verified payloads (address, expiry)
- address.py: The resolution pipeline and its public entry points
- __main__.py: CLI interface for resolution

The resolution flow follows these steps:
1. Parse the alias and reject ticker prefixes that disagree with the ticker
2. Fetch the domain configuration from /.well-known/cryptalias/configuration
3. Fetch the envelope from {resolver_endpoint}/_cryptalias/resolve/{ticker}/{alias}
4. Verify the envelope with the key published in the configuration
5. Return the address if the payload has not expired

No stage is retried and no result is cached; every call starts from scratch.
"""

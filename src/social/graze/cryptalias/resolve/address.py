"""Alias to address resolution.

Resolves aliases by fetching the domain's published configuration, asking the
resolver it names for a signed answer, and verifying that answer with the
domain's key before trusting the address.

The pipeline is strictly linear:

    parse alias -> fetch configuration -> extract resolver and key
    -> fetch envelope -> verify signature -> decode payload -> validate payload

Any stage may end the resolution with a typed error; nothing is retried and no
partial result is returned.
"""

import json
import logging
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Union
from aiohttp import ClientSession
from pydantic import BaseModel

from social.graze.cryptalias.app.config import RESOLVE_PATH, Settings
from social.graze.cryptalias.crypto.envelope import MEDIA_TYPE
from social.graze.cryptalias.crypto.verify import verify_envelope
from social.graze.cryptalias.errors import (
    ConfigError,
    CryptaliasError,
    ResolutionResult,
    VerificationResult,
)
from social.graze.cryptalias.resolve.alias import (
    normalize_ticker,
    parse_alias,
    percent_encode,
)
from social.graze.cryptalias.resolve.payload import (
    ResolvedPayload,
    optional_str,
    validate_payload,
)
from social.graze.cryptalias.resolve.transport import JSON_MEDIA_TYPE, fetch

logger = logging.getLogger(__name__)


class Configuration(BaseModel):
    """Interpreted domain configuration.

    Contains the resolver endpoint with trailing slashes removed and the key
    document used to verify resolver answers.
    """

    model_config = {"frozen": True}

    resolver_endpoint: str
    key: Any
    version: Optional[str] = None
    domain: Optional[str] = None
    resolver_mode: Optional[str] = None


def parse_configuration(body: bytes) -> Configuration:
    """Interpret a published configuration document.

    Args:
        body: Raw configuration document

    Returns:
        Configuration with a non-empty resolver endpoint and a key document

    Raises:
        ConfigError: If the document is malformed or lacks resolver_endpoint or key
    """
    try:
        document = json.loads(body)
    except ValueError as e:
        raise ConfigError("configuration is not valid JSON") from e
    if not isinstance(document, dict):
        raise ConfigError("configuration is not an object")

    resolver = document.get("resolver")
    endpoint = resolver.get("resolver_endpoint") if isinstance(resolver, dict) else None
    if not isinstance(endpoint, str):
        endpoint = ""
    endpoint = endpoint.rstrip("/")
    if endpoint == "":
        raise ConfigError("missing resolver_endpoint in configuration")

    key = document.get("key")
    if key is None:
        raise ConfigError("missing key in configuration")

    return Configuration(
        resolver_endpoint=endpoint,
        key=key,
        version=optional_str(document.get("version")),
        domain=optional_str(document.get("domain")),
        resolver_mode=optional_str(document.get("resolver_mode")),
    )


def resolve_url(resolver_endpoint: str, ticker: str, alias: str) -> str:
    """Build the resolver lookup URL.

    Args:
        resolver_endpoint: Endpoint without trailing slashes
        ticker: Normalized ticker
        alias: Alias exactly as supplied by the caller

    Returns:
        str: {endpoint}/_cryptalias/resolve/{ticker}/{alias}, both percent-encoded
    """
    return f"{resolver_endpoint}{RESOLVE_PATH}/{percent_encode(ticker)}/{percent_encode(alias)}"


class CryptaliasResolver:
    """
    Resolves aliases using an injected HTTP session.

    The resolver holds no per-call state, so one instance can serve any number
    of concurrent resolutions. The session (and with it any timeouts) belongs to
    the caller.
    """

    def __init__(self, session: ClientSession, settings: Optional[Settings] = None) -> None:
        self._session = session
        self._settings = settings if settings is not None else Settings()

    async def resolve(
        self, ticker: str, alias: str, now: Optional[datetime] = None
    ) -> ResolvedPayload:
        """Resolve an alias, raising on any failure.

        Args:
            ticker: Asset the caller wants an address for
            alias: Alias such as btc:alice$example.com
            now: Verification time (defaults to current UTC time)

        Returns:
            ResolvedPayload with the verified address

        Raises:
            CryptaliasError: Subclass identifying the stage that failed
        """
        parsed = parse_alias(alias, ticker)
        logger.debug("resolving %s for ticker %s", parsed.domain, parsed.ticker)

        configuration_body = await fetch(
            self._session,
            self._settings.configuration_url(parsed.domain),
            JSON_MEDIA_TYPE,
            stage="fetch_configuration",
        )
        configuration = parse_configuration(configuration_body)

        envelope_body = await fetch(
            self._session,
            resolve_url(configuration.resolver_endpoint, parsed.ticker, parsed.alias),
            MEDIA_TYPE,
            stage="fetch_envelope",
        )
        envelope = envelope_body.decode("utf-8", errors="replace").strip()

        payload = validate_payload(verify_envelope(envelope, configuration.key), now)
        logger.debug("resolved %s, expires %s", parsed.domain, payload.expires)
        return payload

    async def resolve_address(
        self, ticker: str, alias: str, now: Optional[datetime] = None
    ) -> ResolutionResult:
        """Resolve an alias into a tagged result.

        Returns:
            ResolutionResult with the address, or the error of the failed stage
        """
        try:
            payload = await self.resolve(ticker, alias, now)
        except CryptaliasError as e:
            logger.warning(
                "resolution of %s failed at %s: %s", alias, e.stage, e.message
            )
            return ResolutionResult.failure(normalize_ticker(ticker or ""), alias, e)
        return ResolutionResult.success(normalize_ticker(ticker), alias, payload.address)


async def resolve_address(
    session: ClientSession,
    ticker: str,
    alias: str,
    settings: Optional[Settings] = None,
    now: Optional[datetime] = None,
) -> ResolutionResult:
    """Resolve an alias to an address.

    Args:
        session: HTTP client session
        ticker: Asset the caller wants an address for
        alias: Alias such as btc:alice$example.com
        settings: Client settings (defaults loaded from the environment)
        now: Verification time (defaults to current UTC time)

    Returns:
        ResolutionResult with the address, or the error of the failed stage
    """
    return await CryptaliasResolver(session, settings).resolve_address(ticker, alias, now)


def verify_signed_payload(
    envelope: str, key_document_json: Union[str, bytes, Mapping[str, Any]]
) -> VerificationResult:
    """Verify an envelope against a key document without network access.

    Args:
        envelope: Compact envelope text
        key_document_json: Key document as JSON text or an already decoded mapping

    Returns:
        VerificationResult with the decoded payload bytes, or the error
    """
    try:
        payload = verify_envelope(envelope, _key_document(key_document_json))
    except CryptaliasError as e:
        logger.warning("envelope verification failed at %s: %s", e.stage, e.message)
        return VerificationResult(ok=False, error=e.to_error())
    return VerificationResult(ok=True, payload=payload)


def _key_document(value: Union[str, bytes, Mapping[str, Any]]) -> Dict[str, Any]:
    if isinstance(value, Mapping):
        return dict(value)
    try:
        document = json.loads(value)
    except ValueError as e:
        raise ConfigError("key document is not valid JSON", stage="verify_signature") from e
    if not isinstance(document, dict):
        raise ConfigError("key document is not an object", stage="verify_signature")
    return document


"""
Error taxonomy and tagged results for alias resolution.

Every stage of the resolution pipeline raises a subclass of CryptaliasError. The
public entry points catch these and return a ResolutionResult or
VerificationResult instead, so callers can tell "bad input", "network or
configuration problem" and "cryptographic failure" apart without parsing
messages.
"""

from typing import Optional
from pydantic import BaseModel


class CryptaliasError(Exception):
    """Base class for all resolution failures.

    Attributes:
        code: Stable machine-readable error code
        stage: Pipeline stage that failed
    """

    code = "error"
    stage = "resolve"

    def __init__(self, message: str, *, stage: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        if stage is not None:
            self.stage = stage

    def to_error(self) -> "ResolutionError":
        return ResolutionError(code=self.code, stage=self.stage, message=self.message)


class FormatError(CryptaliasError):
    """Malformed alias or malformed compact signature envelope."""

    code = "format"
    stage = "parse_alias"


class MismatchError(CryptaliasError):
    """Ticker prefix in the alias disagrees with the caller's ticker."""

    code = "mismatch"
    stage = "parse_alias"

    def __init__(self, prefix: str, ticker: str) -> None:
        super().__init__(f'ticker prefix "{prefix}" does not match "{ticker}"')
        self.prefix = prefix
        self.ticker = ticker


class TransportError(CryptaliasError):
    """Fetching a remote document failed or returned a non-success status."""

    code = "transport"
    stage = "fetch"

    def __init__(
        self,
        message: str,
        *,
        url: str,
        status: Optional[int] = None,
        stage: Optional[str] = None,
    ) -> None:
        super().__init__(message, stage=stage)
        self.url = url
        self.status = status


class ConfigError(CryptaliasError):
    """Published configuration or key document is missing required fields."""

    code = "config"
    stage = "extract_configuration"


class CryptoError(CryptaliasError):
    """Public key construction or signature verification failed."""

    code = "crypto"
    stage = "verify_signature"


class PayloadError(CryptaliasError):
    """Verified payload lacks a usable address or expiry."""

    code = "payload"
    stage = "validate_payload"


class ExpiredError(CryptaliasError):
    """Verified payload has already expired."""

    code = "expired"
    stage = "validate_payload"


class ResolutionError(BaseModel):
    """Structured error carried inside a result."""

    model_config = {"frozen": True}

    code: str
    stage: str
    message: str


class ResolutionResult(BaseModel):
    """Outcome of resolving an alias.

    Attributes:
        ok: Whether an address was resolved
        ticker: Normalized ticker the resolution was made for
        alias: Alias exactly as supplied by the caller
        address: Resolved address when ok is True
        error: Structured error when ok is False
    """

    model_config = {"frozen": True}

    ok: bool
    ticker: str
    alias: str
    address: Optional[str] = None
    error: Optional[ResolutionError] = None

    @classmethod
    def success(cls, ticker: str, alias: str, address: str) -> "ResolutionResult":
        return cls(ok=True, ticker=ticker, alias=alias, address=address)

    @classmethod
    def failure(
        cls, ticker: str, alias: str, exc: CryptaliasError
    ) -> "ResolutionResult":
        return cls(ok=False, ticker=ticker, alias=alias, error=exc.to_error())


class VerificationResult(BaseModel):
    """Outcome of verifying a signed envelope without any network access.

    Attributes:
        ok: Whether the signature verified
        payload: Raw decoded payload bytes when ok is True
        error: Structured error when ok is False
    """

    model_config = {"frozen": True}

    ok: bool
    payload: Optional[bytes] = None
    error: Optional[ResolutionError] = None

"""Alias parsing and ticker handling.

Aliases take the form ``[ticker:]local$domain``. The domain is everything after
the last ``$``; an optional ticker prefix binds the alias to one asset.
"""

import string
from typing import Final, Optional
from pydantic import BaseModel

from social.graze.cryptalias.errors import FormatError, MismatchError

ALIAS_FORMAT_MESSAGE: Final = "alias must be in the format [ticker:]alias$domain"

PREFIX_FORMAT_MESSAGE: Final = "invalid format (expected [ticker:]alias[+tag]$domain)"

_UNRESERVED: Final = frozenset(
    (string.ascii_letters + string.digits + "-_.~").encode("ascii")
)


class ParsedAlias(BaseModel):
    """Alias split into its parts.

    Contains the normalized ticker prefix (when present), the local part as
    written, the domain, and the normalized caller ticker. The original alias
    text is kept because resolvers are queried with it unmodified.
    """

    model_config = {"frozen": True}

    alias: str
    ticker: str
    ticker_prefix: Optional[str] = None
    local_part: str
    domain: str


def normalize_ticker(value: str) -> str:
    """Remove all whitespace from a ticker and lower-case it."""
    return "".join(value.split()).lower()


def parse_alias(alias: str, ticker: str) -> ParsedAlias:
    """Parse an alias and check it against the caller's ticker.

    Args:
        alias: Raw alias such as btc:alice$example.com
        ticker: Asset the caller wants an address for

    Returns:
        ParsedAlias with the domain, local part and normalized tickers

    Raises:
        FormatError: If the alias or ticker is malformed
        MismatchError: If the alias carries a prefix for a different ticker
    """
    if not alias or not ticker:
        raise FormatError("ticker and alias are required")
    ticker_clean = normalize_ticker(ticker)
    if not ticker_clean:
        raise FormatError("ticker and alias are required")

    idx = alias.rfind("$")
    if idx == -1 or idx == len(alias) - 1:
        raise FormatError(ALIAS_FORMAT_MESSAGE)

    left = alias[:idx]
    domain = alias[idx + 1 :]

    prefix: Optional[str] = None
    local_part = left
    colon = left.find(":")
    if colon != -1:
        if colon == 0 or colon == len(left) - 1 or left.find(":", colon + 1) != -1:
            raise FormatError(PREFIX_FORMAT_MESSAGE)
        # A prefix made only of whitespace binds to nothing.
        prefix = normalize_ticker(left[:colon]) or None
        local_part = left[colon + 1 :]
        if prefix is not None and prefix != ticker_clean:
            raise MismatchError(prefix, ticker_clean)

    return ParsedAlias(
        alias=alias,
        ticker=ticker_clean,
        ticker_prefix=prefix,
        local_part=local_part,
        domain=domain,
    )


def percent_encode(value: str) -> str:
    """Percent-encode everything except unreserved characters.

    Letters, digits and ``-_.~`` pass through; every other UTF-8 byte becomes
    ``%XX`` with upper-case hex.
    """
    return "".join(
        chr(b) if b in _UNRESERVED else f"%{b:02X}" for b in value.encode("utf-8")
    )

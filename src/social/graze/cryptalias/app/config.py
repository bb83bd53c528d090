"""
Configuration Module for the Cryptalias Client

Settings are loaded from environment variables through Pydantic, with defaults
suitable for resolving against public domains. Resolution components never read
the environment themselves: a Settings instance is passed to the resolver when
it is constructed, together with the HTTP session it should use.

Key configuration areas include:
- Debugging and error reporting
- HTTP client behaviour (timeouts, user agent)
- Well-known endpoint location
"""

import logging
from typing import Final, Optional
from aiohttp import ClientSession, ClientTimeout
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from social.graze.cryptalias import __version__


logger = logging.getLogger(__name__)


WELL_KNOWN_CONFIGURATION_PATH: Final = "/.well-known/cryptalias/configuration"
"""Path, relative to the alias domain, of the published configuration document"""

RESOLVE_PATH: Final = "/_cryptalias/resolve"
"""Path, relative to the resolver endpoint, of the resolution API"""


class Settings(BaseSettings):
    """
    Client settings for alias resolution.

    Environment variables are mapped to fields by name, so request_timeout is
    set with REQUEST_TIMEOUT and so on.
    """

    debug: bool = False
    """
    Enable debug logging.
    Set with DEBUG=true environment variable.
    """

    sentry_dsn: Optional[str] = None
    """
    Sentry DSN for error reporting. Optional, no error reporting if not set.
    Set with SENTRY_DSN environment variable.
    """

    request_timeout: float = 10.0
    """
    Total timeout in seconds for each HTTP request.
    Set with REQUEST_TIMEOUT environment variable.
    Default: 10.0
    """

    user_agent: str = Field(default=f"cryptalias-client/{__version__}")
    """
    User-Agent header sent with every request.
    Set with USER_AGENT environment variable.
    """

    well_known_scheme: str = "https"
    """
    Scheme used to fetch domain configuration documents. Only "http" and
    "https" are accepted; "http" is meant for local development resolvers.
    Set with WELL_KNOWN_SCHEME environment variable.
    """

    @field_validator("request_timeout")
    @classmethod
    def check_request_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("request_timeout must be greater than zero")
        return v

    @field_validator("well_known_scheme")
    @classmethod
    def check_well_known_scheme(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in ("https", "http"):
            raise ValueError("well_known_scheme must be https or http")
        if v == "http":
            logger.warning("configuration documents will be fetched over plain http")
        return v

    def configuration_url(self, domain: str) -> str:
        return f"{self.well_known_scheme}://{domain}{WELL_KNOWN_CONFIGURATION_PATH}"

    def client_session(self) -> ClientSession:
        """Create an HTTP session honouring the timeout and user agent."""
        return ClientSession(
            timeout=ClientTimeout(total=self.request_timeout),
            headers={"User-Agent": self.user_agent},
        )

"""
HTTP fetching for configuration documents and resolution envelopes.

Every failure, whether a connection error, a timeout or a non-2xx status, is
reported the same way: a TransportError that aborts the resolution. There are
no retries.
"""

import asyncio
import logging
from typing import Final, Optional
from aiohttp import ClientError, ClientSession
import sentry_sdk

from social.graze.cryptalias.errors import TransportError

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE: Final = "application/json"

# Error bodies are echoed into messages; keep them short.
MAX_ERROR_BODY: Final = 200


async def fetch(
    session: ClientSession, url: str, accept: str, stage: Optional[str] = None
) -> bytes:
    """Fetch a URL and return the response body.

    Args:
        session: HTTP client session, owned by the caller
        url: Absolute URL to GET
        accept: Value for the Accept header
        stage: Pipeline stage reported on failure

    Returns:
        bytes: Response body of a 2xx response

    Raises:
        TransportError: On connection failure, timeout or non-2xx status
    """
    try:
        async with session.get(url, headers={"Accept": accept}) as resp:
            body = await resp.read()
            if resp.status < 200 or resp.status >= 300:
                text = body[:MAX_ERROR_BODY].decode("utf-8", errors="replace").strip()
                logger.warning("fetch %s failed with status %s", url, resp.status)
                raise TransportError(
                    f"request failed {resp.status}: {text}",
                    url=url,
                    status=resp.status,
                    stage=stage,
                )
            return body
    except (ClientError, asyncio.TimeoutError) as e:
        sentry_sdk.capture_exception(e)
        logger.warning("fetch %s failed: %s", url, e)
        raise TransportError(
            f"request failed: {e.__class__.__name__}", url=url, stage=stage
        ) from e

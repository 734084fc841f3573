"""
Wait for a capture target to answer before spending time on a browser launch.

Handy when the page is served by a dev server that is still starting up. Any
response below 500 counts as available; connection errors and 5xx responses
are retried until the window closes. Only http(s) targets can be polled.
"""

import asyncio
import time
from typing import Callable

import httpx

from .errors import NavigationError
from .log import quiet

POLL_SCHEMES = {"http", "https"}

# Floor for the per-request timeout once the window is nearly used up.
MIN_REQUEST_TIMEOUT = 0.05


def can_poll(url: str) -> bool:
    return httpx.URL(url).scheme in POLL_SCHEMES


async def wait_for_target(
    url: str,
    timeout: float,
    interval: float = 1.0,
    request_timeout: float = 5.0,
    transport: httpx.AsyncBaseTransport | None = None,
    log: Callable[[str], None] = quiet,
) -> int:
    """Poll ``url`` until it responds, returning the status code.

    No single request outlives the remaining window.

    Raises:
        NavigationError: when nothing below 500 arrives within ``timeout`` seconds,
            or the URL's scheme cannot be fetched over HTTP.
    """
    log(f"Waiting up to {timeout:g}s for {url} to respond")
    start = time.monotonic()

    async with httpx.AsyncClient(transport=transport) as client:
        while True:
            remaining = timeout - (time.monotonic() - start)
            try:
                response = await client.get(
                    url, timeout=max(MIN_REQUEST_TIMEOUT, min(request_timeout, remaining))
                )
                if response.status_code < 500:
                    log(f"Target is available (status {response.status_code})")
                    return response.status_code
                log(f"Target answered {response.status_code}, retrying")
            except httpx.UnsupportedProtocol as e:
                raise NavigationError(f"Cannot poll {url}: {e}") from e
            except httpx.HTTPError as e:
                log(f"Target not reachable yet: {e}")

            if time.monotonic() - start + interval > timeout:
                break
            await asyncio.sleep(interval)

    raise NavigationError(f"Target {url} did not become available within {timeout:g}s")

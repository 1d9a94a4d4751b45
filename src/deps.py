# ABOUTME: Factory for the shared httpx.AsyncClient used to call Open-Meteo.
# ABOUTME: Adds a tenacity retry transport for transient failures and a per-request timeout.

import httpx
from pydantic_ai.retries import AsyncTenacityTransport, RetryConfig, wait_retry_after
from tenacity import retry_if_exception, stop_after_attempt

from src import config


def is_transient_error(exc: BaseException) -> bool:
    """Return True for failures worth retrying: connection errors, timeouts, 429 and 5xx."""
    if isinstance(exc, (httpx.ConnectError, httpx.TimeoutException)):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        return status == 429 or status >= 500
    return False


def create_http_client(
    timeout: float = config.HTTP_TIMEOUT,
    attempts: int = config.HTTP_RETRY_ATTEMPTS,
    max_wait: float = config.HTTP_RETRY_MAX_WAIT,
) -> httpx.AsyncClient:
    """Create an httpx client with a bounded timeout and tenacity retry on transient errors.

    Every geocoding attempt and forecast call goes through this client, so the timeout
    and retry budget bound the worst-case latency of one lookup.
    """
    transport = AsyncTenacityTransport(
        RetryConfig(
            retry=retry_if_exception(is_transient_error),
            wait=wait_retry_after(max_wait=max_wait),
            stop=stop_after_attempt(attempts),
            reraise=True,
        ),
        validate_response=lambda r: r.raise_for_status(),
    )
    return httpx.AsyncClient(transport=transport, timeout=timeout)

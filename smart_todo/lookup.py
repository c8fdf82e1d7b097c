"""HTTP lookups against package registries and code-hosting APIs."""

import logging
import time
from typing import Any

import httpx

from .errors import LookupFailedError, TransientLookupError

logger = logging.getLogger(__name__)

USER_AGENT = "smart_todo"


class LookupClient:
    """Performs GET requests with a bounded timeout and retries.

    Transport errors (connection refused, timeouts, ...) and the status codes
    in ``TRANSIENT_STATUS_CODES`` are retried with exponential backoff. Any
    other response is handed back to the caller, who decides what a 404 or
    401 means for its event.
    """

    TIMEOUT = 10.0
    MAX_RETRIES = 3
    INITIAL_BACKOFF = 1  # seconds
    BACKOFF_MULTIPLIER = 2
    TRANSIENT_STATUS_CODES = {429, 500, 502, 503, 504}

    def __init__(
        self,
        settings: dict[str, Any] | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        settings = settings or {}
        self.timeout = float(settings.get("timeout", self.TIMEOUT))
        self.max_retries = max(1, int(settings.get("max_retries", self.MAX_RETRIES)))
        self.initial_backoff = settings.get("initial_backoff", self.INITIAL_BACKOFF)
        self.backoff_multiplier = settings.get("backoff_multiplier", self.BACKOFF_MULTIPLIER)
        self.transport = transport

    def is_transient(self, response: httpx.Response) -> bool:
        """Check if a response is worth retrying.

        GitHub reports an exhausted rate limit as 403 with
        ``x-ratelimit-remaining: 0`` and secondary limits as 403 with
        ``retry-after``; those are transient, other 403s are not.
        """
        if response.status_code in self.TRANSIENT_STATUS_CODES:
            return True
        if response.status_code == 403:
            return (
                response.headers.get("x-ratelimit-remaining") == "0"
                or "retry-after" in response.headers
            )
        return False

    def get(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        description: str = "lookup",
    ) -> httpx.Response:
        """GET ``url``, retrying transient failures.

        Raises:
            TransientLookupError: If every attempt failed transiently
        """
        backoff = self.initial_backoff
        last_error = ""

        with httpx.Client(
            timeout=self.timeout,
            transport=self.transport,
            headers={"User-Agent": USER_AGENT},
        ) as client:
            for attempt in range(self.max_retries):
                try:
                    response = client.get(url, headers=headers)
                except httpx.TransportError as e:
                    last_error = f"{type(e).__name__}: {e}"
                else:
                    if not self.is_transient(response):
                        return response
                    last_error = f"HTTP {response.status_code}"

                if attempt == self.max_retries - 1:
                    break

                logger.warning(
                    f"{description} failed (attempt {attempt + 1}/{self.max_retries}): "
                    f"{last_error}. Retrying in {backoff}s..."
                )
                time.sleep(backoff)
                backoff *= self.backoff_multiplier

        logger.error(f"{description} failed after {self.max_retries} attempts: {last_error}")
        raise TransientLookupError(
            f"{description} failed after {self.max_retries} attempts: {last_error}"
        )


def read_json(response: httpx.Response, description: str = "lookup") -> Any:
    """Decode a JSON response body.

    Raises:
        LookupFailedError: If the body isn't valid JSON
    """
    try:
        return response.json()
    except ValueError as e:
        raise LookupFailedError(f"{description} returned invalid JSON: {e}") from e

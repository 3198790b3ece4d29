"""
HTTP transport for the GitHub REST API.

Read-only GET requests with retry on transient failures and translation of
error responses into typed exceptions.
"""

import random
import time
from dataclasses import dataclass, field
from typing import Any

import httpx

from copyright_waiver import __version__
from copyright_waiver.exceptions import (
    APIError,
    NotFoundError,
    RateLimitedError,
    ServerError,
)
from copyright_waiver.logging import get_logger, log_http_request, log_http_response

GITHUB_API_VERSION = "2022-11-28"
DEFAULT_RATE_LIMIT_WAIT = 60

logger = get_logger("http")


@dataclass
class RetryConfig:
    """Retry policy for transient API failures."""

    max_retries: int = 3
    backoff_factor: float = 2.0
    retry_on: list[int] = field(default_factory=lambda: [429, 500, 502, 503])
    respect_retry_after: bool = True
    max_backoff: float = 60.0  # seconds; longer rate-limit waits are not retried
    jitter: float = 0.1  # fraction of the base wait, applied both ways


class HTTPTransport:
    """
    Synchronous httpx transport for the forge API.

    Retries 5xx responses, rate limiting and connection failures with
    exponential backoff. A rate limit that resets later than ``max_backoff``
    is raised immediately instead of stalling the run.
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 30.0,
        retry_config: RetryConfig | None = None,
    ) -> None:
        """
        Args:
            base_url: API root, e.g. "https://api.github.com"
            token: Optional API token, sent as a bearer token
            timeout: Request timeout in seconds
            retry_config: Retry policy (default: RetryConfig())
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_config = retry_config or RetryConfig()

        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
            "User-Agent": f"copyright-waiver/{__version__}",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            headers=headers,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HTTPTransport":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """
        GET ``path`` and return the decoded JSON body.

        Args:
            path: API path, e.g. "/users/octocat/repos"
            params: Query parameters

        Returns:
            Parsed JSON (object or array)

        Raises:
            NotFoundError: 404
            RateLimitedError: Rate limit still exhausted after retrying
            ServerError: 5xx or connection failure after retrying
            APIError: Any other error status, or a body that is not JSON
        """
        url = f"{self.base_url}{path}"
        attempt = 0

        while True:
            log_http_request("GET", url, params=params)
            started = time.monotonic()
            try:
                response = self._client.request("GET", path, params=params)
            except httpx.RequestError as e:
                if attempt >= self.retry_config.max_retries:
                    raise ServerError("CONNECTION_ERROR", f"GET {url}: {e}") from e
                delay = self._get_backoff_time(attempt, None)
                logger.warning("GET %s failed (%s), retrying in %.1fs", url, e, delay)
            else:
                if response.status_code < 400:
                    data = self._parse_body(response)
                    log_http_response(
                        response.status_code,
                        str(response.url),
                        elapsed_ms=(time.monotonic() - started) * 1000,
                        item_count=len(data) if isinstance(data, list) else None,
                    )
                    return data

                error = self._parse_error_response(response)
                if not self._should_retry(error, attempt):
                    raise error
                if isinstance(error, RateLimitedError):
                    delay = float(error.retry_after)
                else:
                    delay = self._get_backoff_time(attempt, response.headers.get("Retry-After"))
                logger.warning("%s, retrying in %.1fs", error, delay)

            time.sleep(delay)
            attempt += 1

    def _parse_body(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise APIError(
                "MALFORMED_RESPONSE",
                f"invalid JSON from {response.url}: {e}",
                response.status_code,
            ) from e

    def _should_retry(self, error: APIError, attempt: int) -> bool:
        if attempt >= self.retry_config.max_retries:
            return False
        if isinstance(error, RateLimitedError):
            return error.retry_after <= self.retry_config.max_backoff
        return error.status_code in self.retry_config.retry_on

    def _get_backoff_time(self, attempt: int, retry_after: str | None) -> float:
        """
        Seconds to wait before retry number ``attempt`` (0-indexed).

        A numeric Retry-After value wins when ``respect_retry_after`` is set;
        otherwise ``backoff_factor ** attempt`` with jitter, capped at
        ``max_backoff``.
        """
        if retry_after and self.retry_config.respect_retry_after:
            try:
                return float(retry_after)
            except ValueError:
                pass

        base_wait = self.retry_config.backoff_factor ** attempt
        spread = base_wait * self.retry_config.jitter
        return min(base_wait + random.uniform(-spread, spread), self.retry_config.max_backoff)

    def _rate_limit_wait(self, response: httpx.Response) -> int:
        """Seconds until the rate limit lifts, from Retry-After or X-RateLimit-Reset."""
        retry_after = response.headers.get("Retry-After")
        if retry_after:
            try:
                return int(retry_after)
            except ValueError:
                return DEFAULT_RATE_LIMIT_WAIT

        reset = response.headers.get("X-RateLimit-Reset")
        if reset:
            try:
                return max(1, int(reset) - int(time.time()))
            except ValueError:
                return DEFAULT_RATE_LIMIT_WAIT

        return DEFAULT_RATE_LIMIT_WAIT

    def _parse_error_response(self, response: httpx.Response) -> APIError:
        """Map an error response onto the exception hierarchy."""
        try:
            data = response.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            data = {}

        status_code = response.status_code
        message = data.get("message") or f"HTTP {status_code}"
        message = f"{message} ({response.request.method} {response.url})"

        if status_code == 404:
            return NotFoundError("NOT_FOUND", message, status_code)

        # GitHub reports an exhausted primary rate limit as 403
        exhausted = response.headers.get("X-RateLimit-Remaining") == "0"
        if status_code == 429 or (status_code == 403 and exhausted):
            return RateLimitedError(
                "RATE_LIMITED", message, self._rate_limit_wait(response), status_code
            )

        if status_code >= 500:
            return ServerError("SERVER_ERROR", message, status_code)

        return APIError("REQUEST_FAILED", message, status_code)

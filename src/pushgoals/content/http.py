"""Project content backed by a raw-file HTTP API, with tenacity retry.

Reads configuration from constructor arguments or environment variables.
Retry of transient failures lives here, not in the engine.
"""

from __future__ import annotations

import logging
import os

import httpx
import tenacity

from pushgoals.exceptions import ContentAccessError

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}
_AUTH_ERROR_STATUS_CODES = {401, 403}


class _RetryableStatus(Exception):
    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"HTTP {status_code}")


def _is_retryable(exc: BaseException) -> bool:
    """Retryable: 429, 5xx, connection errors and timeouts."""
    if isinstance(exc, _RetryableStatus):
        return True
    return isinstance(exc, (httpx.ConnectError, httpx.TimeoutException))


class HttpProject:
    """Async httpx accessor for ``{base_url}/{path}`` raw-file endpoints.

    A 404 means the file does not exist. Authentication failures fail
    immediately; transient errors are retried with exponential backoff and
    surface as ContentAccessError once attempts are exhausted.

    Usage::

        async with HttpProject("https://raw.example.com/acme/shop/main") as project:
            ctx = PushContext.create(repo, "main", sha, project)
            plan = await engine.resolve(ctx)
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        token: str | None = None,
        ref: str | None = None,
        timeout: float = 30.0,
        max_retries: int = 3,
        retry_wait: float = 1.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the accessor.

        Args:
            base_url: Root URL of the raw-file API. Falls back to
                PUSHGOALS_CONTENT_BASE_URL.
            token: Bearer token. Falls back to PUSHGOALS_CONTENT_TOKEN.
            ref: Optional commit or branch sent as the ``ref`` query parameter.
            timeout: Request timeout in seconds.
            max_retries: Maximum attempts for retryable errors.
            retry_wait: Backoff multiplier in seconds (0 disables waiting).
            client: Pre-built client; it is not closed by this accessor.

        Raises:
            ContentAccessError: If no base URL is provided or configured.
        """
        base = base_url or os.environ.get("PUSHGOALS_CONTENT_BASE_URL", "")
        if not base:
            raise ContentAccessError(
                "",
                "no base URL; pass base_url= or set PUSHGOALS_CONTENT_BASE_URL",
            )
        self._base_url = base.rstrip("/")
        self._ref = ref
        self._max_retries = max_retries
        self._retry_wait = retry_wait
        token = token or os.environ.get("PUSHGOALS_CONTENT_TOKEN")
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout, headers=headers)

    async def __aenter__(self) -> HttpProject:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def file_exists(self, path: str) -> bool:
        return await self.get_content(path) is not None

    async def get_content(self, path: str) -> str | None:
        retryer = tenacity.AsyncRetrying(
            retry=tenacity.retry_if_exception(_is_retryable),
            wait=(
                tenacity.wait_exponential(multiplier=self._retry_wait, max=30)
                + tenacity.wait_random(0, self._retry_wait)
            ),
            stop=tenacity.stop_after_attempt(self._max_retries),
            before_sleep=tenacity.before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        try:
            return await retryer(self._fetch, path)
        except _RetryableStatus as exc:
            raise ContentAccessError(
                path, f"HTTP {exc.status_code} after {self._max_retries} attempts"
            ) from exc
        except httpx.HTTPError as exc:
            raise ContentAccessError(path, f"{type(exc).__name__}: {exc}") from exc

    async def _fetch(self, path: str) -> str | None:
        """Execute a single request (no retry)."""
        params = {"ref": self._ref} if self._ref else None
        response = await self._client.get(
            f"{self._base_url}/{path.lstrip('/')}", params=params
        )
        if response.status_code == 404:
            return None
        if response.status_code in _AUTH_ERROR_STATUS_CODES:
            raise ContentAccessError(
                path, f"authentication failed: HTTP {response.status_code}"
            )
        if response.status_code in _RETRYABLE_STATUS_CODES:
            raise _RetryableStatus(response.status_code)
        response.raise_for_status()
        return response.text

"""GitHub REST API client using httpx."""

import logging
import threading
from datetime import datetime, timezone

import httpx

from .exceptions import GitHubApiError, MalformedResponseError, RateLimitError, format_reset_time
from .retry import retry_with_backoff
from .settings import Settings

logger = logging.getLogger(__name__)

# Warn once the remaining quota drops below this many requests
RATE_LIMIT_LOW_WATER = 10


class GitHubApiClient:
    """Thin uncached client for the GitHub REST API.

    Every call is a fresh round trip. Transport errors are retried with
    linear backoff; HTTP errors are mapped onto the exceptions module.
    """

    def __init__(self, settings: Settings):
        headers = {
            "User-Agent": settings.user_agent,
            "Accept": "application/vnd.github.v3+json",
        }
        if settings.github_token:
            headers["Authorization"] = f"Bearer {settings.github_token}"
        self._client = httpx.Client(headers=headers, timeout=settings.request_timeout)
        self._api_base = settings.api_base.rstrip("/")
        self._retries = settings.retries
        self._retry_delay = settings.retry_delay
        self.calls = 0
        self._calls_lock = threading.Lock()

    def _count_call(self) -> None:
        with self._calls_lock:
            self.calls += 1

    def _url(self, path_or_url: str) -> str:
        if path_or_url.startswith(("http://", "https://")):
            return path_or_url
        return f"{self._api_base}/{path_or_url.lstrip('/')}"

    def get(self, path_or_url: str, params: dict | None = None, retries: int | None = None):
        """GET a JSON resource.

        Args:
            path_or_url: API path (e.g. "repos/owner/repo/contents") or a full URL
            params: Query parameters dict
            retries: Attempt budget for transport errors (default from settings)

        Returns:
            Parsed JSON body, or None when GitHub answers 404.
        """
        url = self._url(path_or_url)

        def _do_fetch():
            self._count_call()
            return self._client.get(url, params=params)

        resp = retry_with_backoff(
            _do_fetch,
            max_attempts=self._retries if retries is None else retries,
            base_delay=self._retry_delay,
            retry_on=(httpx.TransportError,),
        )
        self._check_quota(resp)

        if resp.status_code == 200:
            try:
                return resp.json()
            except ValueError as e:
                raise MalformedResponseError(f"Invalid JSON response from {url}") from e

        if resp.status_code == 404:
            return None

        if resp.status_code in (403, 429):
            raise RateLimitError(resp.status_code, resp.text, reset_at=_parse_reset(resp))

        raise GitHubApiError(resp.status_code, resp.text)

    def fetch_raw(self, url: str) -> str | None:
        """Download a file's raw text; None when it cannot be fetched."""
        try:
            self._count_call()
            resp = self._client.get(url)
        except httpx.HTTPError as e:
            logger.warning("Could not download %s: %s", url, e)
            return None
        if resp.status_code != 200:
            logger.warning("Could not download %s: HTTP %s", url, resp.status_code)
            return None
        return resp.text

    def _check_quota(self, resp: httpx.Response) -> None:
        remaining = _parse_int_header(resp, "x-ratelimit-remaining")
        if remaining is not None and remaining < RATE_LIMIT_LOW_WATER:
            logger.warning(
                "GitHub rate limit nearly exhausted: %d requests left, resets at %s",
                remaining,
                format_reset_time(_parse_reset(resp)),
            )

    def close(self):
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


def _parse_int_header(resp: httpx.Response, name: str) -> int | None:
    val = resp.headers.get(name)
    if val is None:
        return None
    try:
        return int(val)
    except ValueError:
        return None


def _parse_reset(resp: httpx.Response) -> datetime | None:
    epoch = _parse_int_header(resp, "x-ratelimit-reset")
    if epoch is None:
        return None
    return datetime.fromtimestamp(epoch, tz=timezone.utc)

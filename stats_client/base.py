"""Base async HTTP client - one outbound call per lookup, no retries."""

import asyncio

import httpx
from loguru import logger

from settings import API_TIMEOUT, MAX_CONCURRENT, USER_AGENT
from stats_client.errors import FetchError, UpstreamError, UpstreamTimeout


class BaseClient:
    """Base async HTTP client with a concurrency cap.

    Retrying is the caller's job: a failed request raises immediately.
    """

    base_url = ""

    def __init__(
        self,
        max_concurrent: int = MAX_CONCURRENT,
        timeout: float = API_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client: httpx.AsyncClient | None = None
        self._sem = asyncio.Semaphore(max_concurrent)
        self._timeout = timeout
        self._transport = transport
        self._request_count = 0
        logger.info("{}: max_concurrent={}", self.__class__.__name__, max_concurrent)

    async def __aenter__(self):
        self.open()
        return self

    async def __aexit__(self, *_):
        await self.close()

    def open(self) -> None:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers={"User-Agent": USER_AGENT, **self._headers()},
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
                transport=self._transport,
            )

    async def close(self) -> None:
        logger.info("{}: total requests {}", self.__class__.__name__, self._request_count)
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def request_count(self) -> int:
        return self._request_count

    def _headers(self) -> dict[str, str]:
        return {}

    async def _request(self, url: str, params: dict | None = None) -> httpx.Response:
        """GET a URL, translating transport failures into fetch errors."""
        if self._client is None:
            self.open()
        async with self._sem:
            self._request_count += 1
            try:
                return await self._client.get(url, params=params)
            except httpx.TimeoutException as e:
                logger.warning("Timed out requesting {}: {}", url, e)
                raise UpstreamTimeout(f"Timed out contacting {httpx.URL(url).host}") from e
            except httpx.HTTPError as e:
                logger.warning("Request to {} failed: {}", url, e)
                raise UpstreamError(f"Couldn't reach {httpx.URL(url).host}") from e

    async def _get(self, path: str, params: dict | None = None) -> dict:
        """GET ``base_url/path`` and decode a JSON object, raising on non-2xx."""
        resp = await self._request(f"{self.base_url}/{path}", params)
        data = self._json(resp)
        if resp.is_error:
            raise self._status_error(resp, data)
        return data

    def _json(self, resp: httpx.Response) -> dict:
        try:
            data = resp.json()
        except ValueError as e:
            raise UpstreamError(f"Malformed response from {resp.url.host}", self._error_status(resp)) from e
        if not isinstance(data, dict):
            raise UpstreamError(f"Malformed response from {resp.url.host}", self._error_status(resp))
        return data

    @staticmethod
    def _error_status(resp: httpx.Response) -> int | None:
        return resp.status_code if resp.is_error else None

    def _status_error(self, resp: httpx.Response, data: dict) -> UpstreamError:
        cause = data.get("cause") or data.get("message") or f"{resp.url.host} responded {resp.status_code}"
        logger.warning("{} responded {}: {}", resp.url.host, resp.status_code, cause)
        return UpstreamError(str(cause), resp.status_code)


async def safe_request(coro, default=None):
    """Execute coroutine, return default on failure."""
    try:
        return await coro
    except FetchError as e:
        logger.warning("Request failed: {}", e)
        return default

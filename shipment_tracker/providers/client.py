"""Data providers - raw HTTP access to carrier tracking pages and APIs."""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import aiohttp
import httpx

from ..config import TrackerSettings, validate_fetch_options
from ..const import DATA_PROVIDER_ALT, DATA_PROVIDER_CUSTOM, DATA_PROVIDER_DEFAULT, RETRY_DELAY_BASE
from ..exceptions import FetchFailure, InvalidArgument

_LOGGER = logging.getLogger(__name__)


class DataProvider(ABC):
    """Interface every data provider implements.

    ``get`` fetches a page, ``request`` covers non-GET flows such as form or
    JSON posts. Both return the response body as text.
    """

    @abstractmethod
    async def get(self, url: str, options: Optional[Dict[str, Any]] = None) -> str:
        """Fetch a URL and return the response body."""

    async def request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        data: Optional[Any] = None,
        json: Optional[Any] = None,
    ) -> str:
        raise NotImplementedError


class AiohttpClient(DataProvider):
    """Data provider backed by aiohttp, with retries for transient errors."""

    def __init__(
        self,
        settings: Optional[TrackerSettings] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Timeout, retry and user agent configuration
            session: Optional aiohttp session (a temporary one is created per request otherwise)
        """
        self._settings = settings or TrackerSettings()
        self._session = session
        self._headers = {"User-Agent": self._settings.user_agent}
        self._timeout = aiohttp.ClientTimeout(total=self._settings.timeout)

    def _is_retryable_error(self, err: Exception) -> bool:
        """Check if an error is retryable (transient network error)."""
        if isinstance(err, (aiohttp.ClientConnectorError, aiohttp.ServerTimeoutError, asyncio.TimeoutError)):
            return True
        if isinstance(err, aiohttp.ClientResponseError):
            return False
        if isinstance(err, aiohttp.ClientError):
            error_str = str(err).lower()
            if any(keyword in error_str for keyword in ["timeout", "dns", "connection", "network", "resolve"]):
                return True
        return False

    async def _request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        data: Optional[Any] = None,
        json: Optional[Any] = None,
        timeout: Optional[float] = None,
    ) -> str:
        """Make an HTTP request with retry logic.

        Raises:
            FetchFailure: On HTTP errors, or transport errors after retries are exhausted
        """
        use_temporary_session = self._session is None
        session = self._session or aiohttp.ClientSession()
        request_timeout = aiohttp.ClientTimeout(total=timeout) if timeout else self._timeout
        request_headers = {**self._headers, **(headers or {})}
        max_retries = self._settings.max_retries

        try:
            for attempt in range(max_retries):
                try:
                    _LOGGER.debug("%s %s (attempt %d/%d)", method, url, attempt + 1, max_retries)
                    async with session.request(
                        method,
                        url,
                        headers=request_headers,
                        data=data,
                        json=json,
                        timeout=request_timeout,
                    ) as response:
                        response.raise_for_status()
                        return await response.text()
                except (aiohttp.ClientError, asyncio.TimeoutError) as err:
                    if self._is_retryable_error(err) and attempt < max_retries - 1:
                        delay = RETRY_DELAY_BASE * (2 ** attempt)
                        _LOGGER.warning(
                            "Request to %s failed (attempt %d/%d): %s. Retrying in %d seconds...",
                            url,
                            attempt + 1,
                            max_retries,
                            err,
                            delay,
                        )
                        await asyncio.sleep(delay)
                        continue
                    _LOGGER.error("Request to %s failed: %s", url, err)
                    raise FetchFailure(url, str(err) or type(err).__name__) from err
        finally:
            if use_temporary_session:
                await session.close()

        raise FetchFailure(url, "no attempts made")

    async def get(self, url: str, options: Optional[Dict[str, Any]] = None) -> str:
        options = validate_fetch_options(options)
        return await self._request(
            "GET", url, headers=options.get("headers"), timeout=options.get("timeout")
        )

    async def request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        data: Optional[Any] = None,
        json: Optional[Any] = None,
    ) -> str:
        return await self._request(method, url, headers=headers, data=data, json=json)


class HttpxClient(DataProvider):
    """Alternative data provider backed by httpx, without retries."""

    def __init__(
        self,
        settings: Optional[TrackerSettings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._settings = settings or TrackerSettings()
        self._client = client
        self._headers = {"User-Agent": self._settings.user_agent}

    async def _request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        data: Optional[Any] = None,
        json: Optional[Any] = None,
        timeout: Optional[float] = None,
    ) -> str:
        request_headers = {**self._headers, **(headers or {})}
        _LOGGER.debug("%s %s", method, url)

        try:
            if self._client is not None:
                response = await self._client.request(
                    method, url, headers=request_headers, data=data, json=json,
                    timeout=timeout or self._settings.timeout,
                )
            else:
                async with httpx.AsyncClient(follow_redirects=True) as client:
                    response = await client.request(
                        method, url, headers=request_headers, data=data, json=json,
                        timeout=timeout or self._settings.timeout,
                    )
            response.raise_for_status()
        except httpx.HTTPError as err:
            _LOGGER.error("Request to %s failed: %s", url, err)
            raise FetchFailure(url, str(err) or type(err).__name__) from err

        return response.text

    async def get(self, url: str, options: Optional[Dict[str, Any]] = None) -> str:
        options = validate_fetch_options(options)
        return await self._request(
            "GET", url, headers=options.get("headers"), timeout=options.get("timeout")
        )

    async def request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        data: Optional[Any] = None,
        json: Optional[Any] = None,
    ) -> str:
        return await self._request(method, url, headers=headers, data=data, json=json)


class ClientRegistry:
    """Name to data provider lookup used by trackers."""

    def __init__(self) -> None:
        self._clients: Dict[str, DataProvider] = {}

    def all(self) -> Dict[str, DataProvider]:
        return dict(self._clients)

    def register(self, name: str, client: DataProvider) -> "ClientRegistry":
        self._clients[name] = client
        return self

    def get(self, name: str) -> DataProvider:
        try:
            return self._clients[name]
        except KeyError:
            raise InvalidArgument(f"No data provider registered as [{name}]") from None

    def __contains__(self, name: str) -> bool:
        return name in self._clients


def build_client_registry(
    settings: Optional[TrackerSettings] = None,
    custom: Optional[DataProvider] = None,
) -> ClientRegistry:
    """Create a registry with the default providers and an optional custom one."""
    registry = ClientRegistry()
    registry.register(DATA_PROVIDER_DEFAULT, AiohttpClient(settings))
    registry.register(DATA_PROVIDER_ALT, HttpxClient(settings))

    if custom is not None:
        registry.register(DATA_PROVIDER_CUSTOM, custom)

    return registry

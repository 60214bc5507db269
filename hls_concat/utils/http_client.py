"""Shared HTTP helpers for playlist and segment downloads."""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Optional

import aiohttp
import requests

from ..errors import FetchError, FetchTimeout, TransportError

REAL_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_5) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)

DEFAULT_HEADERS: Dict[str, str] = {
    "user-agent": REAL_USER_AGENT,
    "accept": "*/*",
}

DEFAULT_TIMEOUT = 30.0


def _is_success(status: int) -> bool:
    return 200 <= status < 300


class HttpClient:
    """Fetches playlists synchronously and media segments asynchronously.

    Every request is bounded by ``timeout`` seconds. A non-2xx response raises
    :class:`FetchError`, connection failures raise :class:`TransportError` and
    timeouts raise :class:`FetchTimeout`.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, headers: Optional[Dict[str, str]] = None) -> None:
        self.timeout = timeout
        self._headers = DEFAULT_HEADERS.copy()
        if headers:
            self._headers.update(headers)

        self._session = requests.Session()
        self._session.headers.update(self._headers)

        self._async_session: Optional[aiohttp.ClientSession] = None
        self._async_lock: Optional[asyncio.Lock] = None

    def fetch_text(self, url: str) -> str:
        """Fetch a remote resource as text (e.g., m3u8)."""

        try:
            response = self._session.get(url, timeout=self.timeout)
        except requests.Timeout as exc:
            logging.error("Request to %s timed out: %s", url, exc)
            raise FetchTimeout(url, self.timeout) from exc
        except requests.RequestException as exc:
            logging.error("Request to %s failed: %s", url, exc)
            raise TransportError(url, str(exc)) from exc

        if not _is_success(response.status_code):
            logging.error("Request to %s returned status %s", url, response.status_code)
            raise FetchError(response.status_code, response.reason or "", url)
        # HLS playlists are always UTF-8, whatever the Content-Type says.
        return response.content.decode("utf-8")

    async def fetch_bytes(self, url: str) -> bytes:
        """Asynchronously download a remote resource (media segment) into memory."""

        session = await self._get_async_session()
        try:
            async with session.get(url) as resp:
                if not _is_success(resp.status):
                    raise FetchError(resp.status, resp.reason or "", url)
                buffer = bytearray()
                async for chunk in resp.content.iter_chunked(1 << 14):
                    if chunk:
                        buffer.extend(chunk)
                return bytes(buffer)
        except asyncio.TimeoutError as exc:
            raise FetchTimeout(url, self.timeout) from exc
        except aiohttp.ClientError as exc:
            raise TransportError(url, str(exc) or exc.__class__.__name__) from exc

    async def _get_async_session(self) -> aiohttp.ClientSession:
        if self._async_lock is None:
            self._async_lock = asyncio.Lock()

        async with self._async_lock:
            if self._async_session and not self._async_session.closed:
                return self._async_session
            timeout = aiohttp.ClientTimeout(total=self.timeout)
            # Concurrency is capped by the caller, not by the connector.
            connector = aiohttp.TCPConnector(limit=0)
            self._async_session = aiohttp.ClientSession(
                timeout=timeout,
                connector=connector,
                headers=self._headers.copy(),
            )
        return self._async_session

    async def aclose(self) -> None:
        """Close the aiohttp session from inside the loop that created it."""

        if self._async_session and not self._async_session.closed:
            await self._async_session.close()
        self._async_session = None
        self._async_lock = None

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

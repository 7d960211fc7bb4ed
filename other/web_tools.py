import asyncio
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

import aiohttp
from loguru import logger

DEFAULT_TIMEOUT = 10


@dataclass
class WebResponse:
    status: int
    data: Union[Dict[str, Any], str, bytes]
    headers: Optional[Dict[str, str]] = None
    elapsed_time: Optional[float] = None  # seconds

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class HTTPSessionManager:
    """Shared aiohttp session, recreated after ``max_session_duration`` seconds."""

    def __init__(self, timeout: int = DEFAULT_TIMEOUT):
        self.session: Optional[aiohttp.ClientSession] = None
        self.session_start_time: float = 0.0
        self.max_session_duration = 3600
        self.timeout = timeout
        self._lock = asyncio.Lock()

    async def get_session(self) -> aiohttp.ClientSession:
        async with self._lock:
            current_time = time.monotonic()
            if (
                    self.session is None
                    or self.session.closed
                    or current_time - self.session_start_time > self.max_session_duration
            ):
                if self.session and not self.session.closed:
                    await self.session.close()
                self.session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout))
                self.session_start_time = current_time
                logger.debug("HTTP session created")
            return self.session

    async def close(self):
        async with self._lock:
            if self.session and not self.session.closed:
                await self.session.close()
                logger.debug("HTTP session closed")

    async def get_web_request(
            self,
            method: str,
            url: str,
            json: Optional[Dict[str, Any]] = None,
            headers: Optional[Dict[str, str]] = None,
            data: Optional[Union[Dict[str, Any], str]] = None,
            return_type: Optional[str] = None,  # 'json', 'text' or 'bytes'
    ) -> WebResponse:
        """
        Perform a request on the shared session.

        A timeout is reported as a 408 response, transport errors are raised.
        """
        session = await self.get_session()
        start_time = time.monotonic()

        try:
            async with session.request(
                    method.upper(),
                    url,
                    json=json,
                    headers=headers,
                    data=data,
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                content_type = response.headers.get("Content-Type", "")
                elapsed_time = time.monotonic() - start_time

                if return_type == "bytes":
                    response_data = await response.read()
                elif "json" in content_type or return_type == "json":
                    response_data = await response.json(content_type=None)
                else:
                    response_data = await response.text()

                return WebResponse(
                    status=response.status,
                    data=response_data,
                    headers=dict(response.headers),
                    elapsed_time=elapsed_time,
                )
        except asyncio.TimeoutError:
            elapsed_time = time.monotonic() - start_time
            return WebResponse(status=408, data="Request timed out", elapsed_time=elapsed_time)
        except aiohttp.ClientError as e:
            raise Exception(f"Request to {url} failed: {e}") from e


http_session_manager = HTTPSessionManager()

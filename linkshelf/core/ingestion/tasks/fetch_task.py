"""
Link download task.

Downloads the content behind a URL and reports its MIME type.

Dependencies: httpx
System role: First stage of link ingestion pipeline
"""

import logging

import httpx

from linkshelf.core.exceptions import FetchError
from linkshelf.core.ingestion.bucket_paths import normalize_content_type

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class FetchTask:
    """Download link content over HTTP(S)."""

    def __init__(
        self,
        timeout: float = 30.0,
        max_content_bytes: int = 20 * 1024 * 1024,
        user_agent: str = "LinkShelf/0.1",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize fetch task.

        Args:
            timeout: Request timeout in seconds
            max_content_bytes: Largest body accepted
            user_agent: User-Agent header value
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self._timeout = httpx.Timeout(timeout)
        self._max_content_bytes = max_content_bytes
        self._headers = {"User-Agent": user_agent}
        self._transport = transport

    async def fetch(self, url: str) -> tuple[bytes, str]:
        """
        Download content from a URL.

        Args:
            url: Absolute http(s) URL

        Returns:
            tuple[bytes, str]: (content, normalized content type)

        Raises:
            FetchError: Non-2xx status, transport failure or oversized body
        """
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                headers=self._headers,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                async with client.stream("GET", url) as response:
                    if response.status_code >= 400:
                        raise FetchError(
                            f"Server answered {response.status_code} for {url}",
                            url=url,
                            status_code=response.status_code,
                        )
                    content = await self._read_limited(response, url)
                    content_type = (
                        normalize_content_type(response.headers.get("content-type"))
                        or DEFAULT_CONTENT_TYPE
                    )
        except FetchError:
            raise
        except httpx.HTTPError as e:
            raise FetchError(f"Failed to fetch {url}: {type(e).__name__}: {e}", url=url) from e

        logger.info(
            f"{__name__}:fetch - Downloaded {len(content)} bytes",
            extra={"url": url, "content_type": content_type},
        )
        return content, content_type

    async def _read_limited(self, response: httpx.Response, url: str) -> bytes:
        """Read the body, refusing anything past max_content_bytes."""
        declared = response.headers.get("content-length")
        if declared and declared.isdigit() and int(declared) > self._max_content_bytes:
            raise FetchError(
                f"Content too large: {declared} bytes (limit {self._max_content_bytes})",
                url=url,
            )

        body = bytearray()
        async for part in response.aiter_bytes():
            body.extend(part)
            if len(body) > self._max_content_bytes:
                raise FetchError(
                    f"Content exceeds {self._max_content_bytes} bytes",
                    url=url,
                )
        return bytes(body)

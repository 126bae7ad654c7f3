"""In-process transport built on httpx."""

from typing import Optional

import httpx

from claude_config.utils.errors import FetchError


class HttpxTransport:
    """Download files with an httpx AsyncClient.

    Each fetch is a single GET; failures are reported, never retried.
    """

    name = "httpx"

    def __init__(self, token: Optional[str] = None, timeout: float = 30.0):
        """Initialize the transport.

        Args:
            token: Optional GitHub token sent as a bearer token
            timeout: Request timeout in seconds
        """
        self.token = token
        self.timeout = timeout
        self._headers = {}
        if token:
            self._headers["Authorization"] = f"Bearer {token}"

    async def fetch(self, url: str) -> bytes:
        """Download url and return its body.

        Raises:
            FetchError: On a network error or a non-success status
        """
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.get(
                    url, headers=self._headers, follow_redirects=True
                )
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                status = e.response.status_code
                raise FetchError(url, f"HTTP {status} {e.response.reason_phrase}") from e
            except httpx.HTTPError as e:
                raise FetchError(url, str(e) or type(e).__name__) from e

        return response.content

"""Abstract interface for downloading a single remote file."""

from typing import Protocol


class Transport(Protocol):
    """Abstract interface for the backends that download manifest files."""

    name: str

    async def fetch(self, url: str) -> bytes:
        """Download url and return its body.

        Args:
            url: Absolute URL of the file

        Returns:
            The response body, byte for byte

        Raises:
            FetchError: If the file cannot be retrieved
        """
        ...

"""Transports for downloading manifest files."""

from claude_config.fetch.http_client import HttpxTransport
from claude_config.fetch.protocols import Transport
from claude_config.fetch.selector import (
    DEFAULT_TRANSPORTS,
    create_transport,
    is_available,
    select_transport,
)
from claude_config.fetch.tools import CurlTransport, WgetTransport

__all__ = [
    "CurlTransport",
    "DEFAULT_TRANSPORTS",
    "HttpxTransport",
    "Transport",
    "WgetTransport",
    "create_transport",
    "is_available",
    "select_transport",
]

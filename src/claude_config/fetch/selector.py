"""Pick a transport backend based on what is installed."""

import shutil
from typing import Optional, Sequence

from claude_config.config.schema import TransportKind
from claude_config.fetch.http_client import HttpxTransport
from claude_config.fetch.protocols import Transport
from claude_config.fetch.tools import CurlTransport, WgetTransport
from claude_config.utils.errors import MissingDependencyError

DEFAULT_TRANSPORTS = (TransportKind.CURL, TransportKind.WGET)

_COMMAND_TRANSPORTS = {
    TransportKind.CURL: CurlTransport,
    TransportKind.WGET: WgetTransport,
}


def is_available(kind: TransportKind) -> bool:
    """Check whether a transport can be used on this system.

    External clients must be on PATH; httpx ships with the package.
    """
    kind = TransportKind(kind)
    if kind is TransportKind.HTTPX:
        return True
    return shutil.which(kind.value) is not None


def create_transport(
    kind: TransportKind, token: Optional[str] = None, timeout: float = 30.0
) -> Transport:
    """Instantiate the transport for kind.

    Raises:
        MissingDependencyError: If kind is an external client not on PATH
    """
    kind = TransportKind(kind)
    if kind is TransportKind.HTTPX:
        return HttpxTransport(token=token, timeout=timeout)

    executable = shutil.which(kind.value)
    if executable is None:
        raise MissingDependencyError([kind.value])
    return _COMMAND_TRANSPORTS[kind](executable, token=token)


def select_transport(
    preferred: Sequence[TransportKind] = DEFAULT_TRANSPORTS,
    token: Optional[str] = None,
    timeout: float = 30.0,
) -> Transport:
    """Return the first available transport in order of preference.

    Args:
        preferred: Transport kinds to try, most preferred first
        token: Optional GitHub token passed to the transport
        timeout: Request timeout for the httpx transport

    Returns:
        A ready-to-use transport

    Raises:
        MissingDependencyError: If none of the preferred kinds is available
    """
    kinds = [TransportKind(k) for k in preferred]
    for kind in kinds:
        if is_available(kind):
            return create_transport(kind, token=token, timeout=timeout)

    raise MissingDependencyError([kind.value for kind in kinds])

"""Transports that shell out to an external HTTP client (curl or wget)."""

import asyncio
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from claude_config.utils.errors import FetchError


class CommandTransport(ABC):
    """Base class for transports that run a command and read its stdout.

    Subclasses provide the command line for a URL; the body is whatever the
    command writes to stdout, and a non-zero exit status is a failure.

    A token never appears on the command line. It is written to a private
    temporary file in the client's own format and the file is passed
    instead, so it does not show up in the process list.
    """

    name = "command"

    def __init__(self, executable: str, token: Optional[str] = None):
        """Initialize the transport.

        Args:
            executable: Path to the client binary
            token: Optional GitHub token sent as a bearer token
        """
        self.executable = executable
        self.token = token

    @abstractmethod
    def build_command(self, url: str, auth_file: Optional[Path] = None) -> list[str]:
        """Return the command line that downloads url to stdout."""

    @abstractmethod
    def auth_file_content(self) -> str:
        """Return the contents of the file carrying the token header."""

    async def fetch(self, url: str) -> bytes:
        """Run the client for url and return what it wrote to stdout.

        Raises:
            FetchError: If the client cannot be started or exits non-zero
        """
        if not self.token:
            return await self._run(url, self.build_command(url))

        # mkdtemp creates the directory readable by the owner only
        with tempfile.TemporaryDirectory(prefix="claude-config-") as tmp:
            auth_file = Path(tmp) / "auth"
            auth_file.write_text(self.auth_file_content(), encoding="utf-8")
            return await self._run(url, self.build_command(url, auth_file))

    async def _run(self, url: str, command: list[str]) -> bytes:
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise FetchError(url, f"could not run {self.name}: {e}") from e

        stdout, stderr = await process.communicate()

        if process.returncode != 0:
            detail = stderr.decode("utf-8", errors="replace").strip()
            raise FetchError(
                url, detail or f"{self.name} exited with status {process.returncode}"
            )

        return stdout


class CurlTransport(CommandTransport):
    """Download files with curl."""

    name = "curl"

    def build_command(self, url: str, auth_file: Optional[Path] = None) -> list[str]:
        # -f turns HTTP errors into a non-zero exit, -S keeps the message with -s
        command = [self.executable, "-fsSL"]
        if auth_file is not None:
            command += ["-H", f"@{auth_file}"]
        command.append(url)
        return command

    def auth_file_content(self) -> str:
        return f"Authorization: Bearer {self.token}\n"


class WgetTransport(CommandTransport):
    """Download files with wget."""

    name = "wget"

    def build_command(self, url: str, auth_file: Optional[Path] = None) -> list[str]:
        # -nv still reports "ERROR 404: Not Found" on stderr, unlike -q
        command = [self.executable, "-nv", "-O", "-"]
        if auth_file is not None:
            command.append(f"--config={auth_file}")
        command.append(url)
        return command

    def auth_file_content(self) -> str:
        # wgetrc syntax
        return f"header = Authorization: Bearer {self.token}\n"
